"""Data for plotting one variable against another."""

from __future__ import annotations

from dataclasses import dataclass, field

from .manager import Manager
from .variable import LineType, PointShape


@dataclass
class Scatter2DData:
    """Point pairs and how to draw them; drawing settings come from the y variable."""

    x_title: str
    y_title: str
    color: str
    width: int
    point_shape: PointShape
    line_type: LineType
    x: list[float] = field(default_factory=list)
    y: list[float] = field(default_factory=list)


class ScatterPlot2D:
    """Which variables go on the horizontal and vertical axes."""

    def __init__(self, x_index: int = 0, y_index: int = 0) -> None:
        self.x_index = x_index
        self.y_index = y_index

    def compute(self, manager: Manager) -> Scatter2DData | None:
        """Pair the measurements; None when the chosen variables are unavailable."""
        if manager.variables_count() <= max(self.x_index, self.y_index):
            return None
        variable_x = manager.variable(self.x_index)
        variable_y = manager.variable(self.y_index)
        if not variable_x.measurements or not variable_y.measurements:
            return None
        visual = variable_y.visual
        shape = PointShape.DISC if visual.point_shape is PointShape.NONE else visual.point_shape
        count = len(variable_x.measurements)
        return Scatter2DData(
            x_title=variable_x.naming.title,
            y_title=variable_y.naming.title,
            color=visual.color,
            width=visual.width,
            point_shape=shape,
            line_type=visual.line_type,
            x=list(variable_x.measurements),
            y=list(variable_y.measurements[:count]),
        )