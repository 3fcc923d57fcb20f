"""Data for the scatter plot: unconnected points per visible variable."""

from __future__ import annotations

from .line_plot import Series
from .manager import Manager
from .variable import PointShape


def scatter_series(manager: Manager) -> list[Series]:
    """Point series; zero measurements are left out and the standard marker is a disc."""
    result = []
    for variable in manager:
        visual = variable.visual
        if not visual.visible:
            continue
        shape = PointShape.DISC if visual.point_shape is PointShape.NONE else visual.point_shape
        points = [
            (float(number), value)
            for number, value in enumerate(variable.measurements, start=1)
            if value
        ]
        result.append(
            Series(
                variable.naming.title,
                visual.color,
                visual.width,
                shape,
                visual.line_type,
                x=[x for x, _ in points],
                y=[y for _, y in points],
                connected=False,
            )
        )
    return result