"""Data for the line plot: one series per visible variable."""

from __future__ import annotations

from dataclasses import dataclass, field

from .manager import Manager
from .variable import ErrorType, LineType, PointShape


@dataclass
class Series:
    """Points of one variable, with how they should be drawn."""

    title: str
    color: str
    width: int
    point_shape: PointShape
    line_type: LineType
    x: list[float] = field(default_factory=list)
    y: list[float] = field(default_factory=list)
    errors: list[float] = field(default_factory=list)
    connected: bool = True


def line_series(manager: Manager) -> list[Series]:
    """Series with error bars; zero measurements are left out."""
    result = []
    for variable in manager:
        visual = variable.visual
        if not visual.visible:
            continue
        series = Series(
            variable.naming.title,
            visual.color,
            visual.width,
            visual.point_shape,
            visual.line_type,
        )
        error = variable.error
        for number, value in enumerate(variable.measurements, start=1):
            if not value:
                continue
            series.x.append(float(number))
            series.y.append(value)
            if error.type == ErrorType.ABSOLUTE:
                series.errors.append(error.value)
            elif error.type == ErrorType.RELATIVE:
                series.errors.append(value * error.value * 0.5)
        result.append(series)
    return result