"""Data for the column plot: bars of all variables side by side."""

from __future__ import annotations

from dataclasses import dataclass, field

from .manager import Manager


@dataclass
class Bars:
    title: str
    color: str
    width: float
    x: list[float] = field(default_factory=list)
    y: list[float] = field(default_factory=list)


def column_bars(manager: Manager) -> list[Bars]:
    """One bar set per visible variable, grouped by measurement number."""
    count = manager.variables_count()
    if count == 0:
        return []
    width = 0.9 / count
    result = []
    for index, variable in enumerate(manager):
        if not variable.visual.visible or not variable.measurements:
            continue
        offset = 0.55 + index * width + 0.9 / (2 * count)
        bars = Bars(variable.naming.title, variable.visual.color, width)
        for number, value in enumerate(variable.measurements):
            if value:
                bars.x.append(number + offset)
                bars.y.append(value)
        result.append(bars)
    return result