"""Data for the histogram of one variable."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .manager import Manager

GRANULARITIES = (10, 100, 1000)
MIN_COLUMN_SIZE = 0.001


def granularity_for_index(index: int) -> int:
    """Return the number of columns offered at position ``index`` of the options."""
    if not 0 <= index < len(GRANULARITIES):
        raise ValueError(f"no granularity at index {index}")
    return 10 ** (index + 1)


@dataclass
class HistogramData:
    """Column centres and counts of one variable's measurements."""

    title: str
    color: str
    width: float
    x: list[float] = field(default_factory=list)
    y: list[int] = field(default_factory=list)


class Histogram:
    """Histogram settings: which variable to count and into how many columns."""

    def __init__(self, variable_index: int = 0, granularity: int = 10) -> None:
        if granularity <= 0:
            raise ValueError("granularity must be positive")
        self.variable_index = variable_index
        self.granularity = granularity

    def compute(self, manager: Manager) -> HistogramData | None:
        """Count measurements per column; None when there is nothing to count."""
        if manager.variables_count() == 0:
            return None
        variable = manager.variable(self.variable_index)
        values = variable.measurements
        if not values:
            return None
        if not all(math.isfinite(value) for value in values):
            raise ValueError("measurements must be finite to build a histogram")
        low, high = min(values), max(values)
        size = max(MIN_COLUMN_SIZE, (high - low) / self.granularity)
        result = HistogramData(variable.naming.title, variable.visual.color, size)
        start = low
        while start <= high:
            end = start + size
            result.x.append(start + size / 2.0)
            result.y.append(sum(1 for value in values if start <= value < end))
            start = end
        return result