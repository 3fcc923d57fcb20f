"""Data for the two-dimensional density map of two variables."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .manager import Manager

GRANULARITIES_2D = (10.0, 50.0, 200.0, 1000.0)
DEFAULT_GRANULARITY_2D = 50.0
GRADIENT = ((0.0, "#ffff00"), (0.5, "#ff0000"), (1.0, "#800080"))
MIN_BOX = 1e-300


def granularity_2d_for_index(index: int) -> float:
    """Return the granularity offered at ``index``; unknown positions get the default."""
    if 0 <= index < len(GRANULARITIES_2D):
        return GRANULARITIES_2D[index]
    return DEFAULT_GRANULARITY_2D


@dataclass
class DensityMap:
    """Counts of measurement pairs on a square grid centred on zero.

    ``cells[i][j]`` covers key ``i - granularity - 2`` and value
    ``j - granularity - 2``.
    """

    x_title: str
    y_title: str
    granularity: float
    size_box: float
    tick_scale: float
    cells: list[list[float]] = field(default_factory=list)

    @property
    def data_range(self) -> tuple[float, float]:
        return (-self.granularity - 2, self.granularity + 2)

    def tick_label(self, tick: float) -> str:
        """Label of an axis tick in the units of the measurements."""
        return f"{tick * self.tick_scale:.6g}"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class Histogram2D:
    """Density map settings: the two variables and the grid granularity."""

    def __init__(self, x_index: int = 0, y_index: int = 0, granularity: float = 10) -> None:
        if granularity < 1:
            raise ValueError("granularity must be at least 1")
        self.x_index = x_index
        self.y_index = y_index
        self.granularity = float(granularity)

    def compute(self, manager: Manager) -> DensityMap | None:
        """Build the density map; None when the chosen variables are unavailable."""
        if (
            self.x_index == -1
            or self.y_index == -1
            or manager.variables_count() <= max(self.x_index, self.y_index)
        ):
            return None
        variable_x = manager.variable(self.x_index)
        variable_y = manager.variable(self.y_index)
        xs, ys = variable_x.measurements, variable_y.measurements
        if not xs or not ys:
            return None
        pairs = list(zip(xs, ys))
        if not all(math.isfinite(a) and math.isfinite(b) for a, b in pairs):
            raise ValueError("measurements must be finite to build a density map")

        g = self.granularity
        size_box = max([MIN_BOX, *(max(abs(a), abs(b)) for a, b in pairs)])
        steps = int(g)
        side = 2 * steps + 2
        density = [[0.0] * side for _ in range(side)]
        scale = g / size_box
        for a, b in pairs:
            density[_round_half_up(a * scale + g)][_round_half_up(b * scale + g)] += 1

        grid = 2 * steps + 4
        cells = [[0.0] * grid for _ in range(grid)]
        for i in range(2 * steps + 1):
            for j in range(2 * steps + 1):
                cells[i + 2][j + 2] = density[i][j]

        return DensityMap(
            x_title=variable_x.naming.title,
            y_title=variable_y.naming.title,
            granularity=g,
            size_box=size_box,
            tick_scale=int(size_box / (g / 10)) / 10,
            cells=cells,
        )