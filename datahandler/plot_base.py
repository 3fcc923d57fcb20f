"""Kinds of plots and their colour themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class PlotKind(IntEnum):
    LINE = 0
    SCATTER = 1
    COLUMN = 2
    HISTOGRAM = 3
    SCATTER_2D = 4
    HISTOGRAM_2D = 5

    def has_options(self) -> bool:
        """Whether the plot has settings the user can choose."""
        return self in (PlotKind.HISTOGRAM, PlotKind.SCATTER_2D, PlotKind.HISTOGRAM_2D)


@dataclass(frozen=True)
class Theme:
    background: str
    tick_label_color: str | None = None


_DARK = Theme("#454545", "white")
_LIGHT = Theme("#ffffff", "black")
_DENSITY = Theme("#FFFF00")


def theme_for(kind: PlotKind, dark: bool) -> Theme:
    """Return the theme a plot of ``kind`` uses; density maps keep their own."""
    if PlotKind(kind) is PlotKind.HISTOGRAM_2D:
        return _DENSITY
    return _DARK if dark else _LIGHT