"""Measured variables together with their naming, plot and error settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum


class PointShape(Enum):
    """Marker shapes a variable may be drawn with; values are display labels."""

    NONE = "Standart"
    CROSS = "Cross"
    CIRCLE = "Circle"
    DISC = "Disc"
    SQUARE = "Square"
    DIAMOND = "Rhombus"
    STAR = "Star"
    CROSS_CIRCLE = "Cross circle"
    PLUS_CIRCLE = "Plus circle"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, label: str) -> PointShape:
        """Return the shape with this label, or the standard shape if unknown."""
        try:
            return cls(label)
        except ValueError:
            return cls.NONE


class LineType(Enum):
    """Line styles a variable may be drawn with; values are display labels."""

    SOLID = "Solid line"
    DASH = "Dash line"
    DOT = "Dot line"
    DASH_DOT = "Dash dot line"
    DASH_DOT_DOT = "Dash dot dot line"
    CUSTOM_DASH = "Random dash line"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, label: str) -> LineType:
        """Return the line type with this label, or a solid line if unknown."""
        try:
            return cls(label)
        except ValueError:
            return cls.SOLID


class ErrorType(IntEnum):
    """How the error value of a variable is interpreted."""

    ABSOLUTE = 0
    RELATIVE = 1


@dataclass
class Naming:
    title: str = "unnamed"
    tag: str = ""


@dataclass
class VisualOptions:
    visible: bool = True
    width: int = 1
    color: str = "#000000"
    point_shape: PointShape = PointShape.NONE
    line_type: LineType = LineType.SOLID


@dataclass
class ErrorOptions:
    value: float = 1.0
    type: ErrorType = ErrorType.ABSOLUTE


@dataclass
class Variable:
    """A named series of measurements."""

    measurements: list[float] = field(default_factory=list)
    naming: Naming = field(default_factory=Naming)
    visual: VisualOptions = field(default_factory=VisualOptions)
    error: ErrorOptions = field(default_factory=ErrorOptions)
    is_calculated: bool = False

    def __post_init__(self) -> None:
        self.measurements = [float(value) for value in self.measurements]

    def measurements_count(self) -> int:
        return len(self.measurements)