"""Table view of the measurements: one column per variable."""

from __future__ import annotations

import math
from collections.abc import Callable
from enum import Flag, IntEnum
from typing import Any

from .manager import Manager
from .variable import ErrorType


class Role(IntEnum):
    DISPLAY = 0
    EDIT = 2
    BACKGROUND = 8
    CHECK_STATE = 10


class Orientation(IntEnum):
    HORIZONTAL = 1
    VERTICAL = 2


class ItemFlag(Flag):
    NONE = 0
    SELECTABLE = 1
    EDITABLE = 2
    USER_CHECKABLE = 16
    ENABLED = 32


BASE_FLAGS = ItemFlag.SELECTABLE | ItemFlag.ENABLED


class TableModel:
    """Shared plumbing: the manager behind the table and change listeners."""

    def __init__(self, manager: Manager) -> None:
        self.manager = manager
        self._listeners: list[Callable[[int, int], None]] = []

    def connect(self, callback: Callable[[int, int], None]) -> None:
        """Call ``callback(row, column)`` whenever a cell is changed."""
        self._listeners.append(callback)

    def _changed(self, row: int, column: int) -> None:
        for callback in list(self._listeners):
            callback(row, column)

    @staticmethod
    def _text(value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return _format_number(float(value))
        return str(value)


def _format_number(value: float) -> str:
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def _parse_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


class MeasurementsTable(TableModel):
    def __init__(self, manager: Manager) -> None:
        super().__init__(manager)

    def row_count(self) -> int:
        return self.manager.measurements_count()

    def column_count(self) -> int:
        return self.manager.variables_count()

    def data(self, row: int, column: int, role: Role = Role.DISPLAY) -> str | None:
        """Show a non-zero measurement with its error; zeros are shown blank."""
        variable = self.manager.variable(column)
        value = variable.measurements[row]
        if role != Role.DISPLAY or not value:
            return None
        if variable.error.type == ErrorType.ABSOLUTE:
            error = variable.error.value
        elif variable.error.type == ErrorType.RELATIVE:
            error = value * variable.error.value * 0.5
        else:
            return None
        return f"{_format_number(value)} ± {_format_number(error)}"

    def set_data(
        self, row: int, column: int, value: Any, role: Role = Role.EDIT
    ) -> bool:
        """Store a non-zero number; anything else is refused."""
        if role != Role.EDIT or value == "":
            return False
        number = _parse_number(value)
        if not number:
            return False
        self.manager.variable(column).measurements[row] = number
        self._changed(row, column)
        return True

    def header_data(
        self, section: int, orientation: Orientation, role: Role = Role.DISPLAY
    ) -> int | str | None:
        if role != Role.DISPLAY:
            return None
        if orientation == Orientation.VERTICAL:
            return section + 1
        variable = self.manager.variable(section)
        naming = variable.naming
        if naming.tag:
            return f"{naming.title}\n({naming.tag})"
        mark = " # " if variable.is_calculated else ""
        return f"{mark}{naming.title}{mark}"

    def flags(self, row: int, column: int) -> ItemFlag:
        if self.manager.variable(column).is_calculated:
            return BASE_FLAGS
        return BASE_FLAGS | ItemFlag.EDITABLE