"""Table of error settings: one row per variable."""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from .manager import Manager
from .measurements_table import BASE_FLAGS, ItemFlag, Orientation, Role, TableModel
from .variable import ErrorType


class ErrorsColumn(IntEnum):
    TYPE = 0
    VALUE = 1


_HEADERS = {
    ErrorsColumn.TYPE: "Type of error",
    ErrorsColumn.VALUE: "Error",
}


def _number(value: Any) -> float | None:
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


class ErrorsTable(TableModel):
    error_types: dict[ErrorType, str] = {
        ErrorType.RELATIVE: "Relative",
        ErrorType.ABSOLUTE: "Absolute",
    }

    def __init__(self, manager: Manager) -> None:
        super().__init__(manager)

    def row_count(self) -> int:
        return self.manager.variables_count()

    def column_count(self) -> int:
        return len(ErrorsColumn)

    def data(
        self, row: int, column: int, role: Role = Role.DISPLAY
    ) -> str | float | None:
        if role != Role.DISPLAY:
            return None
        error = self.manager.variable(row).error
        if column == ErrorsColumn.TYPE:
            return self.error_types.get(error.type)
        if column == ErrorsColumn.VALUE:
            return error.value
        return None

    @classmethod
    def _type_for_label(cls, label: str) -> ErrorType:
        for error_type, text in cls.error_types.items():
            if text == label:
                return error_type
        return ErrorType.ABSOLUTE

    def set_data(
        self, row: int, column: int, value: Any, role: Role = Role.EDIT
    ) -> bool:
        """Change the error type or a non-negative error value."""
        if role != Role.EDIT:
            return False
        error = self.manager.variable(row).error
        if column == ErrorsColumn.TYPE:
            error.type = self._type_for_label(self._text(value))
        elif column == ErrorsColumn.VALUE:
            number = _number(value)
            if number is None or number < 0:
                return False
            error.value = number
        else:
            return False
        self._changed(row, column)
        return True

    def header_data(
        self, section: int, orientation: Orientation, role: Role = Role.DISPLAY
    ) -> str | None:
        if role != Role.DISPLAY:
            return None
        if orientation == Orientation.VERTICAL:
            return self.manager.variable(section).naming.title
        if orientation == Orientation.HORIZONTAL and section in (
            ErrorsColumn.TYPE,
            ErrorsColumn.VALUE,
        ):
            return _HEADERS[ErrorsColumn(section)]
        return None

    def flags(self, row: int, column: int) -> ItemFlag:
        return BASE_FLAGS | ItemFlag.EDITABLE