"""Table of drawing settings: one row per variable."""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Any

from .manager import Manager
from .measurements_table import BASE_FLAGS, ItemFlag, Orientation, Role, TableModel
from .variable import LineType, PointShape


class SettingsColumn(IntEnum):
    VISIBLE = 0
    WIDTH = 1
    POINT_SHAPE = 2
    LINE_TYPE = 3
    COLOR = 4


class _CheckState(IntEnum):
    UNCHECKED = 0
    PARTIALLY_CHECKED = 1
    CHECKED = 2


_HEADERS = {
    SettingsColumn.VISIBLE: "Visible",
    SettingsColumn.WIDTH: "Width",
    SettingsColumn.POINT_SHAPE: "Point shape",
    SettingsColumn.LINE_TYPE: "Line type",
    SettingsColumn.COLOR: "Color",
}


def _to_int(value: Any) -> int | None:
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return round(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


class PlotSettingsTable(TableModel):
    def __init__(self, manager: Manager) -> None:
        super().__init__(manager)

    def row_count(self) -> int:
        return self.manager.variables_count()

    def column_count(self) -> int:
        return len(SettingsColumn)

    def data(self, row: int, column: int, role: Role = Role.DISPLAY) -> Any:
        visual = self.manager.variable(row).visual
        if role == Role.BACKGROUND:
            return visual.color if column == SettingsColumn.COLOR else None
        if role == Role.CHECK_STATE:
            if column != SettingsColumn.VISIBLE:
                return None
            return _CheckState.CHECKED if visual.visible else _CheckState.UNCHECKED
        if role == Role.DISPLAY:
            if column == SettingsColumn.WIDTH:
                return visual.width
            if column == SettingsColumn.POINT_SHAPE:
                return visual.point_shape.label
            if column == SettingsColumn.LINE_TYPE:
                return visual.line_type.label
        return None

    def set_data(
        self, row: int, column: int, value: Any, role: Role = Role.EDIT
    ) -> bool:
        visual = self.manager.variable(row).visual
        if role == Role.CHECK_STATE:
            if column != SettingsColumn.VISIBLE:
                return False
            state = _to_int(value)
            if state is None or not _CheckState.UNCHECKED <= state <= _CheckState.CHECKED:
                return False
            visual.visible = state == _CheckState.CHECKED
            return True
        if role != Role.EDIT:
            return False
        if column == SettingsColumn.WIDTH:
            width = _to_int(value)
            if not width:
                return False
            visual.width = width
        elif column == SettingsColumn.POINT_SHAPE:
            visual.point_shape = PointShape.from_label(self._text(value))
        elif column == SettingsColumn.LINE_TYPE:
            visual.line_type = LineType.from_label(self._text(value))
        elif column == SettingsColumn.COLOR:
            visual.color = self._text(value)
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
        if orientation == Orientation.HORIZONTAL and 0 <= section < len(SettingsColumn):
            return _HEADERS[SettingsColumn(section)]
        return None

    def flags(self, row: int, column: int) -> ItemFlag:
        if column == SettingsColumn.VISIBLE:
            return ItemFlag.ENABLED | ItemFlag.USER_CHECKABLE | BASE_FLAGS
        return ItemFlag.EDITABLE | BASE_FLAGS