"""Table of variable titles and tags: one row per variable."""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from .manager import Manager
from .measurements_table import BASE_FLAGS, ItemFlag, Orientation, Role, TableModel


class NamingColumn(IntEnum):
    TITLE = 0
    TAG = 1


_HEADERS = {
    NamingColumn.TITLE: "Title of variable",
    NamingColumn.TAG: "Tag of variable",
}


class NamingTable(TableModel):
    def __init__(self, manager: Manager) -> None:
        super().__init__(manager)

    def row_count(self) -> int:
        return self.manager.variables_count()

    def column_count(self) -> int:
        return len(NamingColumn)

    def data(self, row: int, column: int, role: Role = Role.DISPLAY) -> str | None:
        if role != Role.DISPLAY:
            return None
        naming = self.manager.variable(row).naming
        if column == NamingColumn.TITLE:
            return naming.title
        if column == NamingColumn.TAG:
            return naming.tag
        return None

    def set_data(
        self, row: int, column: int, value: Any, role: Role = Role.EDIT
    ) -> bool:
        """Rename a variable; names already used as a title or tag are refused."""
        naming = self.manager.variable(row).naming
        if role != Role.EDIT or column not in (NamingColumn.TITLE, NamingColumn.TAG):
            return False
        text = self._text(value)
        if self.manager.exists(text):
            return False
        if column == NamingColumn.TITLE:
            naming.title = text or "unnamed"
        else:
            naming.tag = text
        self._changed(row, column)
        return True

    def header_data(
        self, section: int, orientation: Orientation, role: Role = Role.DISPLAY
    ) -> int | str | None:
        if role != Role.DISPLAY:
            return None
        if orientation == Orientation.VERTICAL:
            return section + 1
        if orientation == Orientation.HORIZONTAL and section in (
            NamingColumn.TITLE,
            NamingColumn.TAG,
        ):
            return _HEADERS[NamingColumn(section)]
        return None

    def flags(self, row: int, column: int) -> ItemFlag:
        return BASE_FLAGS | ItemFlag.EDITABLE