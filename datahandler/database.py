"""Storing measured variables as tables of an SQLite database."""

from __future__ import annotations

import math
import os
import sqlite3
from typing import Iterable, Union

from .manager import Manager
from .variable import Variable

PathLike = Union[str, os.PathLike]


def _quote(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def _format_value(value: float) -> str:
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


class MeasurementsDatabase:
    """A database with one single-column table of measurements per variable.

    Each table is named after the title of the variable stored in it.
    Measurements are kept as whole numbers, truncated towards zero.
    """

    def __init__(self, path: PathLike = "data.db") -> None:
        self.path = path
        self._connection = sqlite3.connect(os.fspath(path))

    def close(self) -> None:
        self._connection.close()

    def __enter__(self) -> MeasurementsDatabase:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def tables(self) -> list[str]:
        """Names of the stored tables, oldest first."""
        rows = self._connection.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY rowid"
        )
        return [name for (name,) in rows if not name.startswith("sqlite_")]

    def _values(self, name: str) -> list[float]:
        rows = self._connection.execute(f"SELECT * FROM {_quote(name)} ORDER BY rowid")
        return [float(row[0]) if row[0] is not None else 0.0 for row in rows]

    def add_variable(self, variable: Variable) -> bool:
        """Store ``variable`` unless a table with its title exists.

        Returns whether a table was created. Raises ValueError if a
        measurement is not finite.
        """
        title = variable.naming.title
        if title in self.tables():
            return False
        if not all(math.isfinite(value) for value in variable.measurements):
            raise ValueError("only finite measurements can be stored")
        table = _quote(title)
        with self._connection:
            self._connection.execute(f"CREATE TABLE {table} (measurements real)")
            self._connection.executemany(
                f"INSERT INTO {table} (measurements) VALUES (?)",
                [(int(value),) for value in variable.measurements],
            )
        return True

    def _selected(self, indexes: Iterable[int], names: list[str]) -> list[int]:
        return sorted({index for index in indexes if 0 <= index < len(names)})

    def delete_tables(self, indexes: Iterable[int]) -> None:
        """Drop the tables at the given positions; other positions are ignored."""
        names = self.tables()
        with self._connection:
            for index in reversed(self._selected(indexes, names)):
                self._connection.execute(f"DROP TABLE {_quote(names[index])}")

    def upload_to_manager(self, indexes: Iterable[int], manager: Manager) -> None:
        """Add the tables at the given positions to ``manager`` as unnamed variables."""
        names = self.tables()
        for index in self._selected(indexes, names):
            manager.add_variable(Variable(self._values(names[index])))

    def grid(self) -> tuple[list[str], list[list[str | None]]]:
        """Table names and rows of cell texts; missing cells are None."""
        names = self.tables()
        columns = [self._values(name) for name in names]
        height = max((len(column) for column in columns), default=0)
        rows = [
            [
                _format_value(column[row]) if row < len(column) else None
                for column in columns
            ]
            for row in range(height)
        ]
        return names, rows