"""Interactive command shell for editing, calculating and saving measurements."""

from __future__ import annotations

import argparse
import cmd
import shlex
import sys
from collections.abc import Iterable
from typing import TextIO

from .calculated import add_calculated
from .errors_table import ErrorsColumn, ErrorsTable
from .manager import Manager
from .measurements_table import MeasurementsTable, Orientation
from .naming_table import NamingColumn, NamingTable
from . import storage

CLEAR_PROMPT = "Are you sure to clear all data?"
CLOSE_PROMPT = "Are you sure to close program?"
FORMULA_FAILED = "The formula is written incorrectly"
MAX_LISTED_ROWS = 6


def variables_prompt(count: int) -> str:
    """Question asked before deleting ``count`` variables."""
    if count == 1:
        return "Are you sure you want to delete this variable?"
    return f"Are you sure you want to delete these variables? ({count})"


def measurements_prompt(rows: Iterable[int]) -> str:
    """Question asked before deleting the measurements at 0-based ``rows``.

    The lowest few row numbers are listed; the rest are only counted.
    """
    ordered = sorted(set(rows))
    listed = ", ".join(str(row + 1) for row in ordered[:MAX_LISTED_ROWS])
    text = "Are you sure you want to delete these \nmeasurements: " + listed
    if len(ordered) <= MAX_LISTED_ROWS:
        return text + "?"
    return text + f", ... (and {len(ordered) - MAX_LISTED_ROWS} more) ?"


def _render_measurements(table: MeasurementsTable) -> str:
    columns = table.column_count()
    if columns == 0:
        return "(no data)"
    header = [""] + [
        str(table.header_data(column, Orientation.HORIZONTAL)).replace("\n", " ")
        for column in range(columns)
    ]
    lines = [header]
    for row in range(table.row_count()):
        lines.append(
            [str(table.header_data(row, Orientation.VERTICAL))]
            + [table.data(row, column) or "" for column in range(columns)]
        )
    widths = [max(len(line[i]) for line in lines) for i in range(len(header))]
    return "\n".join(
        "  ".join(cell.ljust(width) for cell, width in zip(line, widths)).rstrip()
        for line in lines
    )


class _Shell(cmd.Cmd):
    prompt = "datahandler> "

    def __init__(
        self, manager: Manager, stdin: TextIO, stdout: TextIO, assume_yes: bool
    ) -> None:
        super().__init__(stdin=stdin, stdout=stdout)
        self.use_rawinput = False
        self.manager = manager
        self.assume_yes = assume_yes
        self.measurements = MeasurementsTable(manager)
        self.naming = NamingTable(manager)
        self.errors = ErrorsTable(manager)

    def _say(self, text: str) -> None:
        self.stdout.write(text + "\n")

    def _confirm(self, question: str) -> bool:
        if self.assume_yes:
            return True
        self.stdout.write(f"{question} [y/N] ")
        self.stdout.flush()
        return self.stdin.readline().strip().lower() in ("y", "yes")

    def _args(self, arg: str, count: int | None = None) -> list[str] | None:
        try:
            args = shlex.split(arg)
        except ValueError as error:
            self._say(f"error: {error}")
            return None
        if count is not None and len(args) != count:
            self._say(f"error: expected {count} argument(s)")
            return None
        return args

    def _numbers(self, args: Iterable[str], limit: int, what: str) -> list[int] | None:
        try:
            indexes = sorted({int(text) - 1 for text in args}, reverse=True)
        except ValueError:
            self._say(f"error: {what} numbers must be whole numbers")
            return None
        if any(not 0 <= index < limit for index in indexes):
            self._say(f"error: no such {what}")
            return None
        return indexes

    def _column(self, text: str) -> int | None:
        numbers = self._numbers([text], self.manager.variables_count(), "column")
        return numbers[0] if numbers else None

    def emptyline(self) -> bool:
        return False

    def default(self, line: str) -> bool:
        self._say(f"unknown command: {line.split()[0]}")
        return False

    def do_show(self, arg: str) -> None:
        """show: print the measurements table."""
        self._say(_render_measurements(self.measurements))

    def do_vars(self, arg: str) -> None:
        """vars: list the variables with their tags and errors."""
        for row in range(self.naming.row_count()):
            title = self.naming.data(row, NamingColumn.TITLE)
            tag = self.naming.data(row, NamingColumn.TAG)
            kind = self.errors.data(row, ErrorsColumn.TYPE)
            value = self.errors.data(row, ErrorsColumn.VALUE)
            self._say(f"{row + 1}. {title} [{tag}] {kind} error {value:g}")

    def do_addcol(self, arg: str) -> None:
        """addcol: add an unnamed variable."""
        self.manager.create_new_variable()

    def do_addrow(self, arg: str) -> None:
        """addrow: add a measurement to every variable."""
        self.manager.add_measurements()

    def do_delcol(self, arg: str) -> None:
        """delcol N...: delete the variables in columns N."""
        args = self._args(arg)
        if not args:
            return
        indexes = self._numbers(args, self.manager.variables_count(), "column")
        if indexes and self._confirm(variables_prompt(len(indexes))):
            for index in indexes:
                self.manager.delete_variable(index)

    def do_delrow(self, arg: str) -> None:
        """delrow N...: delete the measurements in rows N."""
        args = self._args(arg)
        if not args:
            return
        indexes = self._numbers(args, self.manager.measurements_count(), "row")
        if indexes and self._confirm(measurements_prompt(indexes)):
            for index in indexes:
                self.manager.delete_measurements(index)

    def do_clear(self, arg: str) -> None:
        """clear: delete all data."""
        if self.manager.measurements_count() > 0 and self._confirm(CLEAR_PROMPT):
            self.manager.clear()

    def do_set(self, arg: str) -> None:
        """set ROW COLUMN VALUE: change one measurement."""
        args = self._args(arg, 3)
        if args is None:
            return
        rows = self._numbers([args[0]], self.measurements.row_count(), "row")
        column = self._column(args[1])
        if not rows or column is None:
            return
        if not self.measurements.set_data(rows[0], column, args[2]):
            self._say("error: the value was rejected")

    def _rename(self, arg: str, field: NamingColumn) -> None:
        args = self._args(arg, 2)
        if args is None:
            return
        column = self._column(args[0])
        if column is not None and not self.naming.set_data(column, field, args[1]):
            self._say("error: the name is already in use")

    def do_title(self, arg: str) -> None:
        """title COLUMN TEXT: rename a variable."""
        self._rename(arg, NamingColumn.TITLE)

    def do_tag(self, arg: str) -> None:
        """tag COLUMN TEXT: set a variable's tag."""
        self._rename(arg, NamingColumn.TAG)

    def do_error(self, arg: str) -> None:
        """error COLUMN Absolute|Relative VALUE: set a variable's error."""
        args = self._args(arg, 3)
        if args is None:
            return
        column = self._column(args[0])
        if column is None:
            return
        self.errors.set_data(column, ErrorsColumn.TYPE, args[1])
        if not self.errors.set_data(column, ErrorsColumn.VALUE, args[2]):
            self._say("error: the error value was rejected")

    def do_calc(self, arg: str) -> None:
        """calc NAME FORMULA: add or recalculate a calculated variable."""
        args = self._args(arg, 2)
        if args is None:
            return
        try:
            outcome = add_calculated(self.manager, args[0], args[1])
        except (ValueError, LookupError, ArithmeticError):
            self._say(FORMULA_FAILED)
            return
        self._say(outcome.message)

    def do_load(self, arg: str) -> None:
        """load PATH: replace the data with a CSV or JSON file."""
        args = self._args(arg, 1)
        if args is None:
            return
        try:
            storage.load(self.manager, args[0])
        except (OSError, ValueError) as error:
            self._say(f"error: {error}")

    def do_save(self, arg: str) -> None:
        """save PATH: write the data to a CSV or JSON file."""
        args = self._args(arg, 1)
        if args is None:
            return
        try:
            storage.save(self.manager, args[0])
        except (OSError, ValueError) as error:
            self._say(f"error: {error}")

    def do_quit(self, arg: str) -> bool:
        """quit: leave, asking first if there is data."""
        return self.manager.variables_count() == 0 or self._confirm(CLOSE_PROMPT)

    def do_EOF(self, arg: str) -> bool:
        self._say("")
        return True


def main(argv: list[str] | None = None) -> int:
    """Run the shell on standard input; returns the exit status."""
    parser = argparse.ArgumentParser(
        prog="datahandler", description="Edit, calculate and save measurements."
    )
    parser.add_argument("file", nargs="?", help="CSV or JSON file to load first")
    parser.add_argument(
        "-y", "--yes", action="store_true", help="answer yes to every question"
    )
    options = parser.parse_args(argv)

    manager = Manager()
    if options.file:
        try:
            storage.load(manager, options.file)
        except (OSError, ValueError) as error:
            print(f"datahandler: {error}", file=sys.stderr)
            return 1
    _Shell(manager, sys.stdin, sys.stdout, options.yes).cmdloop()
    return 0