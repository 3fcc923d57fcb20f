"""Collection of variables kept at equal length, with change notifications."""

from __future__ import annotations

import copy
from collections import defaultdict
from collections.abc import Callable, Iterator
from enum import Enum
from functools import lru_cache

from .variable import Variable


class ManagerEvent(Enum):
    VARIABLE_DELETED = "variable_deleted"
    VARIABLE_ADDED = "variable_added"
    MEASUREMENTS_DELETED = "measurements_deleted"
    MEASUREMENTS_ADDED = "measurements_added"


class UnknownVariableError(LookupError):
    """Raised when no variable has the requested title or tag."""


class Manager:
    """Holds the variables; every variable has the same number of measurements."""

    def __init__(self) -> None:
        self._variables: list[Variable] = []
        self._listeners: dict[ManagerEvent, list[Callable[[], None]]] = defaultdict(list)

    def connect(self, event: ManagerEvent, callback: Callable[[], None]) -> None:
        """Call ``callback`` with no arguments whenever ``event`` happens."""
        self._listeners[ManagerEvent(event)].append(callback)

    def _emit(self, event: ManagerEvent) -> None:
        for callback in list(self._listeners[event]):
            callback()

    def __len__(self) -> int:
        return len(self._variables)

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._variables)

    def add_variable(self, variable: Variable | None = None) -> bool:
        """Add a copy of ``variable``; names already in use are refused.

        Returns whether the variable was added.
        """
        if variable is None:
            variable = Variable()
        title = variable.naming.title
        if self.exists(title) and title != "unnamed":
            return False
        self._variables.append(copy.deepcopy(variable))
        if len(self._variables) == 1:
            if not variable.measurements:
                self.add_measurements()
            else:
                for _ in variable.measurements:
                    self._emit(ManagerEvent.MEASUREMENTS_ADDED)
        self.augment_variables()
        self._emit(ManagerEvent.VARIABLE_ADDED)
        return True

    def create_new_variable(self) -> bool:
        return self.add_variable(Variable())

    def add_measurements(self) -> None:
        """Append a zero measurement to every variable."""
        if not self._variables:
            self.add_variable()
        else:
            for variable in self._variables:
                variable.measurements.append(0.0)
        self._emit(ManagerEvent.MEASUREMENTS_ADDED)

    def delete_measurements(self, index: int = 0) -> None:
        if self.measurements_count() == 0:
            return
        for variable in self._variables:
            del variable.measurements[index]
        self._emit(ManagerEvent.MEASUREMENTS_DELETED)

    def delete_variable(self, index: int = 0) -> None:
        if not self._variables:
            return
        if len(self._variables) == 1:
            while self.measurements_count() != 0:
                self.delete_measurements()
        del self._variables[index]
        self._emit(ManagerEvent.VARIABLE_DELETED)

    def augment_variables(self) -> None:
        """Pad every variable with zeros up to the longest one."""
        count = self.measurements_count()
        for variable in self._variables:
            variable.measurements.extend([0.0] * (count - len(variable.measurements)))

    def variables_count(self) -> int:
        return len(self._variables)

    def measurements_count(self) -> int:
        return max((len(v.measurements) for v in self._variables), default=0)

    def variable(self, index: int) -> Variable:
        return self._variables[index]

    def find(self, name: str) -> Variable:
        """Return the first variable whose title or tag is ``name``."""
        for variable in self._variables:
            if name in (variable.naming.title, variable.naming.tag):
                return variable
        raise UnknownVariableError(f"undefined variable name: {name!r}")

    def exists(self, name: str) -> bool:
        return any(
            name in (variable.naming.title, variable.naming.tag)
            for variable in self._variables
        )

    def clear(self) -> None:
        while self._variables:
            self.delete_variable()


@lru_cache(maxsize=None)
def get_instance() -> Manager:
    """Return the application-wide manager."""
    return Manager()