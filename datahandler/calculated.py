"""Adding variables whose measurements are calculated from a formula."""

from __future__ import annotations

from enum import Enum

from .formula import evaluate, parse
from .manager import Manager
from .variable import ErrorOptions, Naming, Variable, VisualOptions


class CalculatedOutcome(Enum):
    """What adding a calculated variable did; values are user messages."""

    ADDED = "Calculated has been added"
    CHANGED = "Calculated has been changed"

    @property
    def message(self) -> str:
        return self.value


def add_calculated(manager: Manager, name: str, formula: str) -> CalculatedOutcome:
    """Add or recalculate the calculated variable ``name`` from ``formula``.

    Raises FormulaError for a malformed formula, UnknownVariableError for an
    unknown variable in it, and ValueError for an empty name or for a name
    that belongs to a measured variable.
    """
    if not name:
        raise ValueError("the calculated variable needs a name")
    program = parse(formula)
    if not manager.exists(name):
        manager.add_variable(
            Variable(
                evaluate(program, manager),
                Naming(name),
                VisualOptions(visible=False),
                ErrorOptions(),
                is_calculated=True,
            )
        )
        return CalculatedOutcome.ADDED
    existing = manager.find(name)
    if not existing.is_calculated:
        raise ValueError(f"cannot redefine measured variable {name!r}")
    existing.measurements = evaluate(program, manager)
    return CalculatedOutcome.CHANGED