"""Parsing and element-wise evaluation of formulas over variables."""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Union

from .manager import Manager, get_instance


class FormulaError(ValueError):
    """Raised when a formula cannot be parsed or evaluated."""


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Name:
    name: str


@dataclass(frozen=True)
class Signed:
    sign: str
    operand: Node


@dataclass(frozen=True)
class Operation:
    operator: str
    operand: Node


@dataclass(frozen=True)
class Program:
    first: Node
    rest: tuple[Operation, ...] = ()


Node = Union[Number, Name, Signed, Program]

_SPACE = " \t\n\v\f\r"
_NUMBER = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|(?i:infinity|inf|nan))"
)
_NAME = re.compile(r"[A-Za-z]+[A-Za-z0-9_]*")


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def skip(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos] in _SPACE:
            self.pos += 1

    def char(self, symbol: str) -> bool:
        self.skip()
        if self.text.startswith(symbol, self.pos):
            self.pos += 1
            return True
        return False

    def expect(self, rule: Callable[[], Node | None], what: str) -> Node:
        node = rule()
        if node is None:
            raise FormulaError(f"expected {what} at position {self.pos}")
        return node

    def _chain(
        self, operand: Callable[[], Node | None], operators: str, what: str
    ) -> Node | None:
        first = operand()
        if first is None:
            return None
        rest = []
        while True:
            operator = next((op for op in operators if self.char(op)), None)
            if operator is None:
                break
            rest.append(Operation(operator, self.expect(operand, what)))
        return Program(first, tuple(rest)) if rest else first

    def additive(self) -> Node | None:
        return self._chain(self.multiplicative, "+-", "a term")

    def multiplicative(self) -> Node | None:
        return self._chain(self.power, "*/", "a factor")

    def power(self) -> Node | None:
        return self._chain(self.unary, "^", "an exponent")

    def unary(self) -> Node | None:
        node = self.primary()
        if node is not None:
            return node
        for sign in "-+":
            if self.char(sign):
                return Signed(sign, self.expect(self.primary, "an operand"))
        return None

    def primary(self) -> Node | None:
        self.skip()
        match = _NUMBER.match(self.text, self.pos)
        if match:
            self.pos = match.end()
            return Number(float(match.group()))
        match = _NAME.match(self.text, self.pos)
        if match:
            self.pos = match.end()
            return Name(match.group())
        if self.char("("):
            node = self.expect(self.additive, "an expression")
            if not self.char(")"):
                raise FormulaError(f"expected ')' at position {self.pos}")
            return node
        return None


def parse(text: str) -> Node:
    """Parse a formula into its syntax tree."""
    parser = _Parser(text)
    node = parser.additive()
    parser.skip()
    if node is None or parser.pos != len(text):
        raise FormulaError(f"incorrect formula at position {parser.pos}: {text!r}")
    return node


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value.is_integer() and int(value) % 2 == 1


def _divide(a: float, b: float) -> float:
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _power(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except OverflowError:
        return -math.inf if a < 0 and _is_odd_integer(b) else math.inf
    except ValueError:
        if a == 0:
            negative = math.copysign(1.0, a) < 0 and _is_odd_integer(b)
            return -math.inf if negative else math.inf
        return math.nan


_OPERATORS: dict[str, Callable[[float, float], float]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _divide,
    "^": _power,
}


def _apply(operator: str, lhs: list[float], rhs: list[float], count: int) -> list[float]:
    if len(lhs) < count or len(rhs) < count:
        raise FormulaError("operands have fewer values than there are measurements")
    function = _OPERATORS[operator]
    return [function(a, b) for a, b in zip(lhs[:count], rhs[:count])]


def evaluate(node: Node, manager: Manager | None = None) -> list[float]:
    """Evaluate a syntax tree element-wise over the manager's measurements."""
    if manager is None:
        manager = get_instance()
    match node:
        case Number(value):
            return [value] * manager.measurements_count()
        case Name(name):
            return list(manager.find(name).measurements)
        case Signed(sign, operand):
            values = evaluate(operand, manager)
            return [-v for v in values] if sign == "-" else values
        case Program(first, rest):
            state = evaluate(first, manager)
            for operation in rest:
                rhs = evaluate(operation.operand, manager)
                state = _apply(
                    operation.operator, state, rhs, manager.measurements_count()
                )
            return state
    raise FormulaError(f"cannot evaluate {node!r}")


def evaluate_formula(text: str, manager: Manager | None = None) -> list[float]:
    """Parse and evaluate a formula."""
    return evaluate(parse(text), manager)