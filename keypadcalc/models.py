"""Data models for the keypadcalc state machine.

Operator enum, CalculatorState — the typed structures that flow through
engine → display → CLI.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

DIGITS = "0123456789"
DECIMAL_POINT = "."
ERROR_DISPLAY = "Error"
INITIAL_DISPLAY = "0"


class Operator(str, Enum):
    """Binary operators the keypad can hold pending."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    MODULUS = "modulus"

    @property
    def symbol(self) -> str:
        """Symbol used in the display and the history trail."""
        return _DISPLAY_SYMBOLS[self]

    @property
    def needs_nonzero_divisor(self) -> bool:
        return self in (Operator.DIVIDE, Operator.MODULUS)

    @classmethod
    def from_symbol(cls, symbol: str) -> Operator:
        """Map a keypad symbol to an Operator.

        Accepts the display symbols plus the usual keyboard stand-ins
        ('*' and 'x' for multiply, '÷' for divide).

        Raises:
            ValueError: the symbol is not an operator key.
        """
        try:
            return _SYMBOL_ALIASES[symbol.strip().lower()]
        except KeyError:
            raise ValueError(f"Unknown operator symbol: {symbol!r}") from None

    def apply(self, left: float, right: float) -> float:
        """Apply the operator. Callers guard zero divisors beforehand."""
        if self is Operator.ADD:
            return left + right
        if self is Operator.SUBTRACT:
            return left - right
        if self is Operator.MULTIPLY:
            return left * right
        if self is Operator.DIVIDE:
            return left / right
        # Truncated remainder: the result takes the sign of the dividend
        return math.fmod(left, right)


_DISPLAY_SYMBOLS: dict[Operator, str] = {
    Operator.ADD: "+",
    Operator.SUBTRACT: "-",
    Operator.MULTIPLY: "×",
    Operator.DIVIDE: "/",
    Operator.MODULUS: "%",
}

_SYMBOL_ALIASES: dict[str, Operator] = {
    "+": Operator.ADD,
    "-": Operator.SUBTRACT,
    "×": Operator.MULTIPLY,
    "*": Operator.MULTIPLY,
    "x": Operator.MULTIPLY,
    "/": Operator.DIVIDE,
    "÷": Operator.DIVIDE,
    "%": Operator.MODULUS,
}

OPERATOR_SYMBOLS = tuple(_SYMBOL_ALIASES)


@dataclass
class CalculatorState:
    """Session state of one calculator.

    current_value is kept as the typed string so the display can show
    in-progress literals such as "0." exactly as entered.
    """

    current_value: str = INITIAL_DISPLAY
    first_operand: Optional[float] = None
    operator: Optional[Operator] = None
    history: str = ""
    awaiting_new_operand: bool = False

    @property
    def is_error(self) -> bool:
        return self.current_value == ERROR_DISPLAY

    @property
    def has_pending_operation(self) -> bool:
        return self.operator is not None and self.first_operand is not None

    def clear(self) -> None:
        """Reinitialize every field in place."""
        self.current_value = INITIAL_DISPLAY
        self.first_operand = None
        self.operator = None
        self.history = ""
        self.awaiting_new_operand = False

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "current_value": self.current_value,
            "first_operand": self.first_operand,
            "operator": self.operator.symbol if self.operator else None,
            "history": self.history,
            "awaiting_new_operand": self.awaiting_new_operand,
        }
