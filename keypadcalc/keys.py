"""Keystroke vocabulary for hosts that drive the calculator from raw input.

Translates typed tokens ("7", ".", "×", "=", "backspace", "AC", ...) into the
engine operations. The CLI uses it for both `press` and `repl`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from keypadcalc.engine import Calculator
from keypadcalc.models import DECIMAL_POINT, DIGITS, OPERATOR_SYMBOLS


class KeyAction(str, Enum):
    """What a key does to the calculator."""

    DIGIT = "digit"
    DOT = "dot"
    OPERATOR = "operator"
    CALCULATE = "calculate"
    BACKSPACE = "backspace"
    RESET = "reset"


@dataclass(frozen=True)
class Key:
    """A resolved keystroke. value holds the digit or operator symbol."""

    action: KeyAction
    value: str = ""


class UnknownKeyError(ValueError):
    """Raised when a token does not name any calculator key."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Unknown key: {token!r}")
        self.token = token


# Named keys are matched case-insensitively
_NAMED_KEYS: dict[str, KeyAction] = {
    "=": KeyAction.CALCULATE,
    "enter": KeyAction.CALCULATE,
    "bs": KeyAction.BACKSPACE,
    "backspace": KeyAction.BACKSPACE,
    "del": KeyAction.BACKSPACE,
    "⌫": KeyAction.BACKSPACE,
    "c": KeyAction.RESET,
    "ac": KeyAction.RESET,
    "esc": KeyAction.RESET,
    "clear": KeyAction.RESET,
    "reset": KeyAction.RESET,
}

_DOT_KEYS = (DECIMAL_POINT, ",")

# (keys, description) rows for the `keys` command
KEY_BINDINGS: list[tuple[str, str]] = [
    ("0-9", "Enter a digit"),
    (". ,", "Decimal point"),
    ("+ - × * x / ÷ %", "Select an operator (chains on a typed second operand)"),
    ("= enter", "Calculate the pending operation"),
    ("bs backspace del ⌫", "Delete the last character"),
    ("c ac esc clear reset", "Reset the calculator"),
]


def resolve_key(token: str) -> Key:
    """Resolve a single token to a Key.

    Raises:
        UnknownKeyError: the token is not a calculator key.
    """
    if len(token) == 1 and token in DIGITS:
        return Key(KeyAction.DIGIT, token)
    if token in _DOT_KEYS:
        return Key(KeyAction.DOT, DECIMAL_POINT)
    if token.lower() in OPERATOR_SYMBOLS:
        return Key(KeyAction.OPERATOR, token)
    action = _NAMED_KEYS.get(token.lower())
    if action is None:
        raise UnknownKeyError(token)
    return Key(action)


def tokenize(line: str) -> list[Key]:
    """Split a line of input into keys.

    Whitespace separates words. A word that is itself a key (including named
    keys like 'backspace') is one keystroke; any other word is split into
    single-character keys, so '12+3=' is five keystrokes.

    Raises:
        UnknownKeyError: a character does not name a key.
    """
    keys: list[Key] = []
    for word in line.split():
        try:
            keys.append(resolve_key(word))
            continue
        except UnknownKeyError:
            if len(word) == 1:
                raise
        keys.extend(resolve_key(ch) for ch in word)
    return keys


def apply_key(calculator: Calculator, key: Key) -> str:
    """Dispatch one key to the matching engine operation."""
    if key.action is KeyAction.DIGIT:
        return calculator.input_digit(key.value)
    if key.action is KeyAction.DOT:
        return calculator.input_dot()
    if key.action is KeyAction.OPERATOR:
        return calculator.input_operator(key.value)
    if key.action is KeyAction.CALCULATE:
        return calculator.calculate()
    if key.action is KeyAction.BACKSPACE:
        return calculator.backspace()
    return calculator.reset()


def press(calculator: Calculator, keys: Iterable[Key]) -> str:
    """Feed keys to the calculator in order and return the final display."""
    display = calculator.current_value
    for key in keys:
        display = apply_key(calculator, key)
    return display
