"""Tests for keystroke resolution and dispatch."""

import pytest

from keypadcalc.engine import Calculator
from keypadcalc.keys import Key, KeyAction, UnknownKeyError, press, resolve_key, tokenize


# --- resolve_key ---

@pytest.mark.parametrize("token,expected", [
    ("7", Key(KeyAction.DIGIT, "7")),
    (".", Key(KeyAction.DOT, ".")),
    (",", Key(KeyAction.DOT, ".")),
    ("×", Key(KeyAction.OPERATOR, "×")),
    ("x", Key(KeyAction.OPERATOR, "x")),
    ("%", Key(KeyAction.OPERATOR, "%")),
    ("=", Key(KeyAction.CALCULATE)),
    ("Enter", Key(KeyAction.CALCULATE)),
    ("backspace", Key(KeyAction.BACKSPACE)),
    ("⌫", Key(KeyAction.BACKSPACE)),
    ("AC", Key(KeyAction.RESET)),
    ("c", Key(KeyAction.RESET)),
])
def test_resolve_key(token, expected):
    assert resolve_key(token) == expected


@pytest.mark.parametrize("token", ["?", "12", "sqrt", ""])
def test_resolve_key_unknown(token):
    with pytest.raises(UnknownKeyError):
        resolve_key(token)


def test_unknown_key_error_is_value_error():
    with pytest.raises(ValueError) as exc:
        resolve_key("?")
    assert exc.value.token == "?"


# --- tokenize ---

def test_tokenize_spaced_keys():
    keys = tokenize("5 + 3 =")
    assert [k.action for k in keys] == [
        KeyAction.DIGIT, KeyAction.OPERATOR, KeyAction.DIGIT, KeyAction.CALCULATE,
    ]


def test_tokenize_splits_packed_words():
    keys = tokenize("12+3=")
    assert [k.value for k in keys] == ["1", "2", "+", "3", ""]


def test_tokenize_named_keys_are_single():
    keys = tokenize("12 backspace enter")
    assert keys[-2] == Key(KeyAction.BACKSPACE)
    assert keys[-1] == Key(KeyAction.CALCULATE)


def test_tokenize_empty_line():
    assert tokenize("   ") == []


def test_tokenize_unknown_character():
    with pytest.raises(UnknownKeyError):
        tokenize("12?3")


# --- press ---

def test_press_end_to_end():
    calc = Calculator()
    assert press(calc, tokenize("5 + 3 =")) == "8"
    assert press(calc, tokenize("× 2 =")) == "16"
    assert calc.history == "5 + 3 = 8\n8 × 2 = 16"


def test_press_division_by_zero():
    calc = Calculator()
    assert press(calc, tokenize("9/0=")) == "Error"


def test_press_backspace_and_reset():
    calc = Calculator()
    assert press(calc, tokenize("123 bs")) == "12"
    assert press(calc, tokenize("ac")) == "0"


def test_press_no_keys_returns_display():
    calc = Calculator()
    calc.input_digit("4")
    assert press(calc, []) == "4"
