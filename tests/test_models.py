"""Tests for Operator and CalculatorState."""

import pytest

from keypadcalc.models import CalculatorState, Operator


# --- Operator ---

@pytest.mark.parametrize("symbol,expected", [
    ("+", Operator.ADD),
    ("-", Operator.SUBTRACT),
    ("×", Operator.MULTIPLY),
    ("*", Operator.MULTIPLY),
    ("x", Operator.MULTIPLY),
    ("X", Operator.MULTIPLY),
    ("/", Operator.DIVIDE),
    ("÷", Operator.DIVIDE),
    ("%", Operator.MODULUS),
])
def test_from_symbol(symbol, expected):
    assert Operator.from_symbol(symbol) is expected


def test_from_symbol_unknown():
    with pytest.raises(ValueError):
        Operator.from_symbol("^")


def test_display_symbols():
    assert [op.symbol for op in Operator] == ["+", "-", "×", "/", "%"]


def test_operator_is_string_valued():
    assert Operator.MULTIPLY == "multiply"


def test_apply():
    assert Operator.ADD.apply(5, 3) == 8
    assert Operator.SUBTRACT.apply(5, 3) == 2
    assert Operator.MULTIPLY.apply(5, 3) == 15
    assert Operator.DIVIDE.apply(6, 3) == 2
    assert Operator.MODULUS.apply(10, 3) == 1
    assert Operator.MODULUS.apply(-7, 3) == -1


def test_needs_nonzero_divisor():
    assert Operator.DIVIDE.needs_nonzero_divisor
    assert Operator.MODULUS.needs_nonzero_divisor
    assert not Operator.ADD.needs_nonzero_divisor


# --- CalculatorState ---

def test_default_state():
    s = CalculatorState()
    assert s.current_value == "0"
    assert s.first_operand is None
    assert s.operator is None
    assert s.history == ""
    assert not s.awaiting_new_operand
    assert not s.is_error
    assert not s.has_pending_operation


def test_clear_resets_in_place():
    s = CalculatorState("Error", 3.0, Operator.ADD, "1 + 1 = 2", True)
    s.clear()
    assert s == CalculatorState()


def test_to_dict_uses_display_symbol():
    s = CalculatorState(current_value="3", first_operand=8.0, operator=Operator.MULTIPLY)
    assert s.to_dict() == {
        "current_value": "3",
        "first_operand": 8.0,
        "operator": "×",
        "history": "",
        "awaiting_new_operand": False,
    }
