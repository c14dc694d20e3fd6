"""keypadcalc — keypad-style arithmetic calculator.

A small input-state machine: digits and a decimal point build the display,
one operator is held pending, and results chain left to right. A typer CLI
drives it from typed keys and renders the display with Rich.

Usage:
    python -m keypadcalc press 5 + 3 =      # One-shot key sequence
    python -m keypadcalc repl               # Interactive session
"""

from keypadcalc.engine import Calculator
from keypadcalc.formatting import format_result
from keypadcalc.models import CalculatorState, Operator

__all__ = ["Calculator", "CalculatorState", "Operator", "format_result"]
