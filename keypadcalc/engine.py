"""Keypadcalc engine — the calculator input-state machine.

State flow per session:
1. Digits and the decimal point build the display string
2. An operator captures the display as the first operand
3. Digits build the second operand
4. calculate() applies the pending operator and records the history line
5. A further operator either chains on the result or, if pressed while a
   second operand is being typed, computes the pending operation first

Division or modulus by zero puts the display into the "Error" state; digits,
the decimal point, backspace and reset recover from it, operators are ignored.
"""

from __future__ import annotations

import logging
import math
import threading
from typing import Optional

from keypadcalc.formatting import DEFAULT_PRECISION, format_result, parse_operand
from keypadcalc.models import (
    DECIMAL_POINT,
    DIGITS,
    ERROR_DISPLAY,
    INITIAL_DISPLAY,
    CalculatorState,
    Operator,
)

logger = logging.getLogger(__name__)


class Calculator:
    """One calculator session.

    Every public operation mutates ``state`` and returns the new display
    string. Operations are serialized on an instance lock so a host with
    several event threads still sees each one as atomic.
    """

    def __init__(
        self,
        precision: int = DEFAULT_PRECISION,
        history_separator: str = "\n",
    ) -> None:
        self.precision = precision
        self.history_separator = history_separator
        self.state = CalculatorState()
        self._lock = threading.RLock()

    # -----------------------------------------------------------------
    # Read-only views used by hosts
    # -----------------------------------------------------------------

    @property
    def current_value(self) -> str:
        return self.state.current_value

    @property
    def first_operand(self) -> Optional[float]:
        return self.state.first_operand

    @property
    def operator(self) -> Optional[Operator]:
        return self.state.operator

    @property
    def history(self) -> str:
        return self.state.history

    def format_result(self, value: float) -> str:
        """Format a number with this session's precision."""
        return format_result(value, self.precision)

    # -----------------------------------------------------------------
    # Operations
    # -----------------------------------------------------------------

    def input_digit(self, digit: str) -> str:
        """Append digits, or start a new number after an operator/result.

        A run of digits such as "10" is accepted and behaves like typing
        each digit in turn.

        Raises:
            ValueError: digit is empty or contains anything but '0'-'9'.
        """
        if not digit or any(ch not in DIGITS for ch in digit):
            raise ValueError(f"Expected digits, got {digit!r}")

        with self._lock:
            s = self.state
            if s.awaiting_new_operand or s.is_error:
                s.current_value = digit.lstrip("0") or INITIAL_DISPLAY
                s.awaiting_new_operand = False
            elif s.current_value == INITIAL_DISPLAY:
                s.current_value = digit.lstrip("0") or INITIAL_DISPLAY
            else:
                s.current_value += digit
            logger.debug("digit %s -> %s", digit, s.current_value)
            return s.current_value

    def input_dot(self) -> str:
        """Add a decimal point unless the display already has one."""
        with self._lock:
            s = self.state
            if s.awaiting_new_operand or s.is_error:
                s.current_value = INITIAL_DISPLAY + DECIMAL_POINT
                s.awaiting_new_operand = False
            elif DECIMAL_POINT not in s.current_value:
                s.current_value += DECIMAL_POINT
            logger.debug("dot -> %s", s.current_value)
            return s.current_value

    def input_operator(self, symbol: str) -> str:
        """Select the pending operator.

        If an operator is already pending and a second operand has been
        typed, the pending operation is computed first and its result
        becomes the new first operand.

        Raises:
            ValueError: symbol is not an operator key.
        """
        op = Operator.from_symbol(symbol)

        with self._lock:
            s = self.state
            if s.is_error:
                logger.debug("operator %s ignored in error state", op.symbol)
                return s.current_value

            if s.has_pending_operation and s.awaiting_new_operand:
                # No second operand yet: the new press replaces the old one
                s.operator = op
                logger.debug("operator replaced -> %s", op.symbol)
                return s.current_value

            if s.has_pending_operation:
                self._compute()
                if s.is_error:
                    return s.current_value

            value = parse_operand(s.current_value)
            if not math.isfinite(value):
                logger.info("operand out of range: %d characters", len(s.current_value))
                self._enter_error()
                return s.current_value

            s.first_operand = value
            s.operator = op
            s.awaiting_new_operand = True
            logger.debug("operator %s captured %s", op.symbol, s.current_value)
            return s.current_value

    def calculate(self) -> str:
        """Apply the pending operator. No-op when nothing is pending."""
        with self._lock:
            if self.state.has_pending_operation:
                self._compute()
            return self.state.current_value

    def backspace(self) -> str:
        """Delete the last character; never leaves the display empty."""
        with self._lock:
            s = self.state
            if s.is_error or len(s.current_value) <= 1:
                s.current_value = INITIAL_DISPLAY
            else:
                trimmed = s.current_value[:-1]
                s.current_value = INITIAL_DISPLAY if trimmed in ("-", "-0") else trimmed
            s.awaiting_new_operand = False
            logger.debug("backspace -> %s", s.current_value)
            return s.current_value

    def reset(self) -> str:
        """Clear the whole session."""
        with self._lock:
            self.state.clear()
            logger.debug("reset")
            return self.state.current_value

    # -----------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------

    def _compute(self) -> None:
        """Apply the pending operation to the display. Caller holds the lock."""
        s = self.state
        op = s.operator
        left = s.first_operand
        right = parse_operand(s.current_value)

        if not math.isfinite(right):
            logger.info("operand out of range: %d characters", len(s.current_value))
            self._enter_error()
            return

        if op.needs_nonzero_divisor and right == 0:
            logger.info("%s by zero: %s %s %s", op.value, left, op.symbol, right)
            self._enter_error()
            return

        try:
            text = self.format_result(op.apply(left, right))
        except (ValueError, OverflowError):
            logger.info("result overflow: %s %s %s", left, op.symbol, right)
            self._enter_error()
            return

        record = (
            f"{self.format_result(left)} {op.symbol} "
            f"{self.format_result(right)} = {text}"
        )
        s.history = f"{s.history}{self.history_separator}{record}" if s.history else record
        s.current_value = text
        s.first_operand = None
        s.operator = None
        s.awaiting_new_operand = True
        logger.debug("computed %s", record)

    def _enter_error(self) -> None:
        s = self.state
        s.current_value = ERROR_DISPLAY
        s.first_operand = None
        s.operator = None
        s.awaiting_new_operand = False
