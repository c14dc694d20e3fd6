"""Number formatting for the calculator display.

Results are shown without scientific notation: integral values drop the
decimal point, everything else is rounded to a fixed number of fractional
digits with trailing zeros stripped.
"""

from __future__ import annotations

import math

DEFAULT_PRECISION = 6


def format_result(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """Render a number for the display.

    Examples:
        8.0 → '8', 1/3 → '0.333333', 2.5 → '2.5'

    Args:
        value: Number to render.
        precision: Fractional digits kept before trailing zeros are stripped.

    Raises:
        ValueError: value is infinite or NaN.
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot format non-finite value: {value}")
    if precision < 0:
        raise ValueError(f"Precision must be non-negative, got {precision}")

    if float(value).is_integer():
        text = str(int(value))
    else:
        text = f"{value:.{precision}f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")

    # Tiny negatives round to "-0"
    if text in ("-0", ""):
        return "0"
    return text


def parse_operand(text: str) -> float:
    """Parse a display string into an operand.

    In-progress literals are valid: "0." parses as 0.0, "7." as 7.0.
    """
    return float(text)
