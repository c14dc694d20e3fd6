"""Keypadcalc display — renders calculator state as Rich panels and tables.

The display panel shows the history trail above the current value, the way
a handheld calculator shows the running expression over the result line.
"""

from __future__ import annotations

import math

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from keypadcalc.engine import Calculator
from keypadcalc.keys import KEY_BINDINGS


def _pending_line(calc: Calculator) -> str:
    """The 'first op' line shown while an operation is pending."""
    if calc.operator is None or calc.first_operand is None:
        return ""
    if not math.isfinite(calc.first_operand):
        return calc.operator.symbol
    return f"{calc.format_result(calc.first_operand)} {calc.operator.symbol}"


def build_display(calc: Calculator) -> Panel:
    """Build the display panel for a calculator."""
    lines = []
    if calc.history:
        lines.append(Text(calc.history, style="dim", justify="right"))
    pending = _pending_line(calc)
    if pending:
        lines.append(Text(pending, style="cyan", justify="right"))

    value_style = "bold red" if calc.state.is_error else "bold"
    lines.append(Text(calc.current_value, style=value_style, justify="right"))

    return Panel(Group(*lines), title="keypadcalc", width=40)


def render_display(calc: Calculator, console: Console) -> None:
    """Print the display panel."""
    console.print(build_display(calc))


def render_state(calc: Calculator, console: Console) -> None:
    """Print every state field as a two-column table."""
    table = Table(title="State", show_header=True, header_style="bold")
    table.add_column("Field", style="dim", min_width=20)
    table.add_column("Value", min_width=12)

    for name, value in calc.state.to_dict().items():
        if value is None:
            shown = "[dim]--[/dim]"
        elif value == "":
            shown = "[dim](empty)[/dim]"
        else:
            shown = str(value)
        table.add_row(name, shown)

    console.print(table)


def render_key_bindings(console: Console) -> None:
    """Print the key bindings table."""
    table = Table(title="Keys", show_header=True, header_style="bold")
    table.add_column("Keys", style="green", min_width=16)
    table.add_column("Action", min_width=30)

    for keys, description in KEY_BINDINGS:
        table.add_row(keys, description)

    console.print()
    console.print(table)
    console.print()
