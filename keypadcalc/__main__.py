"""CLI for the keypadcalc calculator.

Usage:
    python -m keypadcalc press 5 + 3 =           # Feed keys, show the display
    python -m keypadcalc press 12+3= --json      # Same, print state as JSON
    python -m keypadcalc repl                    # Interactive session
    python -m keypadcalc format 0.3333333333     # Format a number for display
    python -m keypadcalc keys                    # Show key bindings
"""

from __future__ import annotations

import json
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from keypadcalc.display import render_display, render_key_bindings, render_state
from keypadcalc.engine import Calculator
from keypadcalc.formatting import format_result
from keypadcalc.keys import UnknownKeyError, press, tokenize
from keypadcalc.settings import Settings, load_settings

app = typer.Typer(
    name="keypadcalc",
    help="Keypad-style arithmetic calculator",
    no_args_is_help=True,
)
console = Console(stderr=True)
out = Console()

_QUIT_WORDS = ("q", "quit", "exit")


def _settings(precision: Optional[int], verbose: bool) -> Settings:
    """Load settings from the environment and apply CLI overrides."""
    try:
        settings = load_settings()
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(1)
    if precision is not None:
        settings.precision = precision
    if verbose:
        settings.log_level = "DEBUG"
    _configure_logging(settings)
    return settings


def _configure_logging(settings: Settings) -> None:
    """Route keypadcalc log records to the stderr console."""
    logger = logging.getLogger("keypadcalc")
    logger.setLevel(settings.log_level_number)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=console, show_path=False))


def _new_calculator(settings: Settings) -> Calculator:
    return Calculator(
        precision=settings.precision,
        history_separator=settings.history_separator,
    )


@app.command("press")
def cmd_press(
    keys: list[str] = typer.Argument(help="Keys to press, e.g. '5 + 3 =' or '12x3='"),
    as_json: bool = typer.Option(False, "--json", help="Print the final state as JSON"),
    show_state: bool = typer.Option(False, "--state", "-s", help="Also print every state field"),
    precision: Optional[int] = typer.Option(None, "--precision", "-p", min=0, help="Fractional digits in results"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every transition"),
) -> None:
    """Press a sequence of keys on a fresh calculator."""
    settings = _settings(precision, verbose)
    calc = _new_calculator(settings)

    try:
        press(calc, tokenize(" ".join(keys)))
    except UnknownKeyError as e:
        console.print(f"[red]{e}[/red]. Run 'keypadcalc keys' for the key list.")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(calc.state.to_dict(), ensure_ascii=False))
        return
    render_display(calc, out)
    if show_state:
        render_state(calc, out)


@app.command("repl")
def cmd_repl(
    precision: Optional[int] = typer.Option(None, "--precision", "-p", min=0, help="Fractional digits in results"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every transition"),
) -> None:
    """Interactive session: type keys, one or more per line."""
    settings = _settings(precision, verbose)
    calc = _new_calculator(settings)

    console.print("[dim]Type keys and press return. 'keys' lists them, 'q' quits.[/dim]")
    render_display(calc, out)

    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        word = line.strip().lower()
        if word in _QUIT_WORDS:
            break
        if word == "keys":
            render_key_bindings(out)
            continue
        if not word:
            continue
        try:
            press(calc, tokenize(line))
        except UnknownKeyError as e:
            console.print(f"[yellow]{e}[/yellow]")
            continue
        render_display(calc, out)


@app.command("format")
def cmd_format(
    value: str = typer.Argument(help="Number to format, e.g. 0.3333333"),
    precision: Optional[int] = typer.Option(None, "--precision", "-p", min=0, help="Fractional digits"),
) -> None:
    """Format a number the way the display shows results."""
    settings = _settings(precision, verbose=False)
    try:
        text = format_result(float(value), settings.precision)
    except ValueError as e:
        console.print(f"[red]Cannot format {value!r}:[/red] {e}")
        raise typer.Exit(1)
    typer.echo(text)


@app.command("keys")
def cmd_keys() -> None:
    """Show the key bindings."""
    render_key_bindings(out)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
