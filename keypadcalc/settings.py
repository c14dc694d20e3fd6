"""Runtime settings for keypadcalc, read from the environment.

Self-contained — plain environment variables, no config files.
CLI options override whatever the environment provides.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from keypadcalc.formatting import DEFAULT_PRECISION

ENV_PREFIX = "KEYPADCALC_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    """Display and logging settings for one process."""

    precision: int = DEFAULT_PRECISION
    log_level: str = "WARNING"
    history_separator: str = "\n"

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level)


def _parse_precision(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}PRECISION must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{ENV_PREFIX}PRECISION must be non-negative, got {value}")
    return value


def _parse_log_level(raw: str) -> str:
    level = raw.strip().upper()
    if level not in _LOG_LEVELS:
        raise ValueError(
            f"{ENV_PREFIX}LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {raw!r}"
        )
    return level


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        env: Mapping to read from. Defaults to os.environ.

    Raises:
        ValueError: a variable is set to a malformed value.
    """
    env = os.environ if env is None else env
    settings = Settings()

    if f"{ENV_PREFIX}PRECISION" in env:
        settings.precision = _parse_precision(env[f"{ENV_PREFIX}PRECISION"])
    if f"{ENV_PREFIX}LOG_LEVEL" in env:
        settings.log_level = _parse_log_level(env[f"{ENV_PREFIX}LOG_LEVEL"])
    if f"{ENV_PREFIX}HISTORY_SEPARATOR" in env:
        # Allow "\n" to be written literally in shells
        settings.history_separator = env[f"{ENV_PREFIX}HISTORY_SEPARATOR"].replace("\\n", "\n")

    return settings
