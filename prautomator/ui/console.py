"""
Console output helpers.

User-facing status lines for the CLI. Diagnostics go through logging.
"""

import sys
from typing import Optional, TextIO

from prautomator.ui.colors import (
    ACCENT_FG,
    ERROR_FG,
    HEADING_FG,
    MUTED_FG,
    SUCCESS_FG,
    WARNING_FG,
    colorize,
)


def _emit(text: str, color: str, stream: Optional[TextIO]) -> None:
    print(colorize(text, color), file=stream or sys.stdout)


def print_heading(text: str, stream: Optional[TextIO] = None) -> None:
    _emit(text, HEADING_FG, stream)


def print_success(text: str, stream: Optional[TextIO] = None) -> None:
    _emit(text, SUCCESS_FG, stream)


def print_warning(text: str, stream: Optional[TextIO] = None) -> None:
    _emit(text, WARNING_FG, stream)


def print_error(text: str, stream: Optional[TextIO] = None) -> None:
    # Errors go to stderr unless told otherwise.
    _emit(text, ERROR_FG, stream or sys.stderr)


def print_muted(text: str, stream: Optional[TextIO] = None) -> None:
    _emit(text, MUTED_FG, stream)


def print_field(label: str, value: str, stream: Optional[TextIO] = None) -> None:
    """``label: value`` with the value highlighted."""
    print(f"{label}: {colorize(value, ACCENT_FG)}", file=stream or sys.stdout)


def accent(text: str) -> str:
    return colorize(text, ACCENT_FG)


def muted(text: str) -> str:
    return colorize(text, MUTED_FG)
