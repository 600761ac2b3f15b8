# prautomator/ui/__init__.py
"""
PR Automator UI Module
Exports for terminal output helpers.
"""

from . import colors
from .console import (
    accent,
    muted,
    print_error,
    print_field,
    print_heading,
    print_muted,
    print_success,
    print_warning,
)

__all__ = [
    "colors",
    "accent",
    "muted",
    "print_error",
    "print_field",
    "print_heading",
    "print_muted",
    "print_success",
    "print_warning",
]
