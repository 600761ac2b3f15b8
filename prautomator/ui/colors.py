# prautomator/ui/colors.py
"""
PR Automator — Terminal Color System
ANSI color codes for status output
"""

import os

# ═══════════════════════════════════════════════════════════════
# PALETTE
# ═══════════════════════════════════════════════════════════════

ELECTRIC_CYAN = "\033[38;5;51m"    # Labels / values
DEEP_BLUE = "\033[38;5;39m"        # Section headings
MID_GRAY = "\033[38;5;250m"        # Muted hints / paths
GLITCH_RED = "\033[38;5;196m"      # Errors
GLITCH_GREEN = "\033[38;5;46m"     # Success
NEON_YELLOW = "\033[38;5;226m"     # Warnings / dry-run notices

RESET = "\033[0m"

# ═══════════════════════════════════════════════════════════════
# SEMANTIC COLOR ROLES
# ═══════════════════════════════════════════════════════════════

HEADING_FG = DEEP_BLUE
ACCENT_FG = ELECTRIC_CYAN
MUTED_FG = MID_GRAY
ERROR_FG = GLITCH_RED
SUCCESS_FG = GLITCH_GREEN
WARNING_FG = NEON_YELLOW


def colors_enabled() -> bool:
    """Honour the NO_COLOR convention (https://no-color.org)."""
    return not os.environ.get("NO_COLOR")


def colorize(text: str, color: str) -> str:
    """Apply color to text"""
    if not colors_enabled():
        return text
    return f"{color}{text}{RESET}"
