"""ANSI colouring for error and warning messages.

Colours are used only when stdout is a TTY. ``NO_COLOR`` disables them,
``FORCE_COLOR`` enables them regardless (https://no-color.org/).
"""

from __future__ import annotations

import os
import re
import sys
from typing import Literal

_CODES = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
}

Style = Literal["reset", "bold", "dim", "cyan", "green", "yellow", "bright_red", "bright_green"]

_ANSI_RE = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")


def _detect_colors() -> bool:
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


# Decided once at import; tests patch this attribute
_USE_COLORS = _detect_colors()


def supports_color() -> bool:
    """Whether messages are coloured in this process."""
    return _USE_COLORS


def colorize(text: str, *styles: Style) -> str:
    """Wrap ``text`` in ANSI codes for ``styles`` when colours are enabled.

    Example:
        >>> colorize("block", "cyan")
        '\033[36mblock\033[0m'  # with colours
        'block'                 # without
    """
    if not _USE_COLORS or not styles:
        return text
    prefix = "".join(_CODES[style] for style in styles)
    return f"{prefix}{text}{_CODES['reset']}"


def strip_colors(text: str) -> str:
    """Remove ANSI escape sequences from ``text``."""
    return _ANSI_RE.sub("", text)


def error_code(text: str) -> str:
    return colorize(text, "bright_red", "bold")


def location(text: str) -> str:
    return colorize(text, "cyan")


def block_name(text: str) -> str:
    return colorize(text, "yellow")


def hint(text: str) -> str:
    return colorize(text, "green")


def suggestion(text: str) -> str:
    """Colour a "did you mean" candidate."""
    return colorize(text, "bright_green", "bold")


def dim_text(text: str) -> str:
    return colorize(text, "dim")


def format_error_header(code: str | None, message: str) -> str:
    """Prefix ``message`` with a coloured error code when one is given."""
    if code:
        return f"{error_code(code)}: {message}"
    return message
