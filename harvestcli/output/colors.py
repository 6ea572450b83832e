"""Optional ANSI colouring of terminal output."""

from __future__ import annotations

import os
import sys

_RESET = "\x1b[0m"


def _stdout_is_terminal() -> bool:
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def is_color_enabled(mode: str) -> bool:
    """Decide whether colour is wanted: "always", "never" or "auto"."""
    if mode == "always":
        return True
    if mode == "never":
        return False
    if not _stdout_is_terminal():
        return False
    if "NO_COLOR" in os.environ:
        return False
    if os.environ.get("TERM", "") == "dumb":
        return False
    return True


def _terminal_supports_color() -> bool:
    forced = os.environ.get("CLICOLOR_FORCE", "") not in ("", "0")
    if os.environ.get("NO_COLOR", ""):
        return False
    if os.environ.get("CLICOLOR") == "0" and not forced:
        return False
    if _stdout_is_terminal() and os.environ.get("TERM", "") != "dumb":
        return True
    return forced


class Colors:
    """Styles strings for the terminal when colour is enabled."""

    def __init__(self, mode: str = "auto") -> None:
        self._enabled = is_color_enabled(mode)
        self._styled = self._enabled and _terminal_supports_color()

    def enabled(self) -> bool:
        """Return whether colour is enabled."""
        return self._enabled

    def _style(self, s: str, code: str) -> str:
        if not self._styled:
            return s
        return f"\x1b[{code}m{s}{_RESET}"

    def success(self, s: str) -> str:
        """Green text."""
        return self._style(s, "32")

    def error(self, s: str) -> str:
        """Red text."""
        return self._style(s, "31")

    def warning(self, s: str) -> str:
        """Yellow text."""
        return self._style(s, "33")

    def dim(self, s: str) -> str:
        """Faint text."""
        return self._style(s, "2")

    def bold(self, s: str) -> str:
        """Bold text."""
        return self._style(s, "1")

    def cyan(self, s: str) -> str:
        """Cyan text."""
        return self._style(s, "36")

    def magenta(self, s: str) -> str:
        """Magenta text."""
        return self._style(s, "35")