"""Line-based yes/no, text and number prompts."""

from __future__ import annotations

import re
import sys
from typing import Callable

from harvestcli.ui.styles import DIM_STYLE, PROMPT_STYLE

Reader = Callable[[str], str]

_TEXT_LIMIT = 256
_NUMBER_LIMIT = 10
_FLOAT = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class Canceled(Exception):
    """Raised when the user cancels an interactive operation."""

    def __init__(self, message: str = "operation canceled") -> None:
        super().__init__(message)


def read_line(prompt: str) -> str:
    """Show prompt on stderr and read one line from stdin."""
    sys.stderr.write(prompt)
    sys.stderr.flush()
    line = sys.stdin.readline()
    if not line:
        raise EOFError
    return line.rstrip("\r\n")


def _ask(read: Reader | None, prompt: str) -> str:
    try:
        return (read or read_line)(prompt)
    except (EOFError, KeyboardInterrupt):
        raise Canceled() from None


def confirm_prompt(message: str, *, read: Reader | None = None) -> bool:
    """Ask a yes/no question; an empty answer means yes, "q" cancels."""
    prompt = f"{PROMPT_STYLE.render(message)} {DIM_STYLE.render('[Y/n]')} "
    while True:
        answer = _ask(read, prompt).strip().lower()
        if answer in ("", "y", "yes"):
            return True
        if answer in ("n", "no"):
            return False
        if answer in ("q", "esc"):
            raise Canceled()


def text_prompt(message: str, placeholder: str = "", *, read: Reader | None = None) -> str:
    """Ask for a line of text; the placeholder is shown but not returned."""
    hint = f" {DIM_STYLE.render(f'[{placeholder}]')}" if placeholder else ""
    prompt = f"{PROMPT_STYLE.render(message)}{hint} "
    return _ask(read, prompt)[:_TEXT_LIMIT]


def number_prompt(message: str, default: float, *, read: Reader | None = None) -> float:
    """Ask for a number; an empty answer gives the default."""
    prompt = f"{PROMPT_STYLE.render(message)} {DIM_STYLE.render(f'[{default:.2f}]')} "
    value = _ask(read, prompt)[:_NUMBER_LIMIT]
    if value == "":
        return default
    match = _FLOAT.match(value.lstrip(" \t"))
    if match is None:
        raise ValueError(f"invalid number: {value}")
    return float(match.group())