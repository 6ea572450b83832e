"""Terminal text styles shared by the interactive prompts."""

from __future__ import annotations

from dataclasses import dataclass

from harvestcli.output.colors import is_color_enabled

COLOR_PRIMARY = "12"
COLOR_SELECTED = "170"
COLOR_SUCCESS = "78"
COLOR_ERROR = "196"
COLOR_DIM = "240"
COLOR_HIGHLIGHT = "229"

_RESET = "\x1b[0m"


def _sgr(text: str, codes: list[str], enabled: bool) -> str:
    if not enabled or not codes:
        return text
    return f"\x1b[{';'.join(codes)}m{text}{_RESET}"


@dataclass(frozen=True)
class Style:
    """A text style: colour, weight, padding, border and margins.

    ``color`` forces colour on or off; when None it follows the terminal.
    """

    foreground: str | None = None
    bold: bool = False
    margin_top: int = 0
    margin_bottom: int = 0
    padding: tuple[int, int] = (0, 0)
    border: bool = False
    border_foreground: str | None = None
    color: bool | None = None

    def _use_color(self) -> bool:
        return is_color_enabled("auto") if self.color is None else self.color

    def render(self, text: str) -> str:
        """Return text with the style applied; lines are padded to equal width."""
        colored = self._use_color()
        lines = text.split("\n")
        width = max(len(line) for line in lines)

        codes: list[str] = []
        if self.bold:
            codes.append("1")
        if self.foreground:
            codes.append(f"38;5;{self.foreground}")

        vpad, hpad = self.padding
        inner = width + 2 * hpad
        block = [
            " " * hpad + _sgr(line.ljust(width), codes, colored) + " " * hpad
            for line in lines
        ]
        blank = " " * inner
        block = [blank] * vpad + block + [blank] * vpad

        if self.border:
            border_codes = (
                [f"38;5;{self.border_foreground}"] if self.border_foreground else []
            )
            side = _sgr("│", border_codes, colored)
            top = _sgr("╭" + "─" * inner + "╮", border_codes, colored)
            bottom = _sgr("╰" + "─" * inner + "╯", border_codes, colored)
            block = [top] + [side + line + side for line in block] + [bottom]
            inner += 2

        blank = " " * inner
        return "\n".join([blank] * self.margin_top + block + [blank] * self.margin_bottom)


TITLE_STYLE = Style(foreground=COLOR_PRIMARY, bold=True, margin_bottom=1)
SELECTED_STYLE = Style(foreground=COLOR_SELECTED, bold=True)
NORMAL_STYLE = Style()
DIM_STYLE = Style(foreground=COLOR_DIM)
ERROR_STYLE = Style(foreground=COLOR_ERROR, bold=True)
SUCCESS_STYLE = Style(foreground=COLOR_SUCCESS, bold=True)
SPINNER_STYLE = Style(foreground=COLOR_PRIMARY)
HELP_STYLE = Style(foreground=COLOR_DIM, margin_top=1)
BORDER_STYLE = Style(border=True, border_foreground=COLOR_DIM, padding=(0, 1))
HIGHLIGHT_STYLE = Style(foreground=COLOR_HIGHLIGHT, bold=True)
INPUT_STYLE = Style(foreground=COLOR_PRIMARY)
PROMPT_STYLE = Style(foreground=COLOR_SELECTED, bold=True)