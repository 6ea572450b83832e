"""Plain-text tables with columns aligned by padding with spaces."""

from __future__ import annotations

from typing import Iterable, TextIO

_PADDING = 2


def _align_columns(text: str, padding: int = _PADDING) -> str:
    """Align tab-separated cells into columns.

    A cell belongs to a column only when a tab follows it; the last cell of a
    line is written as is. Columns are sized per block of consecutive lines
    that share the column.
    """
    pieces = text.split("\n")
    trailing = pieces.pop()
    lines = [piece.split("\t") for piece in pieces]
    if trailing:
        lines.append(trailing.split("\t"))
    ends_with_newline = not trailing

    out: list[str] = []
    widths: list[int] = []

    def write_lines(start: int, end: int) -> None:
        for number in range(start, end):
            cells = lines[number]
            out.append(
                "".join(
                    cell.ljust(widths[col]) if col < len(widths) else cell
                    for col, cell in enumerate(cells)
                )
            )
            if number < len(lines) - 1 or ends_with_newline:
                out.append("\n")

    def has_column(number: int, column: int) -> bool:
        return column < len(lines[number]) - 1

    def format_block(start: int, end: int) -> None:
        column = len(widths)
        current = start
        while current < end:
            if not has_column(current, column):
                current += 1
                continue
            write_lines(start, current)
            start = current
            width = 0
            while current < end and has_column(current, column):
                width = max(width, len(lines[current][column]) + padding)
                current += 1
            widths.append(width)
            format_block(start, current)
            widths.pop()
            start = current
        write_lines(start, end)

    format_block(0, len(lines))
    return "".join(out)


class Table:
    """A table with optional headers, rendered with aligned columns."""

    def __init__(self, w: TextIO, *headers: str) -> None:
        self._writer = w
        self.headers: list[str] = list(headers)
        self.rows: list[list[str]] = []

    def add_row(self, *args: str) -> None:
        """Append a row of cells."""
        self.rows.append(list(args))

    def render(self) -> None:
        """Write the table: headers, a dashed separator, then the rows."""
        lines: list[str] = []
        if self.headers:
            lines.append("\t".join(self.headers))
            lines.append("\t".join("-" * len(h) for h in self.headers))
        lines.extend("\t".join(row) for row in self.rows)
        text = "".join(line + "\n" for line in lines)
        if text:
            self._writer.write(_align_columns(text))

    def row_count(self) -> int:
        """Return the number of rows added."""
        return len(self.rows)


class TableBuilder:
    """Fluent construction of a Table."""

    def __init__(self, w: TextIO) -> None:
        self._table = Table(w)

    def headers(self, *args: str) -> TableBuilder:
        """Set the table headers."""
        self._table.headers = list(args)
        return self

    def row(self, *args: str) -> TableBuilder:
        """Add a row."""
        self._table.add_row(*args)
        return self

    def build(self) -> Table:
        """Return the configured table."""
        return self._table

    def render(self) -> None:
        """Write the table now."""
        self._table.render()


def simple_table(w: TextIO, headers: Iterable[str], rows: Iterable[Iterable[str]]) -> None:
    """Write headers and rows as an aligned table."""
    table = Table(w, *headers)
    for row in rows:
        table.add_row(*row)
    table.render()