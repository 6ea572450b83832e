"""Output modes and writers for JSON, tab-separated and table output."""

from __future__ import annotations

import dataclasses
import json
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import date
from enum import Enum
from typing import Any, Iterable, Iterator, TextIO

from harvestcli.output.table import Table


class Mode(Enum):
    """How command output is formatted."""

    TABLE = 0
    JSON = 1
    PLAIN = 2

    def __str__(self) -> str:
        return self.name.lower()


_current_mode: ContextVar[Mode] = ContextVar("output_mode", default=Mode.TABLE)


def mode_from_flags(json_flag: bool, plain_flag: bool) -> Mode:
    """Pick the mode from command flags; JSON wins over plain."""
    if json_flag:
        return Mode.JSON
    if plain_flag:
        return Mode.PLAIN
    return Mode.TABLE


@contextmanager
def output_mode(mode: Mode) -> Iterator[Mode]:
    """Make mode the current output mode within the block."""
    token = _current_mode.set(mode)
    try:
        yield mode
    finally:
        _current_mode.reset(token)


def get_mode() -> Mode:
    """Return the current output mode, TABLE by default."""
    return _current_mode.get()


def _encode_default(obj: Any) -> Any:
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    raise TypeError(f"object of type {type(obj).__name__} is not JSON serializable")


def write_json(w: TextIO, v: Any) -> None:
    """Write v as JSON indented by two spaces, followed by a newline."""
    w.write(json.dumps(v, indent=2, ensure_ascii=False, default=_encode_default))
    w.write("\n")


def write_tsv(
    w: TextIO, headers: Iterable[str] | None, rows: Iterable[Iterable[str]]
) -> None:
    """Write rows as tab-separated lines, headers first when given."""
    headers = list(headers or ())
    if headers:
        w.write("\t".join(headers) + "\n")
    for row in rows:
        w.write("\t".join(row) + "\n")


@dataclasses.dataclass
class Formatter:
    """Writes data in one output mode."""

    writer: TextIO
    mode: Mode = Mode.TABLE

    def output(
        self,
        v: Any,
        headers: Iterable[str] | None,
        rows: Iterable[Iterable[str]],
    ) -> None:
        """Write v as JSON, or headers and rows as TSV or a table."""
        if self.mode is Mode.JSON:
            write_json(self.writer, v)
        elif self.mode is Mode.PLAIN:
            write_tsv(self.writer, headers, rows)
        else:
            table = Table(self.writer, *(headers or ()))
            for row in rows:
                table.add_row(*row)
            table.render()