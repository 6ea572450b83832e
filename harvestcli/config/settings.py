"""The main configuration file: JSON5 on read, indented JSON on write."""

from __future__ import annotations

import json
import math
import os
import re
import secrets
from dataclasses import dataclass, fields
from typing import Any

from harvestcli.config.paths import config_path, ensure_dir


class ConfigError(Exception):
    """Raised when configuration cannot be read, parsed or written."""


_MAP_FIELDS = ("account_aliases", "account_clients", "client_domains")


@dataclass
class ConfigFile:
    """Contents of the main configuration file."""

    default_account: str = ""
    account_aliases: dict[str, str] | None = None
    account_clients: dict[str, str] | None = None
    client_domains: dict[str, str] | None = None
    default_timezone: str = ""
    week_start: str = ""
    color: str = ""
    keyring_backend: str = ""
    contact_email: str = ""

    def init_maps(self) -> None:
        """Make sure every mapping field is a dict."""
        for name in _MAP_FIELDS:
            if getattr(self, name) is None:
                setattr(self, name, {})

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out empty fields."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value:
                result[f.name] = dict(value) if f.name in _MAP_FIELDS else value
        return result

    @classmethod
    def from_dict(cls, data: Any) -> ConfigFile:
        """Build a config from parsed JSON, checking the field types."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("config must be an object")
        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            value = data.get(f.name)
            if value is None:
                continue
            if f.name in _MAP_FIELDS:
                if not isinstance(value, dict) or not all(
                    isinstance(k, str) and isinstance(v, str) for k, v in value.items()
                ):
                    raise ConfigError(f"{f.name} must map strings to strings")
                kwargs[f.name] = dict(value)
            else:
                if not isinstance(value, str):
                    raise ConfigError(f"{f.name} must be a string")
                kwargs[f.name] = value
        return cls(**kwargs)


_SKIP = re.compile(r"(?:[\s\ufeff]+|//[^\n\r\u2028\u2029]*|/\*.*?\*/)+", re.S)
_NUMBER = re.compile(
    r"[+-]?(?:0[xX][0-9a-fA-F]+|Infinity|NaN|(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)"
)
_IDENT = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_IDENT_CHAR = re.compile(r"[A-Za-z0-9_$]")
_LITERALS = {"true": True, "false": False, "null": None}
_ESCAPES = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "0": "\0",
}
_LINE_BREAKS = "\n\r\u2028\u2029"


class _Json5Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def parse(self) -> Any:
        self._skip()
        value = self._value()
        self._skip()
        if self.pos < len(self.text):
            self._fail("unexpected trailing content")
        return value

    def _fail(self, message: str) -> None:
        raise ValueError(f"{message} at position {self.pos}")

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _skip(self) -> None:
        match = _SKIP.match(self.text, self.pos)
        if match:
            self.pos = match.end()
        if self.text.startswith("/*", self.pos):
            self._fail("unterminated comment")

    def _value(self) -> Any:
        ch = self._peek()
        if not ch:
            self._fail("unexpected end of input")
        if ch == "{":
            return self._object()
        if ch == "[":
            return self._array()
        if ch in "\"'":
            return self._string()
        match = _NUMBER.match(self.text, self.pos)
        if match and not _IDENT_CHAR.match(self.text, match.end()):
            self.pos = match.end()
            return self._number(match.group())
        match = _IDENT.match(self.text, self.pos)
        if match and match.group() in _LITERALS:
            self.pos = match.end()
            return _LITERALS[match.group()]
        self._fail(f"unexpected character {ch!r}")

    @staticmethod
    def _number(token: str) -> Any:
        sign = -1 if token.startswith("-") else 1
        body = token.lstrip("+-")
        if body[:2] in ("0x", "0X"):
            return sign * int(body, 16)
        if body == "Infinity":
            return sign * math.inf
        if body == "NaN":
            return math.nan
        if any(c in body for c in ".eE"):
            return float(token)
        return int(token)

    def _object(self) -> dict[str, Any]:
        self.pos += 1
        result: dict[str, Any] = {}
        while True:
            self._skip()
            ch = self._peek()
            if ch == "}":
                self.pos += 1
                return result
            if ch and ch in "\"'":
                key = self._string()
            else:
                match = _IDENT.match(self.text, self.pos)
                if not match:
                    self._fail("expected object key")
                key = match.group()
                self.pos = match.end()
            self._skip()
            if self._peek() != ":":
                self._fail("expected ':'")
            self.pos += 1
            self._skip()
            result[key] = self._value()
            self._skip()
            ch = self._peek()
            if ch == ",":
                self.pos += 1
            elif ch == "}":
                self.pos += 1
                return result
            else:
                self._fail("expected ',' or '}'")

    def _array(self) -> list[Any]:
        self.pos += 1
        result: list[Any] = []
        while True:
            self._skip()
            if self._peek() == "]":
                self.pos += 1
                return result
            result.append(self._value())
            self._skip()
            ch = self._peek()
            if ch == ",":
                self.pos += 1
            elif ch == "]":
                self.pos += 1
                return result
            else:
                self._fail("expected ',' or ']'")

    def _hex(self, count: int) -> str:
        digits = self.text[self.pos : self.pos + count]
        if len(digits) != count or not all(c in "0123456789abcdefABCDEF" for c in digits):
            self._fail("invalid hex escape")
        self.pos += count
        return chr(int(digits, 16))

    def _string(self) -> str:
        quote = self.text[self.pos]
        self.pos += 1
        parts: list[str] = []
        while True:
            if self.pos >= len(self.text):
                self._fail("unterminated string")
            ch = self.text[self.pos]
            if ch == quote:
                self.pos += 1
                break
            if ch in "\n\r":
                self._fail("unescaped line break in string")
            if ch != "\\":
                parts.append(ch)
                self.pos += 1
                continue
            self.pos += 1
            if self.pos >= len(self.text):
                self._fail("unterminated string")
            esc = self.text[self.pos]
            self.pos += 1
            if esc == "x":
                parts.append(self._hex(2))
            elif esc == "u":
                parts.append(self._hex(4))
            elif esc in _ESCAPES:
                parts.append(_ESCAPES[esc])
            elif esc in _LINE_BREAKS:
                if esc == "\r" and self._peek() == "\n":
                    self.pos += 1
            else:
                parts.append(esc)
        result = "".join(parts)
        try:
            return result.encode("utf-16-le", "surrogatepass").decode("utf-16-le")
        except UnicodeDecodeError:
            return result


def parse_json5(text: str) -> Any:
    """Parse a JSON5 document; raise ValueError when it is malformed."""
    return _Json5Parser(text).parse()


def _resolve_config_path() -> str:
    try:
        return config_path()
    except OSError as exc:
        raise ConfigError("could not determine config path") from exc


def read_config() -> ConfigFile:
    """Read the config file, or return an empty config if it is missing."""
    path = _resolve_config_path()
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except FileNotFoundError:
        return ConfigFile()
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"reading config: {exc}") from exc
    try:
        data = parse_json5(text)
    except ValueError as exc:
        raise ConfigError(f"parsing config: {exc}") from exc
    return ConfigFile.from_dict(data)


def write_config(cfg: ConfigFile) -> None:
    """Write the config to disk atomically with 0600 permissions."""
    try:
        ensure_dir()
    except OSError as exc:
        raise ConfigError(f"creating config dir: {exc}") from exc
    path = _resolve_config_path()
    data = json.dumps(cfg.to_dict(), indent=2, ensure_ascii=False)
    atomic_write(path, data.encode("utf-8"), 0o600)


def config_exists() -> bool:
    """Return True if the config file exists."""
    try:
        path = config_path()
    except OSError:
        return False
    return os.path.exists(path)


def atomic_write(path: str, data: bytes | str, mode: int) -> None:
    """Write data to a temporary file beside path, then rename it into place."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    directory = os.path.dirname(path)
    tmp_path = os.path.join(directory, ".tmp-" + secrets.token_hex(8))
    try:
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
    except OSError as exc:
        raise ConfigError(f"writing temp file: {exc}") from exc
    try:
        os.replace(tmp_path, path)
    except OSError as exc:
        try:
            os.remove(tmp_path)
        except OSError:
            pass
        raise ConfigError(f"renaming temp file: {exc}") from exc