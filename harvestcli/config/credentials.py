"""OAuth client credentials stored as one JSON5 file per client."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any

from harvestcli.config.paths import clients_dir, ensure_clients_dir
from harvestcli.config.settings import ConfigError, atomic_write, parse_json5

DEFAULT_CLIENT_NAME = "default"

_CLIENT_NAME_CHARS = frozenset("abcdefghijklmnopqrstuvwxyz0123456789-_.")


def normalize_client_name_or_default(raw: str) -> str:
    """Lower-case and validate a client name; an empty name means the default."""
    name = raw.strip().lower()
    if not name:
        return DEFAULT_CLIENT_NAME
    if any(ch not in _CLIENT_NAME_CHARS for ch in name):
        raise ValueError(f"invalid client name: {raw!r}")
    return name


@dataclass
class ClientCredentials:
    """OAuth client credentials."""

    client_id: str
    client_secret: str
    redirect_uri: str = ""

    def to_dict(self) -> dict[str, str]:
        """Return the JSON form, leaving out an empty redirect URI."""
        result = {"client_id": self.client_id, "client_secret": self.client_secret}
        if self.redirect_uri:
            result["redirect_uri"] = self.redirect_uri
        return result


def _client_or_default(client: str) -> str:
    return client or DEFAULT_CLIENT_NAME


def _credentials_from(data: Any) -> ClientCredentials:
    if not isinstance(data, dict):
        raise ConfigError("parsing client credentials: expected an object")
    values = {}
    for key in ("client_id", "client_secret", "redirect_uri"):
        value = data.get(key)
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise ConfigError(f"parsing client credentials: {key} must be a string")
        values[key] = value
    return ClientCredentials(**values)


def client_credentials_path(client: str) -> str:
    """Return the credentials file path for a client."""
    return os.path.join(clients_dir(), _client_or_default(client) + ".json5")


def read_client_credentials(client: str) -> ClientCredentials:
    """Read and validate the credentials of a client."""
    client = _client_or_default(client)
    path = client_credentials_path(client)
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except FileNotFoundError as exc:
        raise ConfigError(f"client {client!r} not found: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"reading client credentials: {exc}") from exc
    try:
        data = parse_json5(text)
    except ValueError as exc:
        raise ConfigError(f"parsing client credentials: {exc}") from exc
    creds = _credentials_from(data)
    if not creds.client_id:
        raise ConfigError(f"client {client!r} has no client_id")
    if not creds.client_secret:
        raise ConfigError(f"client {client!r} has no client_secret")
    return creds


def write_client_credentials(client: str, creds: ClientCredentials | None) -> None:
    """Validate and write the credentials of a client with 0600 permissions."""
    client = _client_or_default(client)
    if creds is None:
        raise ValueError("credentials cannot be None")
    if not creds.client_id:
        raise ValueError("client_id is required")
    if not creds.client_secret:
        raise ValueError("client_secret is required")
    try:
        ensure_clients_dir()
    except OSError as exc:
        raise ConfigError(f"creating clients dir: {exc}") from exc
    data = json.dumps(creds.to_dict(), indent=2, ensure_ascii=False)
    atomic_write(client_credentials_path(client), data.encode("utf-8"), 0o600)


def list_clients() -> list[str]:
    """Return the names of the configured clients, sorted."""
    try:
        entries = sorted(os.scandir(clients_dir()), key=lambda e: e.name)
    except FileNotFoundError:
        return []
    except OSError as exc:
        raise ConfigError(f"reading clients dir: {exc}") from exc
    return [
        entry.name[: -len(".json5")]
        for entry in entries
        if not entry.is_dir(follow_symlinks=False) and entry.name.endswith(".json5")
    ]


def client_credentials_exist(client: str) -> bool:
    """Return True if a credentials file exists for the client."""
    return os.path.exists(client_credentials_path(client))


def delete_client_credentials(client: str) -> None:
    """Remove the credentials file of a client."""
    if not client:
        raise ValueError("client name required")
    try:
        os.remove(client_credentials_path(client))
    except FileNotFoundError as exc:
        raise ConfigError(f"client {client!r} not found") from exc
    except OSError as exc:
        raise ConfigError(f"deleting client credentials: {exc}") from exc