"""Locations of the configuration directory and its sub-directories."""

from __future__ import annotations

import os

APP_NAME = "harvest"


def _home_dir() -> str:
    home = os.path.expanduser("~")
    if home == "~":
        raise OSError("cannot determine home directory")
    return home


def config_dir() -> str:
    """Return the XDG config directory, falling back to ~/.config/harvest."""
    config_home = os.environ.get("XDG_CONFIG_HOME", "")
    if not config_home:
        config_home = os.path.join(_home_dir(), ".config")
    return os.path.join(config_home, APP_NAME)


def ensure_dir() -> None:
    """Create the config directory with 0700 permissions if needed."""
    os.makedirs(config_dir(), mode=0o700, exist_ok=True)


def config_path() -> str:
    """Return the path of the main config file."""
    return os.path.join(config_dir(), "config.json5")


def clients_dir() -> str:
    """Return the directory holding OAuth client credentials."""
    return os.path.join(config_dir(), "clients")


def state_dir() -> str:
    """Return the directory holding runtime state."""
    return os.path.join(config_dir(), "state")


def keyring_dir() -> str:
    """Return the directory used as a file-based keyring fallback."""
    return os.path.join(config_dir(), "keyring")


def expand_path(path: str) -> str:
    """Expand a leading ``~`` or ``~/`` to the user's home directory."""
    if not path:
        return path
    if path == "~" or path.startswith("~/"):
        try:
            home = _home_dir()
        except OSError:
            return path
        if path == "~":
            return home
        return os.path.normpath(os.path.join(home, path[2:]))
    return path


def ensure_clients_dir() -> None:
    """Create the clients directory with 0700 permissions."""
    os.makedirs(clients_dir(), mode=0o700, exist_ok=True)


def ensure_state_dir() -> None:
    """Create the state directory with 0700 permissions."""
    os.makedirs(state_dir(), mode=0o700, exist_ok=True)


def ensure_keyring_dir() -> None:
    """Create the keyring directory with 0700 permissions."""
    os.makedirs(keyring_dir(), mode=0o700, exist_ok=True)