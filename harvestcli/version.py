"""Version information for the harvest command."""

from __future__ import annotations

import argparse
from typing import Sequence

VERSION = "0.1.0"
COMMIT = ""
DATE = ""


def version_string(version: str = VERSION, commit: str = COMMIT, date: str = DATE) -> str:
    """Return the version, followed by the commit and build date when known."""
    v = version.strip() or "dev"
    commit = commit.strip()
    date = date.strip()
    details = " ".join(part for part in (commit, date) if part)
    return f"{v} ({details})" if details else v


def main(argv: Sequence[str] | None = None) -> int:
    """Print the version information."""
    parser = argparse.ArgumentParser(
        prog="harvest version", description="Print version information."
    )
    parser.parse_args(argv)
    print("harvest", version_string())
    return 0