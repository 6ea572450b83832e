"""A loading indicator drawn on a background thread."""

from __future__ import annotations

import itertools
import sys
import threading
from typing import Callable, TextIO, TypeVar

from harvestcli.ui.styles import SPINNER_STYLE

T = TypeVar("T")

DOT_FRAMES = ("⣾ ", "⣽ ", "⣻ ", "⢿ ", "⡿ ", "⣟ ", "⣯ ", "⣷ ")


class Spinner:
    """Shows a spinning indicator with a message until stopped."""

    def __init__(
        self, message: str, *, stream: TextIO | None = None, interval: float = 0.1
    ) -> None:
        self.message = message
        self._stream = stream if stream is not None else sys.stderr
        self._interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._width = 0

    def _spin(self) -> None:
        for frame in itertools.cycle(DOT_FRAMES):
            line = f"{SPINNER_STYLE.render(frame)} {self.message}"
            self._width = max(self._width, len(line))
            self._stream.write("\r" + line)
            self._stream.flush()
            if self._stop.wait(self._interval):
                break

    def start(self) -> None:
        """Begin drawing the spinner."""
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._spin, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop drawing and clear the spinner line."""
        if self._thread is None:
            return
        self._stop.set()
        self._thread.join()
        self._thread = None
        self._stream.write("\r" + " " * self._width + "\r")
        self._stream.flush()

    def __enter__(self) -> Spinner:
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()


def with_spinner(message: str, fn: Callable[[], T]) -> T:
    """Call fn while a spinner is shown and return its result."""
    with Spinner(message):
        return fn()