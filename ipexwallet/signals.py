"""Turns SIGINT and SIGTERM into a quit notification."""

from __future__ import annotations

import signal
from collections.abc import Callable, Iterable
from types import FrameType
from typing import Any


class SignalHandler:
    """Calls the connected callbacks when the process is asked to quit."""

    def __init__(
        self, signals: Iterable[signal.Signals] = (signal.SIGINT, signal.SIGTERM)
    ) -> None:
        self._signals = tuple(signals)
        self._callbacks: list[Callable[[], Any]] = []

    def connect(self, callback: Callable[[], Any]) -> None:
        """Register a callback run on every quit request."""
        self._callbacks.append(callback)

    def install(self) -> dict[signal.Signals, Any]:
        """Install the handler; return the handlers that were replaced."""
        return {sig: signal.signal(sig, self._handle) for sig in self._signals}

    def emit_quit(self) -> None:
        """Run the connected callbacks in the order they were connected."""
        for callback in list(self._callbacks):
            callback()

    def _handle(self, signum: int, frame: FrameType | None) -> None:
        self.emit_quit()