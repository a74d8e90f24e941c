"""Hand work from network threads to the thread that owns the UI."""
from __future__ import annotations

import logging
import queue
from typing import Any, Callable, Protocol


class UiDispatcher(Protocol):
    def call_soon(self, fn: Callable[..., Any], *args: Any) -> None:
        ...


class QueueDispatcher:
    """
    Thread-safe queue of UI callables.

    Any thread may call ``call_soon``; only the UI loop calls ``run_pending``,
    so the queued callables always execute on the UI thread.
    """

    def __init__(self):
        self._queue: queue.Queue = queue.Queue()
        self._log = logging.getLogger(__name__)

    def call_soon(self, fn: Callable[..., Any], *args: Any) -> None:
        self._queue.put((fn, args))

    def run_pending(self, block: bool = False, timeout: float | None = None) -> int:
        """Run queued callables; returns how many ran."""
        ran = 0
        if block:
            try:
                fn, args = self._queue.get(timeout=timeout)
            except queue.Empty:
                return 0
            self._invoke(fn, args)
            ran += 1
        while True:
            try:
                fn, args = self._queue.get_nowait()
            except queue.Empty:
                return ran
            self._invoke(fn, args)
            ran += 1

    def _invoke(self, fn, args) -> None:
        try:
            fn(*args)
        except Exception:  # noqa: BLE001
            self._log.exception("UI callback %r failed", fn)


class ImmediateDispatcher:
    """Runs callables inline. For headless use where there is no UI thread."""

    def call_soon(self, fn: Callable[..., Any], *args: Any) -> None:
        fn(*args)
