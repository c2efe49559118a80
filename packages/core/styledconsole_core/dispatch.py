"""FIFO hand-off of UI work from caller threads onto the UI event loop."""

from __future__ import annotations

import logging
import queue
from typing import Any, Callable

_LOGGER = logging.getLogger("styledconsole.console")


class UiDispatcher:
    """Fire-and-forget queue; the UI loop calls :meth:`drain` on a timer."""

    def __init__(self) -> None:
        self._queue: queue.Queue[tuple[Callable[..., Any], tuple[Any, ...]]] = queue.Queue()

    def post(self, fn: Callable[..., Any], *args: Any) -> None:
        self._queue.put((fn, args))

    def pending(self) -> int:
        return self._queue.qsize()

    def drain(self, limit: int | None = None) -> int:
        ran = 0
        try:
            while limit is None or ran < limit:
                fn, args = self._queue.get_nowait()
                ran += 1
                try:
                    fn(*args)
                except Exception:
                    _LOGGER.exception("ui callback failed", extra={"event": "ui_callback_error"})
        except queue.Empty:
            pass
        return ran
