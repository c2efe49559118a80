"""Synchronous line input across the caller thread and the UI event thread.

The caller blocks in :meth:`InputCaptureBridge.read_line` while the UI thread
feeds keystrokes through :meth:`InputCaptureBridge.handle_key`. Buffer and
cursor are only mutated from ``handle_key``; the caller reads them after it has
been woken by Enter, so it never sees a half-applied edit.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

_LOGGER = logging.getLogger("styledconsole.capture")

Repaint = Callable[[Any, str, "int | None"], None]


class Key(str, Enum):
    CHARACTER = "Character"
    ENTER = "Enter"
    BACKSPACE = "Backspace"
    LEFT = "Left"
    RIGHT = "Right"
    OTHER = "Other"


class CaptureState(str, Enum):
    IDLE = "Idle"
    CAPTURING = "Capturing"


@dataclass(frozen=True)
class KeyEvent:
    key: Key
    char: str = ""

    @classmethod
    def character(cls, char: str) -> KeyEvent:
        return cls(Key.CHARACTER, char)


@dataclass
class InputSession:
    field: Any
    buffer: list[str] = field(default_factory=list)
    cursor: int = 0
    capturing: bool = True

    @property
    def text(self) -> str:
        return "".join(self.buffer)

    def insert(self, chars: str) -> None:
        for char in chars:
            self.buffer.insert(self.cursor, char)
            self.cursor += 1

    def backspace(self) -> None:
        if self.cursor > 0:
            del self.buffer[self.cursor - 1]
            self.cursor -= 1

    def move(self, delta: int) -> None:
        self.cursor = max(0, min(len(self.buffer), self.cursor + delta))


class InputCaptureBridge:
    def __init__(self, repaint: Repaint | None = None) -> None:
        self._repaint = repaint
        self._cond = threading.Condition(threading.Lock())
        self._session: InputSession | None = None

    @property
    def state(self) -> CaptureState:
        with self._cond:
            if self._session is not None and self._session.capturing:
                return CaptureState.CAPTURING
            return CaptureState.IDLE

    def read_line(self, field: Any) -> str:
        self.begin_capture(field)
        return self.end_capture()

    def begin_capture(self, field: Any) -> None:
        with self._cond:
            # One session at a time; later readers queue behind it.
            self._cond.wait_for(lambda: self._session is None)
            session = InputSession(field=field)
            self._session = session
            _LOGGER.info("capture started", extra={"event": "capture_start"})
            self._cond.notify_all()
            self._cond.wait_for(lambda: not session.capturing)

    def end_capture(self) -> str:
        with self._cond:
            session = self._session
            if session is None or session.capturing:
                raise RuntimeError("end_capture() called without a completed capture")
            text = session.text
            self._session = None
            self._cond.notify_all()
        _LOGGER.info("capture finished", extra={"event": "capture_end", "length": len(text)})
        if self._repaint is not None:
            self._repaint(session.field, text, None)
        return text

    def wait_for_capture(self, timeout: float | None = None) -> bool:
        with self._cond:
            return self._cond.wait_for(
                lambda: self._session is not None and self._session.capturing, timeout=timeout
            )

    def handle_key(self, event: KeyEvent) -> bool:
        """Apply one keystroke to the active session. Call from the UI thread only."""

        with self._cond:
            session = self._session
            if session is None or not session.capturing:
                return False

            if event.key is Key.ENTER:
                session.capturing = False
                self._cond.notify_all()
                return True
            if event.key is Key.CHARACTER:
                if not event.char or not event.char.isprintable():
                    return False
                session.insert(event.char)
            elif event.key is Key.BACKSPACE:
                session.backspace()
            elif event.key is Key.LEFT:
                session.move(-1)
            elif event.key is Key.RIGHT:
                session.move(1)
            else:
                return False
            snapshot = (session.field, session.text, session.cursor)

        if self._repaint is not None:
            self._repaint(*snapshot)
        return True
