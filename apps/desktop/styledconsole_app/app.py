"""Desktop window, Qt field sink, and GUI runtime."""

from __future__ import annotations

import itertools
import sys
import threading
from typing import Any, Callable

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QFont, QFontDatabase, QKeyEvent
from PySide6.QtWidgets import QApplication, QHBoxLayout, QLabel, QScrollArea, QVBoxLayout, QWidget

from styledconsole_core import (
    AppConfig,
    FieldPosition,
    InputCaptureBridge,
    Key,
    KeyEvent,
    StyledConsole,
    UiDispatcher,
    load_config,
)
from styledconsole_core.logging_setup import configure_from, get_logger, install_crash_hooks
from styledconsole_markup import ColorValue, FontFamilyTable, FontSpec, FontStyle, MarkupParser

DRAIN_INTERVAL_MS = 15
CARET = "|"

_KEY_MAP = {
    Qt.Key.Key_Return.value: Key.ENTER,
    Qt.Key.Key_Enter.value: Key.ENTER,
    Qt.Key.Key_Backspace.value: Key.BACKSPACE,
    Qt.Key.Key_Left.value: Key.LEFT,
    Qt.Key.Key_Right.value: Key.RIGHT,
}


def translate_key(event: QKeyEvent) -> KeyEvent:
    key = _KEY_MAP.get(int(event.key()))
    if key is not None:
        return KeyEvent(key)
    text = event.text()
    if text and text.isprintable():
        return KeyEvent.character(text)
    return KeyEvent(Key.OTHER)


def _rgba(color: ColorValue | None) -> str:
    if color is None:
        return "transparent"
    return f"rgba({color.r}, {color.g}, {color.b}, {color.a})"


class ConsoleWindow(QScrollArea):
    """Rows of label fields; every method here runs on the UI thread."""

    def __init__(self, config: AppConfig, dispatcher: UiDispatcher) -> None:
        super().__init__()
        self.config = config
        self.key_handler: Callable[[KeyEvent], bool] | None = None
        self._fields: dict[int, QLabel] = {}
        self._rows: list[QHBoxLayout] = []
        self._default_font = FontSpec(family=config.style.font_family, size=config.style.font_size)

        self.setWindowTitle(config.window.title)
        self.resize(config.window.width, config.window.height)
        self.setWidgetResizable(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        self._content = QWidget()
        self._content.setStyleSheet(f"background-color: {_rgba(config.style.background_value())};")
        self._layout = QVBoxLayout(self._content)
        self._layout.setContentsMargins(4, 4, 4, 4)
        self._layout.setSpacing(0)
        self._layout.addStretch(1)
        self.setWidget(self._content)

        self._timer = QTimer(self)
        self._timer.timeout.connect(lambda: dispatcher.drain())
        self._timer.start(DRAIN_INTERVAL_MS)

    def place(self) -> None:
        if self.config.window.x is not None and self.config.window.y is not None:
            self.move(self.config.window.x, self.config.window.y)
            return
        screen = QApplication.primaryScreen()
        if screen is not None:
            geometry = screen.availableGeometry()
            self.move(
                geometry.x() + (geometry.width() - self.width()) // 2,
                geometry.y() + (geometry.height() - self.height()) // 2,
            )

    def add_field(self, handle: int, position: FieldPosition) -> None:
        while len(self._rows) <= position.row:
            row = QWidget()
            row_layout = QHBoxLayout(row)
            row_layout.setContentsMargins(0, 0, 0, 0)
            row_layout.setSpacing(0)
            row_layout.addStretch(1)
            self._layout.insertWidget(self._layout.count() - 1, row)
            self._rows.append(row_layout)

        label = QLabel()
        label.setTextFormat(Qt.TextFormat.PlainText)
        row_layout = self._rows[position.row]
        row_layout.insertWidget(row_layout.count() - 1, label)
        self._fields[handle] = label
        QTimer.singleShot(0, self._scroll_to_end)

    def set_appearance(
        self, handle: int, text_color: ColorValue, bg_color: ColorValue | None, font: FontSpec
    ) -> None:
        label = self._fields[handle]
        label.setStyleSheet(f"color: {_rgba(text_color)}; background-color: {_rgba(bg_color)};")
        spec = font.merged_with(self._default_font)
        qfont = QFont(label.font())
        if spec.family:
            qfont.setFamily(spec.family)
        if spec.size:
            qfont.setPointSize(spec.size)
        style = spec.style or FontStyle.REGULAR
        qfont.setBold(bool(style & FontStyle.BOLD))
        qfont.setItalic(bool(style & FontStyle.ITALIC))
        qfont.setUnderline(bool(style & FontStyle.UNDERLINE))
        qfont.setStrikeOut(bool(style & FontStyle.STRIKEOUT))
        label.setFont(qfont)

    def append_text(self, handle: int, chunk: str) -> None:
        label = self._fields[handle]
        label.setText(label.text() + chunk)

    def update_input(self, handle: int, text: str, cursor: int | None) -> None:
        label = self._fields[handle]
        label.setText(text if cursor is None else text[:cursor] + CARET + text[cursor:])

    def _scroll_to_end(self) -> None:
        bar = self.verticalScrollBar()
        bar.setValue(bar.maximum())

    def keyPressEvent(self, event: QKeyEvent) -> None:  # noqa: N802 - Qt override
        if self.key_handler is not None and self.key_handler(translate_key(event)):
            event.accept()
            return
        super().keyPressEvent(event)


class QtFieldSink:
    """Field sink that posts every call onto the UI loop; handles are integer ids."""

    def __init__(self, window: ConsoleWindow, dispatcher: UiDispatcher) -> None:
        self._window = window
        self._dispatcher = dispatcher
        self._ids = itertools.count(1)

    def create_field(self, position: FieldPosition) -> int:
        handle = next(self._ids)
        self._dispatcher.post(self._window.add_field, handle, position)
        return handle

    def set_appearance(self, handle: Any, text_color: ColorValue, bg_color: ColorValue | None, font: FontSpec) -> None:
        self._dispatcher.post(self._window.set_appearance, handle, text_color, bg_color, font)

    def append_text(self, handle: Any, chunk: str) -> None:
        self._dispatcher.post(self._window.append_text, handle, chunk)

    def update_input(self, handle: Any, text: str, cursor: int | None) -> None:
        self._dispatcher.post(self._window.update_input, handle, text, cursor)


def _run_script(script: Callable[[StyledConsole], None], console: StyledConsole) -> None:
    logger = get_logger()
    try:
        script(console)
        logger.info("console script finished", extra={"event": "script_done"})
    except Exception:
        logger.exception("console script failed", extra={"event": "script_error"})


def run_gui(script: Callable[[StyledConsole], None], config: AppConfig | None = None) -> int:
    config = config or load_config()
    configure_from(config.diagnostics)
    install_crash_hooks()
    logger = get_logger()

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Styled Console")

    # Snapshot on the UI thread; the parser runs on the script thread.
    families = tuple(QFontDatabase.families())
    parser = MarkupParser(families=FontFamilyTable.of(families), defaults=config.style.defaults())

    dispatcher = UiDispatcher()
    window = ConsoleWindow(config, dispatcher)
    sink = QtFieldSink(window, dispatcher)
    bridge = InputCaptureBridge(repaint=sink.update_input)
    window.key_handler = bridge.handle_key
    console = StyledConsole(sink, parser=parser, capture=bridge)

    window.place()
    window.show()
    window.setFocus()
    logger.info("window shown", extra={"event": "window_shown"})

    worker = threading.Thread(target=_run_script, args=(script, console), name="console-script", daemon=True)
    worker.start()
    return int(app.exec())
