"""Styled console facade: prints documents into fields and reads lines back."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Protocol, Sequence, Union

from styledconsole_markup import (
    ColorValue,
    FontSpec,
    Line,
    MarkupParser,
    StyleDefaults,
    StyledDocument,
    TextBlock,
    default_parser,
)

from .capture import InputCaptureBridge

_LOGGER = logging.getLogger("styledconsole.console")

Printable = Union[str, StyledDocument, Sequence[Line], Line, TextBlock, None]


@dataclass(frozen=True)
class FieldPosition:
    """Logical slot of a field: row in the console, column within the row."""

    row: int
    column: int


class FieldSink(Protocol):
    def create_field(self, position: FieldPosition) -> Any: ...

    def set_appearance(
        self, handle: Any, text_color: ColorValue, bg_color: ColorValue | None, font: FontSpec
    ) -> None: ...

    def append_text(self, handle: Any, chunk: str) -> None: ...

    def update_input(self, handle: Any, text: str, cursor: int | None) -> None: ...


class StyledConsole:
    def __init__(
        self,
        sink: FieldSink,
        parser: MarkupParser | None = None,
        capture: InputCaptureBridge | None = None,
        defaults: StyleDefaults | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.sink = sink
        self.parser = parser or default_parser()
        self.capture = capture or InputCaptureBridge(repaint=sink.update_input)
        self.defaults = defaults or self.parser.defaults
        self._sleep = sleep
        self._rows = 0
        self._columns = 0

    @property
    def rows(self) -> int:
        return self._rows

    def print(self, content: Printable = None) -> None:
        if content is None:
            self._blank_line()
        elif isinstance(content, str):
            self.print_document(self.parser.parse(content))
        elif isinstance(content, TextBlock):
            self.print_block(content)
        elif isinstance(content, Line):
            self.print_line(content)
        elif isinstance(content, StyledDocument):
            self.print_document(content)
        else:
            for line in content:
                self.print_line(line)

    def print_document(self, document: StyledDocument) -> None:
        for line in document:
            self.print_line(line)

    def print_line(self, line: Line) -> None:
        if not line.blocks:
            self._blank_line()
            return
        self._new_row()
        for block in line:
            self.print_block(block)

    def print_block(self, block: TextBlock) -> None:
        if self._rows == 0:
            self._new_row()
        handle = self._new_field()
        self.sink.set_appearance(handle, block.text_color, block.bg_color, block.font)
        block.effect.apply(block.text, lambda chunk: self.sink.append_text(handle, chunk), self._sleep)

    def read_line(self) -> str:
        if self._rows == 0:
            self._new_row()
        handle = self._new_field()
        self.sink.set_appearance(handle, self.defaults.text_color, None, self.defaults.font)
        text = self.capture.read_line(handle)
        # Input ends the row; the next print starts below it.
        self._columns = -1
        return text

    def _blank_line(self) -> None:
        self._new_row()
        self._new_field()

    def _new_row(self) -> None:
        self._rows += 1
        self._columns = 0

    def _new_field(self) -> Any:
        if self._columns < 0:
            self._new_row()
        position = FieldPosition(row=self._rows - 1, column=self._columns)
        self._columns += 1
        _LOGGER.debug("field %s,%s", position.row, position.column, extra={"event": "field_created"})
        return self.sink.create_field(position)
