"""Embedded styling markup -> StyledDocument.

Markup summary::

    \\ln ... /ln                         one line per region
    \\tb<tc: ...; bc: ...; ft: ...; ef: ...>body/tb
                                        one styled run

``tc``/``bc`` take ``r,g,b[,a]`` or ``RRGGBB[,a]``; ``ft`` takes
``[family] [size] [(Style, ...)]``; ``ef`` takes ``Name[, param]``.
Parsing never fails: anything unusable falls back to the ambient defaults.
"""

from __future__ import annotations

import logging
import re
import threading

from .colors import decode_color
from .effects import Effect, EffectRegistry, Identity
from .fonts import FontFamilyTable, decode_font
from .models import Line, StyleDefaults, StyledDocument, TextBlock

_LOGGER = logging.getLogger("styledconsole.markup")

_LINE_RE = re.compile(r"\\ln(?P<body>.*?)(?:/ln|\Z)", re.DOTALL)
_BLOCK_RE = re.compile(r"\\tb(?:<(?P<attrs>[^>]*)>)?(?P<body>.*?)(?:/tb|\Z)", re.DOTALL)
_EFFECT_RE = re.compile(r"^\s*(?P<name>\w+)\s*(?:,\s*(?P<param>[\w.+-]+))?\s*$")

ATTRIBUTE_KEYS = ("tc", "bc", "ft", "ef")


def split_attributes(clause: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for part in clause.split(";"):
        if not part.strip():
            continue
        key, sep, value = part.partition(":")
        key = key.strip()
        if not sep or key not in ATTRIBUTE_KEYS:
            _LOGGER.debug("ignored attribute %r", part.strip(), extra={"event": "markup_bad_attribute"})
            continue
        attrs.setdefault(key, value.strip())
    return attrs


class MarkupParser:
    """Parser bound to one family table, effect registry, and set of defaults."""

    def __init__(
        self,
        families: FontFamilyTable | None = None,
        effects: EffectRegistry | None = None,
        defaults: StyleDefaults | None = None,
    ) -> None:
        self.families = families or FontFamilyTable()
        self.effects = effects or EffectRegistry.with_builtins()
        self.defaults = defaults or StyleDefaults()

    def parse(self, text: str) -> StyledDocument:
        return StyledDocument.from_lines(self.parse_line(segment) for segment in self.split_lines(text))

    def split_lines(self, text: str) -> list[str]:
        matches = list(_LINE_RE.finditer(text))
        if not matches:
            return [text]

        segments: list[str] = []
        pos = 0
        for match in matches:
            # Whitespace between regions is layout noise; other stray text keeps its own line.
            stray = text[pos : match.start()]
            if stray.strip():
                segments.append(stray)
            segments.append(match.group("body"))
            pos = match.end()
        tail = text[pos:]
        if tail.strip():
            segments.append(tail)
        return segments

    def parse_line(self, text: str) -> Line:
        blocks: list[TextBlock] = []
        pos = 0
        for match in _BLOCK_RE.finditer(text):
            if match.start() > pos:
                blocks.append(self.plain_block(text[pos : match.start()]))
            blocks.append(self.styled_block(match.group("body"), match.group("attrs")))
            pos = match.end()
        if pos < len(text):
            blocks.append(self.plain_block(text[pos:]))
        return Line(blocks)

    def plain_block(self, text: str) -> TextBlock:
        return TextBlock(text=text, text_color=self.defaults.text_color, font=self.defaults.font)

    def styled_block(self, text: str, clause: str | None) -> TextBlock:
        if not clause:
            return self.plain_block(text)
        attrs = split_attributes(clause)
        return TextBlock(
            text=text,
            text_color=decode_color(attrs.get("tc")) or self.defaults.text_color,
            bg_color=decode_color(attrs.get("bc")),
            font=decode_font(attrs.get("ft"), self.families).merged_with(self.defaults.font),
            effect=self.decode_effect(attrs.get("ef")),
        )

    def decode_effect(self, value: str | None) -> Effect:
        if value is None:
            return Identity()
        match = _EFFECT_RE.match(value)
        if match is None:
            _LOGGER.debug("ignored effect clause %r", value, extra={"event": "markup_bad_effect"})
            return Identity()
        return self.effects.resolve(match.group("name"), match.group("param"))


_default_parser: MarkupParser | None = None
_default_lock = threading.Lock()


def default_parser() -> MarkupParser:
    global _default_parser
    if _default_parser is None:
        with _default_lock:
            if _default_parser is None:
                _default_parser = MarkupParser()
    return _default_parser


def parse(text: str) -> StyledDocument:
    return default_parser().parse(text)
