"""Font style flags, font specs, and family-name resolution."""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from enum import IntFlag
from typing import Callable, Iterable

_LOGGER = logging.getLogger("styledconsole.markup")

# family, then size, then "(Style, Style)"; each part optional.
_FONT_RE = re.compile(
    r"^\s*(?P<family>[A-Za-z](?:[A-Za-z ]*[A-Za-z])?)?"
    r"[\s,]*(?P<size>\d{1,4})?"
    r"[\s,]*(?:\((?P<styles>[^)]*)\)?)?"
    r"[\s,]*$"
)


class FontStyle(IntFlag):
    REGULAR = 0
    BOLD = 1
    ITALIC = 2
    UNDERLINE = 4
    STRIKEOUT = 8


STYLE_NAMES: dict[str, FontStyle] = {
    "Regular": FontStyle.REGULAR,
    "Italic": FontStyle.ITALIC,
    "Bold": FontStyle.BOLD,
    "Strikeout": FontStyle.STRIKEOUT,
    "Underline": FontStyle.UNDERLINE,
}


@dataclass(frozen=True)
class FontSpec:
    family: str | None = None
    size: int | None = None
    style: FontStyle | None = None

    @property
    def is_default(self) -> bool:
        return self.family is None and self.size is None and self.style is None

    def merged_with(self, fallback: FontSpec) -> FontSpec:
        return FontSpec(
            family=self.family if self.family is not None else fallback.family,
            size=self.size if self.size is not None else fallback.size,
            style=self.style if self.style is not None else fallback.style,
        )


def resolve_styles(tokens: Iterable[str]) -> FontStyle | None:
    style: FontStyle | None = None
    for token in tokens:
        token = token.strip()
        flag = STYLE_NAMES.get(token)
        if flag is None:
            if token:
                _LOGGER.debug("ignored font style %r", token, extra={"event": "markup_bad_style"})
            continue
        style = flag if style is None else style | flag
    return style


class FontFamilyTable:
    """Read-only set of available family names, loaded once on first use."""

    def __init__(self, loader: Callable[[], Iterable[str]] | None = None) -> None:
        self._loader = loader or (lambda: ())
        self._families: frozenset[str] | None = None
        self._lock = threading.Lock()

    @classmethod
    def of(cls, names: Iterable[str]) -> FontFamilyTable:
        snapshot = tuple(names)
        return cls(lambda: snapshot)

    def families(self) -> frozenset[str]:
        if self._families is None:
            with self._lock:
                if self._families is None:
                    self._families = frozenset(self._loader())
        return self._families

    def resolve(self, name: str | None) -> str | None:
        if not name:
            return None
        if name in self.families():
            return name
        _LOGGER.debug("unknown font family %r", name, extra={"event": "markup_unknown_family"})
        return None


def decode_font(value: str | None, families: FontFamilyTable) -> FontSpec:
    """Decode ``[family] [size] [(style, ...)]``; unusable parts are left unset."""

    if value is None:
        return FontSpec()
    match = _FONT_RE.match(value)
    if match is None:
        _LOGGER.debug("ignored font clause %r", value, extra={"event": "markup_bad_font"})
        return FontSpec()

    size: int | None = None
    if match.group("size") is not None:
        size = int(match.group("size")) or None

    style = None
    if match.group("styles") is not None:
        style = resolve_styles(match.group("styles").split(","))

    return FontSpec(family=families.resolve(match.group("family")), size=size, style=style)
