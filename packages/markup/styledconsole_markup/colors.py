"""RGBA color values and hex/decimal channel decoding."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

_LOGGER = logging.getLogger("styledconsole.markup")

_HEX_RE = re.compile(r"^[0-9A-Fa-f]{6}$")
_CHANNEL_RE = re.compile(r"^\d{1,3}$")


class ChannelOutOfRangeError(ValueError):
    """Raised when a directly constructed color has a channel outside 0-255."""

    def __init__(self, channel: str, value: object) -> None:
        super().__init__(f"color channel {channel}={value!r} is outside 0-255")
        self.channel = channel
        self.value = value


@dataclass(frozen=True)
class ColorValue:
    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 255

    def __post_init__(self) -> None:
        for channel in ("r", "g", "b", "a"):
            value = getattr(self, channel)
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
                raise ChannelOutOfRangeError(channel, value)

    @classmethod
    def from_channels(cls, r: int = 0, g: int = 0, b: int = 0, a: int = 255) -> ColorValue:
        return cls(r, g, b, a)

    @classmethod
    def from_hex(cls, code: str, a: int = 255) -> ColorValue:
        digits = code[1:] if code.startswith("#") else code
        if not _HEX_RE.match(digits):
            raise ValueError(f"expected 6 hex digits, got {code!r}")
        r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
        return cls(r, g, b, a)

    def to_hex(self) -> str:
        return f"{self.r:02X}{self.g:02X}{self.b:02X}"

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)


WHITE = ColorValue(255, 255, 255)
BLACK = ColorValue(0, 0, 0)


def from_channels(r: int = 0, g: int = 0, b: int = 0, a: int = 255) -> ColorValue:
    return ColorValue.from_channels(r, g, b, a)


def from_hex(code: str, a: int = 255) -> ColorValue:
    return ColorValue.from_hex(code, a)


def to_hex(r: int, g: int, b: int) -> str:
    return ColorValue(r, g, b).to_hex()


def _channel(token: str | None, default: int) -> int:
    if token is None:
        return default
    token = token.strip()
    if not _CHANNEL_RE.match(token):
        _LOGGER.debug("ignored color channel %r", token, extra={"event": "markup_bad_channel"})
        return default
    value = int(token)
    if value > 255:
        _LOGGER.debug("ignored color channel %r", token, extra={"event": "markup_bad_channel"})
        return default
    return value


def decode_color(value: str | None) -> ColorValue | None:
    """Decode a markup color clause, or return ``None`` when no color is present.

    Accepts ``r,g,b[,a]`` with decimal channels or ``RRGGBB[,a]``. A channel
    that does not parse falls back to its default (0, or 255 for alpha) rather
    than failing the whole color.
    """

    if value is None:
        return None
    tokens = [token.strip() for token in value.split(",")]

    if _HEX_RE.match(tokens[0]):
        alpha = _channel(tokens[1] if len(tokens) > 1 else None, 255)
        return ColorValue.from_hex(tokens[0], alpha)

    if len(tokens) in (3, 4):
        r, g, b = (_channel(token, 0) for token in tokens[:3])
        alpha = _channel(tokens[3] if len(tokens) == 4 else None, 255)
        return ColorValue(r, g, b, alpha)

    _LOGGER.debug("ignored color clause %r", value, extra={"event": "markup_bad_color"})
    return None
