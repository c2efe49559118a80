"""Embedded styling markup: colors, fonts, effects, and the document parser."""

from .colors import BLACK, WHITE, ChannelOutOfRangeError, ColorValue, decode_color, from_channels, from_hex, to_hex
from .effects import Effect, EffectRegistry, Identity, TimedReveal, register_builtin_effects
from .fonts import FontFamilyTable, FontSpec, FontStyle, decode_font, resolve_styles
from .models import Line, StyleDefaults, StyledDocument, TextBlock
from .parser import MarkupParser, default_parser, parse

__all__ = [
    "BLACK",
    "WHITE",
    "ChannelOutOfRangeError",
    "ColorValue",
    "Effect",
    "EffectRegistry",
    "FontFamilyTable",
    "FontSpec",
    "FontStyle",
    "Identity",
    "Line",
    "MarkupParser",
    "StyleDefaults",
    "StyledDocument",
    "TextBlock",
    "TimedReveal",
    "decode_color",
    "decode_font",
    "default_parser",
    "from_channels",
    "from_hex",
    "parse",
    "register_builtin_effects",
    "resolve_styles",
    "to_hex",
]
