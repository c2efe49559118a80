"""Built-in demo script for ``styledconsole run``."""

from __future__ import annotations

from styledconsole_core import StyledConsole
from styledconsole_markup import ColorValue, FontSpec, FontStyle, Line, TextBlock, TimedReveal

SAMPLE_MARKUP = (
    "\\ln\\tb<tc: 255,0,0,255; bc: 0,0,255,255; ft: 16,(Bold); ef: TimedReveal,40;>"
    "Embedded styling test.../tb/ln"
    "\\ln\\tb<tc: 8CFFB5; ft: (Italic, Underline)>Green italics/tb and plain text/ln"
)


def demo_lines() -> list[Line]:
    return [
        Line.of(TextBlock(text="Hello World", effect=TimedReveal(delay_ms=100))),
        Line.of(
            TextBlock(
                text="Goodbye World",
                text_color=ColorValue(0, 255, 0),
                effect=TimedReveal(delay_ms=100),
            )
        ),
    ]


def demo(console: StyledConsole) -> None:
    lines = demo_lines()
    console.print(lines)
    console.print()
    console.print(lines)
    console.print()
    console.print(SAMPLE_MARKUP)
    console.print()
    console.print("\\tb<tc: FFD166>What is your name? /tb")
    name = console.read_line()
    console.print(
        Line.of(
            TextBlock(text="Nice to meet you, ", effect=TimedReveal(delay_ms=60)),
            TextBlock(text=name, text_color=ColorValue.from_hex("35D9FF"), font=FontSpec(style=FontStyle.BOLD)),
        )
    )
