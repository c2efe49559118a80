"""Styled document models handed to the rendering boundary."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .colors import WHITE, ColorValue
from .effects import Effect, Identity
from .fonts import FontSpec


@dataclass(frozen=True)
class StyleDefaults:
    """Ambient styling applied where markup leaves a property unset."""

    text_color: ColorValue = WHITE
    font: FontSpec = field(default_factory=FontSpec)


@dataclass(frozen=True)
class TextBlock:
    text: str = ""
    text_color: ColorValue = WHITE
    bg_color: ColorValue | None = None
    font: FontSpec = field(default_factory=FontSpec)
    effect: Effect = field(default_factory=Identity)


@dataclass(frozen=True)
class Line:
    blocks: tuple[TextBlock, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "blocks", tuple(self.blocks))

    @classmethod
    def of(cls, *blocks: TextBlock) -> Line:
        return cls(blocks)

    def __iter__(self) -> Iterator[TextBlock]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    @property
    def text(self) -> str:
        return "".join(block.text for block in self.blocks)


@dataclass(frozen=True)
class StyledDocument:
    lines: tuple[Line, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines", tuple(self.lines))

    @classmethod
    def from_lines(cls, lines: Iterable[Line]) -> StyledDocument:
        return cls(tuple(lines))

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)
