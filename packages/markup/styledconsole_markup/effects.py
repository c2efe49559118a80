"""Text delivery effects and the name -> effect registry."""

from __future__ import annotations

import logging
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, ClassVar

_LOGGER = logging.getLogger("styledconsole.markup")

Append = Callable[[str], None]
Sleep = Callable[[float], None]

MARKUP_REVEAL_DELAY_MS = 200


class Effect(ABC):
    """Governs how a run of text reaches a field: how many appends, and their pacing."""

    name: ClassVar[str] = "Effect"

    @abstractmethod
    def apply(self, text: str, append: Append, sleep: Sleep = time.sleep) -> None: ...

    def describe(self) -> dict[str, Any]:
        return {"name": self.name}


@dataclass(frozen=True)
class Identity(Effect):
    name: ClassVar[str] = "Identity"

    def apply(self, text: str, append: Append, sleep: Sleep = time.sleep) -> None:
        append(text)


@dataclass(frozen=True)
class TimedReveal(Effect):
    name: ClassVar[str] = "TimedReveal"

    delay_ms: int = 500

    def __post_init__(self) -> None:
        if self.delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")

    def apply(self, text: str, append: Append, sleep: Sleep = time.sleep) -> None:
        for char in text:
            append(char)
            sleep(self.delay_ms / 1000)

    def describe(self) -> dict[str, Any]:
        return {"name": self.name, "delay_ms": self.delay_ms}


@dataclass(frozen=True)
class EffectEntry:
    name: str
    build: Callable[..., Effect]
    param_type: type | None = None
    markup_default: Any = None


class EffectRegistry:
    def __init__(self) -> None:
        self._entries: dict[str, EffectEntry] = {}
        self._lock = threading.Lock()

    @classmethod
    def with_builtins(cls) -> EffectRegistry:
        registry = cls()
        register_builtin_effects(registry)
        return registry

    def register(
        self,
        name: str,
        build: Callable[..., Effect],
        param_type: type | None = None,
        markup_default: Any = None,
    ) -> None:
        entry = EffectEntry(name=name, build=build, param_type=param_type, markup_default=markup_default)
        with self._lock:
            self._entries = {**self._entries, name: entry}

    def names(self) -> list[str]:
        return sorted(self._entries)

    def resolve(self, name: str | None, param: str | None = None) -> Effect:
        entry = self._entries.get(name or "")
        if entry is None:
            if name:
                _LOGGER.debug("unknown effect %r", name, extra={"event": "markup_unknown_effect"})
            return Identity()
        if entry.param_type is None:
            return entry.build()

        value = entry.markup_default
        if param is not None:
            try:
                value = entry.param_type(param)
            except (TypeError, ValueError):
                _LOGGER.debug(
                    "ignored %s parameter %r", name, param, extra={"event": "markup_bad_effect_param"}
                )
        try:
            return entry.build(value)
        except (TypeError, ValueError):
            return entry.build(entry.markup_default)


def register_builtin_effects(registry: EffectRegistry) -> None:
    registry.register("Identity", Identity)
    registry.register("NoEffect", Identity)
    registry.register("TimedReveal", TimedReveal, param_type=int, markup_default=MARKUP_REVEAL_DELAY_MS)
    registry.register("TypeWriter", TimedReveal, param_type=int, markup_default=MARKUP_REVEAL_DELAY_MS)
