"""Persistent console settings schema and load/save helpers."""

from __future__ import annotations

import json
import logging
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from styledconsole_markup import ColorValue, FontSpec, StyleDefaults

CONFIG_VERSION = 1
MIN_WINDOW_SIZE = 100
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class WindowConfig:
    title: str = "Styled Console"
    width: int = 500
    height: int = 500
    x: int | None = None
    y: int | None = None


@dataclass
class StyleConfig:
    text_color: str = "#FFFFFF"
    background: str = "#000000"
    font_family: str | None = None
    font_size: int = 12

    def text_color_value(self) -> ColorValue:
        return ColorValue.from_hex(self.text_color)

    def background_value(self) -> ColorValue:
        return ColorValue.from_hex(self.background)

    def defaults(self) -> StyleDefaults:
        return StyleDefaults(text_color=self.text_color_value(), font=FontSpec())


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7
    log_level: str = "INFO"


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    window: WindowConfig = field(default_factory=WindowConfig)
    style: StyleConfig = field(default_factory=StyleConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "StyledConsole"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "StyledConsole"
    return Path.home() / ".config" / "styledconsole"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: Any):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _normalize_window(cfg: AppConfig) -> None:
    defaults = WindowConfig()
    cfg.window.title = str(cfg.window.title or defaults.title)
    cfg.window.width = max(MIN_WINDOW_SIZE, _as_int(cfg.window.width, defaults.width))
    cfg.window.height = max(MIN_WINDOW_SIZE, _as_int(cfg.window.height, defaults.height))
    if cfg.window.x is not None and cfg.window.y is not None:
        cfg.window.x = _as_int(cfg.window.x, 0)
        cfg.window.y = _as_int(cfg.window.y, 0)
    else:
        cfg.window.x = None
        cfg.window.y = None


def _normalize_style(cfg: AppConfig) -> None:
    defaults = StyleConfig()
    for name in ("text_color", "background"):
        try:
            ColorValue.from_hex(str(getattr(cfg.style, name)))
        except ValueError:
            setattr(cfg.style, name, getattr(defaults, name))
    cfg.style.font_size = max(1, _as_int(cfg.style.font_size, defaults.font_size))
    if not cfg.style.font_family:
        cfg.style.font_family = None


def _normalize_diagnostics(cfg: AppConfig) -> None:
    cfg.diagnostics.keep_log_files = max(2, _as_int(cfg.diagnostics.keep_log_files, 7))
    level = str(cfg.diagnostics.log_level).upper()
    cfg.diagnostics.log_level = level if level in _LOG_LEVELS else "INFO"


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logging.getLogger("styledconsole").warning(
            "unreadable config, using defaults", extra={"event": "config_unreadable"}
        )
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    cfg = AppConfig(
        config_version=_as_int(raw.get("config_version", CONFIG_VERSION), CONFIG_VERSION),
        window=_merge(WindowConfig, raw.get("window", {})),
        style=_merge(StyleConfig, raw.get("style", {})),
        diagnostics=_merge(DiagnosticsConfig, raw.get("diagnostics", {})),
    )

    _normalize_window(cfg)
    _normalize_style(cfg)
    _normalize_diagnostics(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
