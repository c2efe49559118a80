"""Core console services: capture protocol, UI dispatch, console facade, settings, logging."""

from .capture import CaptureState, InputCaptureBridge, InputSession, Key, KeyEvent
from .config import AppConfig, load_config, save_config
from .console import FieldPosition, FieldSink, StyledConsole
from .dispatch import UiDispatcher

__all__ = [
    "AppConfig",
    "CaptureState",
    "FieldPosition",
    "FieldSink",
    "InputCaptureBridge",
    "InputSession",
    "Key",
    "KeyEvent",
    "StyledConsole",
    "UiDispatcher",
    "load_config",
    "save_config",
]
