"""Data models for the light controller."""

from .color import Color
from .config import AppConfig
from .enums import Channel, Tab
from .state import DEFAULT_COLOR, LightState, SessionView

__all__ = [
    "AppConfig",
    "Channel",
    "Color",
    "DEFAULT_COLOR",
    "LightState",
    "SessionView",
    "Tab",
]
