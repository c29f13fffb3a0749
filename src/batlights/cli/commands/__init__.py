"""CLI commands for batlights."""

from .config import config
from .scan import scan
from .send import color, mic, pattern, power
from .tui import tui

__all__ = ["color", "config", "mic", "pattern", "power", "scan", "tui"]
