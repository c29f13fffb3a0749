"""Widgets for the light controller TUI."""

from .bat_signal import BAT_OUTLINE, rasterize
from .color_panel import ChannelGauge, ColorPanel, ColorPreview
from .mic_panel import MicPanel
from .module_tabs import ModuleTabs
from .pattern_panel import PatternPanel
from .status_bar import StatusBar

__all__ = [
    "BAT_OUTLINE",
    "ChannelGauge",
    "ColorPanel",
    "ColorPreview",
    "MicPanel",
    "ModuleTabs",
    "PatternPanel",
    "StatusBar",
    "rasterize",
]
