"""Light and view state for an interactive session."""

from pydantic import BaseModel, Field

from .color import Color
from .enums import Channel, Tab

# Batmobile yellow
DEFAULT_COLOR = Color(r=255, g=255, b=0)


class LightState(BaseModel):
    """Authoritative view of the settings last sent to the lights.

    `pattern_index` holds the full byte range; the codec clamps it to the
    controller's last pattern when encoding.
    """

    power: bool = Field(default=True, description="Lights on/off")
    color: Color = Field(default=DEFAULT_COLOR, description="Static color")
    pattern_index: int = Field(default=0, ge=0, le=255, description="Built-in pattern index")
    mic_sensitivity: int = Field(default=0, ge=0, le=255, description="Microphone sensitivity")


class SessionView(BaseModel):
    """UI-only state: which tab is active and which color channel is edited."""

    active_tab: Tab = Field(default=Tab.COLOR)
    color_selection: Channel = Field(default=Channel.RED)
