"""Color model for the light controller."""

from pydantic import BaseModel, ConfigDict, Field

from .enums import Channel


class Color(BaseModel):
    """Standard 8-bit RGB color.

    Three independent channels, no alpha and no gamma correction. Values are
    sent to the controller exactly as stored.

    The model is frozen; use `with_channel` to derive a changed color.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255, description="Red (0-255)")
    g: int = Field(ge=0, le=255, description="Green (0-255)")
    b: int = Field(ge=0, le=255, description="Blue (0-255)")

    @classmethod
    def off(cls) -> "Color":
        """Create off (black) color."""
        return cls(r=0, g=0, b=0)

    def channel(self, channel: Channel) -> int:
        """Get the value of a single channel."""
        return getattr(self, channel.value)

    def with_channel(self, channel: Channel, value: int) -> "Color":
        """Return a copy with one channel replaced.

        Example:
            >>> Color(r=255, g=255, b=0).with_channel(Channel.GREEN, 0)
            Color(r=255, g=0, b=0)
        """
        return self.model_copy(update={channel.value: value})

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        """Convert to CSS hex color string (e.g., '#FF0000')."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"
