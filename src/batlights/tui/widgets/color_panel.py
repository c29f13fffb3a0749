"""Color tab: one gauge per channel plus a bat-shaped preview."""

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

from batlights.models import Channel, Color

from .bat_signal import BAT_OUTLINE, rasterize
from .gauge import gauge_bar

CHANNEL_LABELS = {
    Channel.RED: ("Red (1)", "red"),
    Channel.GREEN: ("Green (2)", "green"),
    Channel.BLUE: ("Blue (3)", "blue"),
}


class ChannelGauge(Static):
    """Gauge for a single color channel."""

    DEFAULT_CSS = """
    ChannelGauge {
        height: 3;
        border: round $surface;
        padding: 0 1;
    }

    ChannelGauge.selected {
        border: double $warning;
    }
    """

    def __init__(self, channel: Channel) -> None:
        super().__init__(id=f"gauge-{channel.name.lower()}")
        self.channel = channel
        label, self._bar_color = CHANNEL_LABELS[channel]
        self.border_title = label
        self.set_value(0)

    def set_value(self, value: int) -> None:
        self.update(gauge_bar(value, self._bar_color))


class ColorPreview(Static):
    """Bat silhouette painted with the current color."""

    DEFAULT_CSS = """
    ColorPreview {
        height: 1fr;
        min-height: 3;
        border: round $surface;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self.border_title = "Preview"
        self._color = Color.off()

    def set_color(self, color: Color) -> None:
        self._color = color
        self.border_subtitle = color.to_hex()
        self._paint()

    def on_resize(self) -> None:
        self._paint()

    def _paint(self) -> None:
        size = self.content_size
        rows = rasterize(BAT_OUTLINE, size.width, size.height)
        self.update(f"[{self._color.to_hex()}]" + "\n".join(rows) + "[/]")


class ColorPanel(Vertical):
    """Content of the Color tab."""

    def compose(self) -> ComposeResult:
        for channel in Channel:
            yield ChannelGauge(channel)
        yield ColorPreview()

    def update_color(self, color: Color, selection: Channel) -> None:
        """
        Refresh gauges and preview.

        Args:
            color: Current light color
            selection: Channel that Up/Down adjusts
        """
        for gauge in self.query(ChannelGauge):
            gauge.set_value(color.channel(gauge.channel))
            gauge.set_class(gauge.channel is selection, "selected")
        self.query_one(ColorPreview).set_color(color)
