"""Mic tab."""

from textual.widgets import Static

from .gauge import gauge_bar


class MicPanel(Static):
    """Microphone sensitivity gauge."""

    DEFAULT_CSS = """
    MicPanel {
        height: 1fr;
        border: round $warning;
        padding: 1 1;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.border_title = "Microphone Sensitivity"
        self.set_sensitivity(0)

    def set_sensitivity(self, value: int) -> None:
        self.update(f"Sensitivity: {value}\n\n{gauge_bar(value, 'magenta')}")
