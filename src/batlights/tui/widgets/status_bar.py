"""Status bar widget showing power and connection state."""

from textual.widgets import Static


class StatusBar(Static):
    """
    Status bar displaying current session state.

    Shows:
    - Power state
    - Connected peripheral address
    """

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        background: $panel;
        color: $text;
        padding: 0 1;
    }

    StatusBar.power_on {
        background: $success;
    }

    StatusBar.power_off {
        background: $error;
    }
    """

    def __init__(self) -> None:
        """Initialize status bar."""
        super().__init__()
        self._power = True
        self._address = "Not connected"
        self._update_display()

    def update_state(self, power: bool, address: str) -> None:
        """
        Update all status information.

        Args:
            power: Whether the lights are on
            address: Address of the connected peripheral
        """
        self._power = power
        self._address = address
        self._update_display()

    def _update_display(self) -> None:
        """Update the status bar display."""
        if self._power:
            power_text = "● ON"
            self.remove_class("power_off")
            self.add_class("power_on")
        else:
            power_text = "○ OFF"
            self.remove_class("power_on")
            self.add_class("power_off")

        self.update(" | ".join([power_text, f"📡 {self._address}", "p: Power"]))
