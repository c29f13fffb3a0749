"""Tab strip showing which module is being edited."""

from textual.widgets import Static

from batlights.models import Tab


class ModuleTabs(Static):
    """Renders the Color / Pattern / Mic tabs with the active one highlighted."""

    DEFAULT_CSS = """
    ModuleTabs {
        height: 3;
        border: round $primary;
        border-title-color: $text;
        padding: 0 1;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self.border_title = "Modules"
        self.set_tab(Tab.COLOR)

    def set_tab(self, active: Tab) -> None:
        """Highlight the active tab."""
        parts = []
        for tab in Tab:
            if tab is active:
                parts.append(f"[reverse bold yellow] {tab.label} [/]")
            else:
                parts.append(f" {tab.label} ")
        self.update(" │ ".join(parts))
