"""Pattern tab."""

from textual.widgets import Static

from batlights.protocol import clamp_pattern_index


class PatternPanel(Static):
    """Shows the selected built-in pattern."""

    DEFAULT_CSS = """
    PatternPanel {
        height: 1fr;
        border: round $warning;
        content-align: center middle;
        text-align: center;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.border_title = "Pattern Selector"
        self.set_pattern(0)

    def set_pattern(self, index: int) -> None:
        """Show the pattern index, and the index the controller uses if it was clamped."""
        effective = clamp_pattern_index(index)
        line = f"[bold]Current Pattern Index: {index}[/]"
        if effective != index:
            line += f" [dim](sent as {effective})[/]"
        self.update(
            f"{line}\n\n"
            "Use UP/DOWN keys to change the pattern.\n"
            "Patterns are hardware defined."
        )
