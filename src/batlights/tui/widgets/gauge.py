"""Text gauge used by the channel and sensitivity widgets."""

GAUGE_WIDTH = 40


def gauge_bar(value: int, color: str, width: int = GAUGE_WIDTH, maximum: int = 255) -> str:
    """
    Render a horizontal bar as Textual markup.

    Args:
        value: Current value (0..maximum)
        color: Markup color for the filled part (e.g. "red", "#FF00FF")
        width: Total bar width in cells
        maximum: Value that fills the whole bar

    Returns:
        Markup string such as "[red]██████[/][dim]░░░░[/] 153"
    """
    filled = round(width * value / maximum) if maximum else 0
    filled = max(0, min(filled, width))
    return f"[{color}]{'█' * filled}[/][dim]{'░' * (width - filled)}[/] {value:3d}"
