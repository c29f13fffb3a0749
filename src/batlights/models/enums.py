"""Enumerations for the interactive session."""

from enum import Enum


class Tab(str, Enum):
    """Interactive editing contexts, in rotation order."""

    COLOR = "color"
    PATTERN = "pattern"
    MIC = "mic"

    def next(self) -> "Tab":
        """Tab after this one (Mic wraps around to Color)."""
        members = list(Tab)
        return members[(members.index(self) + 1) % len(members)]

    def previous(self) -> "Tab":
        """Tab before this one (Color wraps around to Mic)."""
        members = list(Tab)
        return members[(members.index(self) - 1) % len(members)]

    @property
    def label(self) -> str:
        return self.value.title()


class Channel(str, Enum):
    """Color channel selected for editing. Values match Color field names."""

    RED = "r"
    GREEN = "g"
    BLUE = "b"
