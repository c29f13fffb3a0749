"""Interactive session state and its transition function."""

import logging
from enum import Enum
from typing import NamedTuple, Optional

from batlights.models import Channel, LightState, SessionView, Tab
from batlights.protocol import encode_color, encode_mic, encode_pattern, encode_power

logger = logging.getLogger(__name__)

COLOR_STEP = 5
PATTERN_STEP = 1
MIC_STEP = 1

BYTE_MIN = 0
BYTE_MAX = 255


class InputEvent(str, Enum):
    """User intents the session understands, independent of key bindings."""

    QUIT = "quit"
    TOGGLE_POWER = "toggle_power"
    NEXT_TAB = "next_tab"
    PREVIOUS_TAB = "previous_tab"
    SELECT_RED = "select_red"
    SELECT_GREEN = "select_green"
    SELECT_BLUE = "select_blue"
    INCREMENT = "increment"
    DECREMENT = "decrement"


_CHANNEL_EVENTS = {
    InputEvent.SELECT_RED: Channel.RED,
    InputEvent.SELECT_GREEN: Channel.GREEN,
    InputEvent.SELECT_BLUE: Channel.BLUE,
}


class Transition(NamedTuple):
    """Result of applying one input event."""

    frame: Optional[bytes] = None
    quit: bool = False


def saturating_add(value: int, delta: int, low: int = BYTE_MIN, high: int = BYTE_MAX) -> int:
    """
    Add delta to value, holding at the bounds instead of wrapping.

    Example:
        >>> saturating_add(253, 5)
        255
        >>> saturating_add(2, -5)
        0
    """
    return max(low, min(value + delta, high))


class SessionState:
    """
    Owns the LightState and SessionView of one interactive session.

    This class is the single place where light settings change. Each call to
    `apply` consumes one input event, updates state in place and returns at
    most one frame for the dispatch pipeline. It never performs I/O, so the
    UI can call it from its event loop.

    `apply` is total: any event in any tab yields a Transition, events that
    make no sense in the active tab are no-ops.
    """

    def __init__(
        self,
        light: Optional[LightState] = None,
        view: Optional[SessionView] = None,
    ) -> None:
        """
        Initialize session state.

        Args:
            light: Starting light settings (defaults: on, yellow, pattern 0, sensitivity 0)
            view: Starting view (defaults: Color tab, red channel)
        """
        self.light = light if light is not None else LightState()
        self.view = view if view is not None else SessionView()

    def apply(self, event: InputEvent) -> Transition:
        """
        Apply an input event.

        Args:
            event: The user intent

        Returns:
            Transition with the frame to send (if any) and the quit flag
        """
        if event is InputEvent.QUIT:
            return Transition(quit=True)

        if event is InputEvent.TOGGLE_POWER:
            self.light.power = not self.light.power
            logger.debug(f"Power toggled: {'on' if self.light.power else 'off'}")
            return Transition(frame=encode_power(self.light.power))

        if event is InputEvent.NEXT_TAB:
            self.view.active_tab = self.view.active_tab.next()
            return Transition()

        if event is InputEvent.PREVIOUS_TAB:
            self.view.active_tab = self.view.active_tab.previous()
            return Transition()

        if event in _CHANNEL_EVENTS:
            if self.view.active_tab is Tab.COLOR:
                self.view.color_selection = _CHANNEL_EVENTS[event]
            return Transition()

        if event is InputEvent.INCREMENT:
            return self._adjust(+1)

        if event is InputEvent.DECREMENT:
            return self._adjust(-1)

        return Transition()

    def _adjust(self, direction: int) -> Transition:
        """Step the field the active tab edits, up (+1) or down (-1)."""
        tab = self.view.active_tab

        if tab is Tab.COLOR:
            channel = self.view.color_selection
            color = self.light.color
            value = saturating_add(color.channel(channel), direction * COLOR_STEP)
            self.light.color = color.with_channel(channel, value)
            return Transition(frame=encode_color(self.light.color))

        if tab is Tab.PATTERN:
            self.light.pattern_index = saturating_add(
                self.light.pattern_index, direction * PATTERN_STEP
            )
            return Transition(frame=encode_pattern(self.light.pattern_index))

        if tab is Tab.MIC:
            self.light.mic_sensitivity = saturating_add(
                self.light.mic_sensitivity, direction * MIC_STEP
            )
            return Transition(frame=encode_mic(self.light.mic_sensitivity))

        return Transition()
