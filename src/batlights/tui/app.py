"""Interactive light controller TUI."""

import logging
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import ContentSwitcher, Footer, Header, Static

from batlights.core import FrameSink, InputEvent, SessionState
from batlights.models import Tab
from batlights.protocol import encode_state, format_frame

from .decorators import handle_action_errors
from .widgets import ColorPanel, MicPanel, ModuleTabs, PatternPanel, StatusBar

logger = logging.getLogger(__name__)

TAB_HINTS = {
    Tab.COLOR: "Tab: Next | Shift+Tab: Prev | q: Quit | 1/2/3: Select R/G/B | ↑/↓: Adjust Value",
    Tab.PATTERN: "Tab: Next | Shift+Tab: Prev | q: Quit | ↑/↓: Adjust Pattern Index",
    Tab.MIC: "Tab: Next | Shift+Tab: Prev | q: Quit | ↑/↓: Adjust Sensitivity",
}


class LightControllerApp(App):
    """
    Textual TUI for the light controller.

    A PURE UI layer. Key presses become InputEvents that SessionState turns
    into state changes and frames; frames go to the FrameSink. The app never
    holds a transport, so a stalled Bluetooth link can't freeze the screen.

    The app does not close the sink on quit. The caller owns the pipeline
    and closes it after `run()` returns.
    """

    TITLE = "🦇 BAT-COMPUTER - LIGHT CONTROLLER 🦇"

    BINDINGS = [
        Binding("tab", "input('next_tab')", "Next Tab", priority=True),
        Binding("shift+tab", "input('previous_tab')", "Prev Tab", priority=True),
        Binding("q", "input('quit')", "Quit"),
        Binding("p", "input('toggle_power')", "Power"),
        Binding("1", "input('select_red')", "Red", show=False),
        Binding("2", "input('select_green')", "Green", show=False),
        Binding("3", "input('select_blue')", "Blue", show=False),
        Binding("up,k", "input('increment')", "Up", show=False),
        Binding("down,j", "input('decrement')", "Down", show=False),
    ]

    CSS = """
    #hints {
        height: 3;
        border: round $surface;
        color: $text-muted;
        padding: 0 1;
    }

    ContentSwitcher {
        height: 1fr;
    }
    """

    def __init__(
        self,
        sink: FrameSink,
        session: Optional[SessionState] = None,
        address: str = "Not connected",
        sync_on_start: bool = False,
    ):
        """
        Initialize the TUI.

        Args:
            sink: Where emitted frames go (normally a started DispatchPipeline)
            session: Session state to drive (defaults to a fresh one)
            address: Peripheral address shown in the status bar
            sync_on_start: Send the full starting state when the app mounts
        """
        super().__init__()
        self.sink = sink
        self.session = session if session is not None else SessionState()
        self.address = address
        self.sync_on_start = sync_on_start
        logger.info("LightControllerApp created")

    def compose(self) -> ComposeResult:
        """Create the main layout."""
        yield Header()
        yield ModuleTabs()
        with ContentSwitcher(initial=Tab.COLOR.value):
            yield ColorPanel(id=Tab.COLOR.value)
            yield PatternPanel(id=Tab.PATTERN.value)
            yield MicPanel(id=Tab.MIC.value)
        yield Static(id="hints")
        yield StatusBar()
        yield Footer()

    def on_mount(self) -> None:
        """Paint the initial state and optionally push it to the lights."""
        self.query_one("#hints", Static).border_title = "Controls"
        if self.sync_on_start:
            for frame in encode_state(self.session.light):
                self._send(frame)
        self.refresh_view()
        logger.info("TUI mounted")

    @handle_action_errors("handle input")
    def action_input(self, name: str) -> None:
        """Feed one input event to the session."""
        transition = self.session.apply(InputEvent(name))

        if transition.frame is not None:
            self._send(transition.frame)

        if transition.quit:
            logger.info("Quit requested")
            self.exit()
            return

        self.refresh_view()

    def _send(self, frame: bytes) -> None:
        logger.debug(f"Submitting {format_frame(frame)}")
        self.sink.submit(frame)

    def refresh_view(self) -> None:
        """Render the session state into the widgets."""
        light = self.session.light
        view = self.session.view

        self.query_one(ModuleTabs).set_tab(view.active_tab)
        self.query_one(ContentSwitcher).current = view.active_tab.value
        self.query_one(ColorPanel).update_color(light.color, view.color_selection)
        self.query_one(PatternPanel).set_pattern(light.pattern_index)
        self.query_one(MicPanel).set_sensitivity(light.mic_sensitivity)
        self.query_one("#hints", Static).update(TAB_HINTS[view.active_tab])
        self.query_one(StatusBar).update_state(light.power, self.address)
