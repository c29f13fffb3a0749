"""Frame delivery and teardown exceptions.

These never end a session on their own. The dispatch pipeline logs them
and moves on to the next frame (transmission) or finishes shutting down
(teardown).
"""

from typing import Optional

from .base import BatLightsError


class TransmissionError(BatLightsError):
    """A frame could not be handed to the peripheral."""

    pass


class FrameWriteError(TransmissionError):
    """A single characteristic write failed."""

    def __init__(self, frame: bytes, original_error: Optional[str] = None):
        """
        Initialize frame write error.

        Args:
            frame: The frame that could not be written
            original_error: The error reported by the Bluetooth stack
        """
        user_msg = "Failed to send command to the lights."
        tech_msg = f"Write of frame {frame.hex(' ').upper()} failed"
        if original_error:
            tech_msg += f": {original_error}"

        super().__init__(
            user_message=user_msg,
            technical_message=tech_msg,
            recoverable=True,
        )
        self.frame = frame


class PipelineClosedError(TransmissionError):
    """A frame was submitted after the session was closed."""

    def __init__(self):
        super().__init__(
            user_message="The command pipeline is already closed.",
            recoverable=False,
        )


class TeardownError(BatLightsError):
    """Disconnecting from the peripheral failed."""

    def __init__(self, address: Optional[str] = None, original_error: Optional[str] = None):
        """
        Initialize teardown error.

        Args:
            address: Address of the peripheral
            original_error: The error reported by the Bluetooth stack
        """
        user_msg = "Error disconnecting from the lights."
        tech_msg = f"Disconnect from {address or 'peripheral'} failed"
        if original_error:
            tech_msg += f": {original_error}"

        super().__init__(
            user_message=user_msg,
            technical_message=tech_msg,
            recoverable=True,
        )
        self.address = address
