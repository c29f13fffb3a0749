"""Transport that records frames instead of sending them."""

import logging
from typing import Callable, Optional

from batlights.protocol import format_frame

logger = logging.getLogger(__name__)

DRY_RUN_ADDRESS = "dry-run"


class DryRunConnection:
    """Connection that keeps every frame it is given."""

    def __init__(self, echo: Optional[Callable[[str], None]] = None):
        """
        Args:
            echo: Optional callback receiving a printable line per frame
        """
        self._echo = echo
        self.frames: list[bytes] = []
        self.disconnect_count = 0

    @property
    def address(self) -> str:
        return DRY_RUN_ADDRESS

    def write(self, frame: bytes) -> None:
        self.frames.append(frame)
        logger.info(f"[dry-run] {format_frame(frame)}")
        if self._echo:
            self._echo(format_frame(frame))

    def disconnect(self) -> None:
        self.disconnect_count += 1


class DryRunTransport:
    """Stand-in for BleTransport when no lights are around (--dry-run)."""

    def __init__(self, echo: Optional[Callable[[str], None]] = None):
        self._echo = echo

    def connect(self) -> DryRunConnection:
        logger.info("Dry run: frames will not be sent")
        return DryRunConnection(self._echo)
