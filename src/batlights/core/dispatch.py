"""Dispatch pipeline between the interactive loop and the transport."""

import logging
import threading
from queue import Queue
from typing import NamedTuple, Optional, Protocol

from batlights.exceptions import BatLightsError, PipelineClosedError
from batlights.protocol import format_frame
from batlights.transport.protocols import Connection

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100

# End-of-stream marker, queued by close()
_CLOSE = object()


class FrameSink(Protocol):
    """Producer end of a pipeline, as seen by the interactive loop."""

    def submit(self, frame: bytes) -> None:
        ...


class PipelineStats(NamedTuple):
    """Delivery counters of a pipeline."""

    delivered: int
    failed: int


class DispatchPipeline:
    """
    Bounded FIFO of command frames with a dedicated writer thread.

    The producer (CLI or TUI) calls `submit` and never touches the
    connection. The consumer thread forwards frames to the connection in
    submit order. A failed write is logged and the next frame is still
    attempted.

    Lifecycle:
    1. start(): Launch the writer thread
    2. submit(): Queue frames (blocks briefly while the queue is full)
    3. close(): Signal end of session (no more frames accepted)
    4. join(): Wait until queued frames are written and the connection
       has been disconnected, exactly once

    Usable as a context manager, which does all four around the block.
    """

    def __init__(self, connection: Connection, capacity: int = DEFAULT_CAPACITY):
        """
        Initialize the pipeline.

        Args:
            connection: Established connection; the pipeline takes ownership
                and disconnects it when closed
            capacity: Maximum number of queued frames before submit blocks
        """
        if capacity < 1:
            raise ValueError("capacity must be at least 1")

        self._connection = connection
        self._queue: Queue = Queue(maxsize=capacity)
        self._closed = False
        self._close_lock = threading.Lock()
        self._writer_thread: Optional[threading.Thread] = None
        self._delivered = 0
        self._failed = 0

    def start(self) -> None:
        """Start the writer thread."""
        if self._writer_thread is not None:
            logger.warning("DispatchPipeline is already running")
            return

        # Not a daemon: the process must wait for the drain and disconnect
        self._writer_thread = threading.Thread(
            target=self._write_frames, name="batlights-writer", daemon=False
        )
        self._writer_thread.start()
        logger.debug("DispatchPipeline started")

    def submit(self, frame: bytes) -> None:
        """
        Queue a frame for delivery.

        Blocks while the queue is full.

        Raises:
            PipelineClosedError: If close() was already called
        """
        if self._closed:
            raise PipelineClosedError()
        self._queue.put(frame)

    def close(self) -> None:
        """Stop accepting frames. Already queued frames are still delivered."""
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        self._queue.put(_CLOSE)
        logger.debug("DispatchPipeline closed")

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the writer thread to drain the queue and disconnect.

        Args:
            timeout: Seconds to wait, or None to wait as long as it takes

        Returns:
            True if the writer thread has finished
        """
        if self._writer_thread is None:
            return True
        self._writer_thread.join(timeout)
        return not self._writer_thread.is_alive()

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def stats(self) -> PipelineStats:
        """Delivered and failed write counts so far."""
        return PipelineStats(self._delivered, self._failed)

    def _write_frames(self) -> None:
        """Writer thread body."""
        while True:
            frame = self._queue.get()
            if frame is _CLOSE:
                break

            try:
                self._connection.write(frame)
                self._delivered += 1
                logger.debug(f"Frame written: {format_frame(frame)}")
            except BatLightsError as e:
                self._failed += 1
                logger.error(f"Error sending command: {e.technical_message}")
            except Exception as e:
                self._failed += 1
                logger.error(f"Error sending command {format_frame(frame)}: {e}", exc_info=True)

        self._disconnect()

    def _disconnect(self) -> None:
        """Tear down the connection. Failures are logged, never raised."""
        try:
            self._connection.disconnect()
            logger.info(f"Disconnected from {self._connection.address}")
        except BatLightsError as e:
            logger.error(f"Error disconnecting: {e.technical_message}")
        except Exception as e:
            logger.error(f"Error disconnecting: {e}", exc_info=True)

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        self.join()
