"""Pytest fixtures for tests."""

import threading
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from batlights.exceptions import FrameWriteError, TeardownError


class FakeConnection:
    """
    In-memory Connection that records frames.

    Args:
        fail_on: Frames whose write raises FrameWriteError (still recorded as attempted)
        fail_disconnect: Raise TeardownError from disconnect()
        gate: Optional event every write waits on, to simulate a stalled link
    """

    def __init__(self, fail_on=(), fail_disconnect=False, gate=None):
        self.fail_on = set(fail_on)
        self.fail_disconnect = fail_disconnect
        self.gate = gate
        self.attempted: list[bytes] = []
        self.frames: list[bytes] = []
        self.disconnect_count = 0
        self.disconnected = threading.Event()
        self.write_started = threading.Event()

    @property
    def address(self) -> str:
        return "AA:BB:CC:DD:EE:FF"

    def write(self, frame: bytes) -> None:
        self.write_started.set()
        if self.gate is not None:
            self.gate.wait()
        self.attempted.append(frame)
        if frame in self.fail_on:
            raise FrameWriteError(frame, original_error="simulated failure")
        self.frames.append(frame)

    def disconnect(self) -> None:
        self.disconnect_count += 1
        self.disconnected.set()
        if self.fail_disconnect:
            raise TeardownError(self.address, original_error="simulated failure")


class RecordingSink:
    """FrameSink that keeps submitted frames."""

    def __init__(self):
        self.frames: list[bytes] = []

    def submit(self, frame: bytes) -> None:
        self.frames.append(frame)


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_connection():
    """Connection that records every frame."""
    return FakeConnection()


@pytest.fixture
def recording_sink():
    """Sink standing in for a dispatch pipeline."""
    return RecordingSink()
