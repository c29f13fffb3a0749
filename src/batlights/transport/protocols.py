"""Transport protocols.

The core only needs three operations from the wireless link:

- `Transport.connect()` establishes the session and resolves the write
  endpoint, returning a `Connection` (the handle).
- `Connection.write(frame)` sends one frame without waiting for an
  acknowledgment.
- `Connection.disconnect()` tears the session down.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Connection(Protocol):
    """An established session with the light controller."""

    @property
    def address(self) -> str:
        """Address of the connected peripheral."""
        ...

    def write(self, frame: bytes) -> None:
        """
        Send one frame.

        Raises:
            FrameWriteError: If the write fails
        """
        ...

    def disconnect(self) -> None:
        """
        Close the session.

        Raises:
            TeardownError: If disconnecting fails
        """
        ...


@runtime_checkable
class Transport(Protocol):
    """Factory for connections."""

    def connect(self) -> Connection:
        """
        Establish a session with the peripheral.

        Raises:
            AcquisitionError: If the adapter, peripheral or characteristic
                can't be found, or the connection is refused
        """
        ...
