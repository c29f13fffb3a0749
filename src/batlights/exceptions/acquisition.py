"""Connection acquisition exceptions.

Raised while establishing the wireless session, before any frame is sent.
All of them are fatal to the current run:

- AcquisitionError: Base class for acquisition failures
- AdapterNotFoundError: No usable Bluetooth adapter
- PeripheralNotFoundError: The controller did not show up in a scan
- CharacteristicNotFoundError: Connected, but the write endpoint is missing
- PeripheralConnectionError: The controller refused or dropped the connection
"""

from typing import Optional

from .base import BatLightsError


class AcquisitionError(BatLightsError):
    """Could not establish a session with the light controller."""

    def __init__(self, user_message: str, address: Optional[str] = None, **kwargs):
        """
        Initialize acquisition error.

        Args:
            user_message: User-friendly error message
            address: Address of the peripheral involved (if known)
        """
        super().__init__(user_message, **kwargs)
        self.address = address


class AdapterNotFoundError(AcquisitionError):
    """No Bluetooth adapter is available on this machine."""

    def __init__(self, original_error: Optional[str] = None):
        """
        Initialize adapter-not-found error.

        Args:
            original_error: The error reported by the Bluetooth stack
        """
        user_msg = "No Bluetooth adapter found."
        tech_msg = user_msg
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"

        super().__init__(
            user_message=user_msg,
            technical_message=tech_msg,
            recoverable=True,
            recovery_hint="Make sure Bluetooth is enabled and the adapter is powered on.",
        )


class PeripheralNotFoundError(AcquisitionError):
    """The peripheral did not answer a scan."""

    def __init__(self, address: str, scan_timeout: Optional[float] = None):
        """
        Initialize peripheral-not-found error.

        Args:
            address: The address that was scanned for
            scan_timeout: How long the scan ran (seconds)
        """
        user_msg = f"Could not find peripheral with address {address}."
        recovery = "Check that the lights are powered and in range. "
        recovery += "Run 'batlights scan' to list nearby devices."
        if scan_timeout is not None:
            recovery += f"\nA longer scan may help (current timeout: {scan_timeout:g}s)."

        super().__init__(
            user_message=user_msg,
            address=address,
            recoverable=True,
            recovery_hint=recovery,
        )
        self.scan_timeout = scan_timeout


class CharacteristicNotFoundError(AcquisitionError):
    """Connected to the peripheral but the write characteristic is missing."""

    def __init__(self, address: str, characteristic: str):
        """
        Initialize characteristic-not-found error.

        Args:
            address: Address of the connected peripheral
            characteristic: UUID of the characteristic that was expected
        """
        user_msg = f"Port for writing color information not found ({characteristic})."
        recovery = (
            "Make sure the address belongs to a supported LED controller, or set the "
            "characteristic with 'batlights config set --characteristic UUID'."
        )

        super().__init__(
            user_message=user_msg,
            address=address,
            recoverable=True,
            recovery_hint=recovery,
        )
        self.characteristic = characteristic


class PeripheralConnectionError(AcquisitionError):
    """The peripheral refused the connection or dropped it during setup."""

    def __init__(self, address: str, original_error: Optional[str] = None):
        """
        Initialize connection error.

        Args:
            address: Address of the peripheral
            original_error: The error reported by the Bluetooth stack
        """
        user_msg = f"Could not connect to peripheral {address}."
        tech_msg = user_msg
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"

        super().__init__(
            user_message=user_msg,
            technical_message=tech_msg,
            address=address,
            recoverable=True,
            recovery_hint=(
                "The controller accepts a single connection at a time. "
                "Close the phone app or any other session and try again."
            ),
        )
