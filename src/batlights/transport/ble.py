"""Bluetooth Low Energy transport built on bleak."""

import asyncio
import logging
import threading
from concurrent.futures import Future
from typing import Any, Coroutine, NamedTuple, Optional, TypeVar

from bleak import BleakClient, BleakScanner
from bleak.backends.characteristic import BleakGATTCharacteristic
from bleak.exc import BleakError

from batlights.exceptions import (
    AcquisitionError,
    CharacteristicNotFoundError,
    ErrorContext,
    FrameWriteError,
    PeripheralNotFoundError,
    TeardownError,
    wrap_ble_error,
)
from batlights.protocol import format_frame

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DiscoveredDevice(NamedTuple):
    """A peripheral seen during a scan."""

    address: str
    name: Optional[str]
    rssi: Optional[int]


class _LoopThread:
    """
    Private asyncio event loop running on a background thread.

    bleak clients are bound to the loop they were created on. Running one
    loop for the whole connection lets synchronous callers (the CLI on the
    main thread, the dispatch pipeline's writer thread) share a client.
    """

    def __init__(self) -> None:
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._loop.run_forever, name="batlights-ble-loop", daemon=True
        )
        self._thread.start()

    def run(self, coro: Coroutine[Any, Any, T]) -> T:
        """Run a coroutine on the loop and wait for its result."""
        future: Future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        return future.result()

    def stop(self) -> None:
        """Stop the loop and release it."""
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=1.0)
        if not self._thread.is_alive():
            self._loop.close()


class BleConnection:
    """
    Connected light controller.

    Writes go out without response: the controller does not acknowledge
    commands, and waiting for a link-layer response only adds latency.
    """

    def __init__(
        self,
        client: BleakClient,
        characteristic: BleakGATTCharacteristic,
        loop_thread: _LoopThread,
    ):
        self._client = client
        self._characteristic = characteristic
        self._loop_thread = loop_thread

    @property
    def address(self) -> str:
        return self._client.address

    @property
    def is_connected(self) -> bool:
        return self._client.is_connected

    def write(self, frame: bytes) -> None:
        """
        Write one frame to the command characteristic.

        Raises:
            FrameWriteError: If bleak reports a failure
        """
        try:
            self._loop_thread.run(
                self._client.write_gatt_char(self._characteristic, frame, response=False)
            )
        except (BleakError, OSError, asyncio.TimeoutError) as e:
            raise FrameWriteError(frame, original_error=str(e)) from e
        logger.debug(f"Wrote {format_frame(frame)} to {self.address}")

    def disconnect(self) -> None:
        """
        Disconnect and stop the event loop.

        Raises:
            TeardownError: If bleak reports a failure
        """
        try:
            self._loop_thread.run(self._client.disconnect())
        except (BleakError, OSError, asyncio.TimeoutError) as e:
            raise TeardownError(self.address, original_error=str(e)) from e
        finally:
            self._loop_thread.stop()


class BleTransport:
    """
    Connects to a light controller by address.

    Example:
        ```python
        transport = BleTransport("BE:27:62:00:3E:91")
        connection = transport.connect()
        connection.write(encode_power(True))
        connection.disconnect()
        ```
    """

    def __init__(
        self,
        address: str,
        characteristic_uuid: str,
        scan_timeout: float = 5.0,
        connect_timeout: float = 10.0,
    ):
        """
        Initialize the transport.

        Args:
            address: Bluetooth address of the controller
            characteristic_uuid: UUID of the characteristic frames are written to
            scan_timeout: How long to scan for the address (seconds)
            connect_timeout: bleak connection timeout (seconds)
        """
        self.address = address
        self.characteristic_uuid = characteristic_uuid
        self.scan_timeout = scan_timeout
        self.connect_timeout = connect_timeout

    def connect(self) -> BleConnection:
        """
        Scan for the controller, connect and resolve the write characteristic.

        Raises:
            AcquisitionError: If any step fails (see wrap_ble_error)
        """
        loop_thread = _LoopThread()
        try:
            with ErrorContext(f"connect to {self.address}", logger_instance=logger):
                client, characteristic = loop_thread.run(self._connect())
        except AcquisitionError:
            loop_thread.stop()
            raise
        except Exception as e:
            loop_thread.stop()
            raise wrap_ble_error(e, self.address, self.characteristic_uuid) from e

        logger.info(f"Connected to {self.address}, writing to {characteristic.uuid}")
        return BleConnection(client, characteristic, loop_thread)

    async def _connect(self) -> tuple[BleakClient, BleakGATTCharacteristic]:
        logger.info(f"Scanning for {self.address} ({self.scan_timeout:g}s)")
        device = await BleakScanner.find_device_by_address(self.address, timeout=self.scan_timeout)
        if device is None:
            raise PeripheralNotFoundError(self.address, self.scan_timeout)

        client = BleakClient(device, timeout=self.connect_timeout)
        await client.connect()
        logger.info("Connected! Discovering services...")

        characteristic = client.services.get_characteristic(self.characteristic_uuid)
        if characteristic is None:
            await client.disconnect()
            raise CharacteristicNotFoundError(self.address, self.characteristic_uuid)

        return client, characteristic


def scan_devices(timeout: float = 5.0) -> list[DiscoveredDevice]:
    """
    List advertising BLE peripherals, strongest signal first.

    Raises:
        AdapterNotFoundError: If no Bluetooth adapter is available
    """
    return asyncio.run(_scan(timeout))


async def _scan(timeout: float) -> list[DiscoveredDevice]:
    try:
        found = await BleakScanner.discover(timeout=timeout, return_adv=True)
    except (BleakError, OSError) as e:
        raise wrap_ble_error(e, address="*") from e

    devices = [
        DiscoveredDevice(address=device.address, name=device.name or adv.local_name, rssi=adv.rssi)
        for device, adv in found.values()
    ]
    devices.sort(key=lambda d: d.rssi if d.rssi is not None else -999, reverse=True)
    logger.info(f"Scan found {len(devices)} device(s)")
    return devices
