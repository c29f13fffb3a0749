"""Tests for the bleak-backed transport (bleak is mocked)."""

import logging
from unittest.mock import AsyncMock, Mock, patch

import pytest
from bleak.exc import (
    BleakBluetoothNotAvailableError,
    BleakBluetoothNotAvailableReason,
    BleakError,
)

from batlights.exceptions import (
    AdapterNotFoundError,
    CharacteristicNotFoundError,
    FrameWriteError,
    PeripheralConnectionError,
    PeripheralNotFoundError,
    TeardownError,
)
from batlights.models.config import DEFAULT_WRITE_CHARACTERISTIC
from batlights.protocol import encode_power
from batlights.transport import BleTransport, DiscoveredDevice, scan_devices

ADDRESS = "BE:27:62:00:3E:91"


def make_client(characteristic=None):
    """Mock BleakClient with async methods."""
    client = Mock()
    client.address = ADDRESS
    client.is_connected = True
    client.connect = AsyncMock()
    client.disconnect = AsyncMock()
    client.write_gatt_char = AsyncMock()
    client.services.get_characteristic.return_value = characteristic
    return client


@pytest.fixture
def characteristic():
    char = Mock()
    char.uuid = DEFAULT_WRITE_CHARACTERISTIC
    return char


@pytest.fixture
def transport():
    return BleTransport(ADDRESS, DEFAULT_WRITE_CHARACTERISTIC, scan_timeout=0.1, connect_timeout=0.1)


class TestConnect:
    """Test acquisition of the peripheral."""

    @patch("batlights.transport.ble.BleakClient")
    @patch("batlights.transport.ble.BleakScanner")
    def test_connect_and_write(self, mock_scanner, mock_client_cls, transport, characteristic):
        device = Mock()
        mock_scanner.find_device_by_address = AsyncMock(return_value=device)
        client = make_client(characteristic)
        mock_client_cls.return_value = client

        connection = transport.connect()
        try:
            connection.write(encode_power(True))
        finally:
            connection.disconnect()

        mock_scanner.find_device_by_address.assert_awaited_once_with(ADDRESS, timeout=0.1)
        mock_client_cls.assert_called_once_with(device, timeout=0.1)
        client.services.get_characteristic.assert_called_once_with(DEFAULT_WRITE_CHARACTERISTIC)
        client.write_gatt_char.assert_awaited_once_with(
            characteristic, encode_power(True), response=False
        )
        client.disconnect.assert_awaited_once()
        assert connection.address == ADDRESS

    @patch("batlights.transport.ble.BleakClient")
    @patch("batlights.transport.ble.BleakScanner")
    def test_device_not_found(self, mock_scanner, mock_client_cls, transport, caplog):
        mock_scanner.find_device_by_address = AsyncMock(return_value=None)

        with caplog.at_level(logging.ERROR):
            with pytest.raises(PeripheralNotFoundError):
                transport.connect()

        errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert len(errors) == 1

        mock_client_cls.assert_not_called()

    @patch("batlights.transport.ble.BleakClient")
    @patch("batlights.transport.ble.BleakScanner")
    def test_characteristic_missing_disconnects(self, mock_scanner, mock_client_cls, transport):
        mock_scanner.find_device_by_address = AsyncMock(return_value=Mock())
        client = make_client(characteristic=None)
        mock_client_cls.return_value = client

        with pytest.raises(CharacteristicNotFoundError):
            transport.connect()

        client.disconnect.assert_awaited_once()

    @patch("batlights.transport.ble.BleakClient")
    @patch("batlights.transport.ble.BleakScanner")
    def test_connection_refused(self, mock_scanner, mock_client_cls, transport):
        mock_scanner.find_device_by_address = AsyncMock(return_value=Mock())
        client = make_client()
        client.connect = AsyncMock(side_effect=BleakError("Connection was rejected"))
        mock_client_cls.return_value = client

        with pytest.raises(PeripheralConnectionError) as exc_info:
            transport.connect()

        assert isinstance(exc_info.value.__cause__, BleakError)

    @patch("batlights.transport.ble.BleakScanner")
    def test_bluetooth_powered_off(self, mock_scanner, transport):
        mock_scanner.find_device_by_address = AsyncMock(
            side_effect=BleakBluetoothNotAvailableError(
                "Bluetooth device is turned off", BleakBluetoothNotAvailableReason.POWERED_OFF
            )
        )

        with pytest.raises(AdapterNotFoundError):
            transport.connect()

    @patch("batlights.transport.ble.BleakScanner")
    def test_adapter_missing(self, mock_scanner, transport):
        mock_scanner.find_device_by_address = AsyncMock(
            side_effect=BleakError("No Bluetooth adapters found.")
        )

        with pytest.raises(AdapterNotFoundError):
            transport.connect()


class TestConnection:
    """Test writes and teardown on an established connection."""

    @patch("batlights.transport.ble.BleakClient")
    @patch("batlights.transport.ble.BleakScanner")
    def test_write_failure_raises_frame_write_error(
        self, mock_scanner, mock_client_cls, transport, characteristic
    ):
        mock_scanner.find_device_by_address = AsyncMock(return_value=Mock())
        client = make_client(characteristic)
        client.write_gatt_char = AsyncMock(side_effect=BleakError("Not connected"))
        mock_client_cls.return_value = client

        connection = transport.connect()
        try:
            with pytest.raises(FrameWriteError) as exc_info:
                connection.write(encode_power(False))
            assert exc_info.value.frame == encode_power(False)
        finally:
            connection.disconnect()

    @patch("batlights.transport.ble.BleakClient")
    @patch("batlights.transport.ble.BleakScanner")
    def test_disconnect_failure_raises_teardown_error(
        self, mock_scanner, mock_client_cls, transport, characteristic
    ):
        mock_scanner.find_device_by_address = AsyncMock(return_value=Mock())
        client = make_client(characteristic)
        client.disconnect = AsyncMock(side_effect=BleakError("already gone"))
        mock_client_cls.return_value = client

        connection = transport.connect()

        with pytest.raises(TeardownError):
            connection.disconnect()


class TestScan:
    """Test device discovery."""

    @patch("batlights.transport.ble.BleakScanner")
    def test_sorted_by_signal(self, mock_scanner):
        near, far = Mock(address="AA:AA:AA:AA:AA:AA"), Mock(address=ADDRESS)
        near.name, far.name = "LEDDMX-00", None
        near_adv, far_adv = Mock(rssi=-40, local_name=None), Mock(rssi=-80, local_name="ELK")
        mock_scanner.discover = AsyncMock(
            return_value={far.address: (far, far_adv), near.address: (near, near_adv)}
        )

        devices = scan_devices(timeout=0.1)

        assert devices == [
            DiscoveredDevice("AA:AA:AA:AA:AA:AA", "LEDDMX-00", -40),
            DiscoveredDevice(ADDRESS, "ELK", -80),
        ]
        mock_scanner.discover.assert_awaited_once_with(timeout=0.1, return_adv=True)

    @patch("batlights.transport.ble.BleakScanner")
    def test_adapter_error(self, mock_scanner):
        mock_scanner.discover = AsyncMock(side_effect=BleakError("Bluetooth adapter is powered off"))

        with pytest.raises(AdapterNotFoundError):
            scan_devices(timeout=0.1)
