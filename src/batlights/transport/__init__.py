"""Wireless transport to the light controller."""

from .ble import BleConnection, BleTransport, DiscoveredDevice, scan_devices
from .dry_run import DRY_RUN_ADDRESS, DryRunConnection, DryRunTransport
from .protocols import Connection, Transport

__all__ = [
    "DRY_RUN_ADDRESS",
    "BleConnection",
    "BleTransport",
    "Connection",
    "DiscoveredDevice",
    "DryRunConnection",
    "DryRunTransport",
    "Transport",
    "scan_devices",
]
