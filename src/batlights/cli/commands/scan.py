"""Bluetooth scan command."""

import logging
from typing import Optional

import click

from batlights.cli.runtime import CliContext, exit_with_error
from batlights.exceptions import BatLightsError, ConfigurationError
from batlights.transport import scan_devices

logger = logging.getLogger(__name__)


def _configured_address(obj: CliContext) -> Optional[str]:
    """Address from the config file. Scanning still works if the file is invalid."""
    try:
        return obj.load_config().device_address
    except ConfigurationError as e:
        logger.warning(f"Ignoring invalid configuration: {e.technical_message}")
        return None


@click.command(name="scan")
@click.option(
    "--timeout",
    "-t",
    type=click.FloatRange(min=0.5),
    default=5.0,
    show_default=True,
    help="Scan duration in seconds",
)
@click.pass_obj
def scan(obj: CliContext, timeout: float):
    """List nearby Bluetooth LE devices."""
    click.echo(f"Scanning for {timeout:g}s...\n")

    try:
        devices = scan_devices(timeout)
    except BatLightsError as e:
        logger.error(f"Scan failed: {e.technical_message}")
        exit_with_error(e, obj.log_path)

    if not devices:
        click.echo("  No devices found.")
        return

    configured = (obj.address or _configured_address(obj) or "").upper()
    for i, device in enumerate(devices):
        marker = "*" if device.address.upper() == configured else " "
        name = device.name or "(unknown)"
        rssi = f"{device.rssi} dBm" if device.rssi is not None else "n/a"
        click.echo(f" {marker}[{i}] {device.address}  {name}  {rssi}")

    if configured:
        click.echo("\n* configured device")
