"""Shared state and helpers for CLI commands."""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, NoReturn, Optional

import click

from batlights.exceptions import (
    BatLightsError,
    ConfigurationError,
    DeviceAddressMissingError,
    format_error_for_display,
)
from batlights.models import AppConfig
from batlights.transport import BleTransport, Connection, DryRunTransport, Transport

logger = logging.getLogger(__name__)


@dataclass
class CliContext:
    """Options of the top-level group, passed to subcommands via ctx.obj."""

    config_path: Path
    log_path: Path
    address: Optional[str] = None
    characteristic: Optional[str] = None
    dry_run: bool = False
    _config: Optional[AppConfig] = field(default=None, repr=False)

    def load_config(self) -> AppConfig:
        """
        Load the config file on first use.

        Raises:
            ConfigFileInvalidError: If the file has invalid JSON syntax
            ConfigValidationError: If a value fails validation
        """
        if self._config is None:
            self._config = AppConfig.load_or_default(self.config_path)
        return self._config

    @property
    def config(self) -> AppConfig:
        """Loaded configuration, or print the error and exit with status 1."""
        try:
            return self.load_config()
        except ConfigurationError as e:
            logger.error(f"Invalid configuration: {e.technical_message}")
            exit_with_error(e, self.log_path)

    @config.setter
    def config(self, value: AppConfig) -> None:
        self._config = value

    @property
    def device_address(self) -> Optional[str]:
        """Address from --address, falling back to the config file."""
        return self.address or self.config.device_address

    @property
    def write_characteristic(self) -> str:
        return self.characteristic or self.config.write_characteristic

    def build_transport(self, echo: Optional[Callable[[str], None]] = None) -> Transport:
        """
        Create the transport selected by the options.

        Raises:
            DeviceAddressMissingError: If no address is known and this is not a dry run
        """
        if self.dry_run:
            return DryRunTransport(echo=echo)

        address = self.device_address
        if not address:
            raise DeviceAddressMissingError()

        return BleTransport(
            address=address,
            characteristic_uuid=self.write_characteristic,
            scan_timeout=self.config.scan_timeout,
            connect_timeout=self.config.connect_timeout,
        )

    def connect(self, echo: Optional[Callable[[str], None]] = None) -> Connection:
        """
        Connect to the lights, or print the error and exit with status 1.

        Acquisition errors are fatal: nothing has been sent yet and there is
        nothing to fall back to.
        """
        try:
            connection = self.build_transport(echo=echo).connect()
        except BatLightsError as e:
            exit_with_error(e, self.log_path)
        logger.info(f"Session established with {connection.address}")
        return connection


def exit_with_error(error: Exception, log_path: Optional[Path] = None) -> NoReturn:
    """Show a clean error message without traceback and exit with status 1."""
    user_message, recovery_hint = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)

    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)

    if log_path:
        click.echo(f"\nFor details, check the log file: {log_path}", err=True)

    sys.exit(1)
