"""Configuration commands."""

import logging
from typing import Optional

import click
from pydantic import ValidationError

from batlights.cli.runtime import CliContext, exit_with_error
from batlights.exceptions import ConfigFileInvalidError, wrap_pydantic_error
from batlights.models import AppConfig
from batlights.utils import PydanticPersistence

logger = logging.getLogger(__name__)


@click.group(name="config")
def config():
    """Show or change stored settings."""
    pass


@config.command(name="show")
@click.pass_obj
def show_config(obj: CliContext):
    """Display the current configuration."""
    click.echo(f"Configuration ({obj.config_path}):\n")
    for field, value in obj.config.model_dump().items():
        click.echo(f"  {field}: {value if value is not None else '(not set)'}")


@config.command(name="path")
@click.pass_obj
def config_path(obj: CliContext):
    """Print the configuration file location."""
    click.echo(str(obj.config_path))


@config.command(name="set")
@click.option("--address", "-a", default=None, help="Bluetooth address of the lights")
@click.option("--characteristic", "-c", default=None, help="Write characteristic UUID")
@click.option("--scan-timeout", type=float, default=None, help="Scan timeout in seconds")
@click.option("--connect-timeout", type=float, default=None, help="Connection timeout in seconds")
@click.option("--queue-capacity", type=int, default=None, help="Frames buffered by the TUI")
@click.pass_obj
def set_config(
    obj: CliContext,
    address: Optional[str],
    characteristic: Optional[str],
    scan_timeout: Optional[float],
    connect_timeout: Optional[float],
    queue_capacity: Optional[int],
):
    """Update one or more settings."""
    updates = {
        "device_address": address,
        "write_characteristic": characteristic,
        "scan_timeout": scan_timeout,
        "connect_timeout": connect_timeout,
        "queue_capacity": queue_capacity,
    }
    updates = {k: v for k, v in updates.items() if v is not None}

    if not updates:
        raise click.UsageError("Nothing to set. See 'batlights config set --help'.")

    # Raw file contents, so an invalid value can be replaced
    try:
        current = PydanticPersistence.load_raw_json(obj.config_path)
    except ConfigFileInvalidError as e:
        logger.warning(f"Discarding unreadable config: {e.technical_message}")
        click.echo(f"Warning: {e.user_message}. Starting from defaults.", err=True)
        current = {}

    try:
        new_config = AppConfig.model_validate({**current, **updates})
    except ValidationError as e:
        exit_with_error(wrap_pydantic_error(e, str(obj.config_path)), obj.log_path)

    new_config.save(obj.config_path)
    obj.config = new_config
    logger.info(f"Configuration updated: {', '.join(updates)}")

    for field in updates:
        click.echo(f"  {field}: {getattr(new_config, field)}")
    click.echo(f"\nSaved to {obj.config_path}")
