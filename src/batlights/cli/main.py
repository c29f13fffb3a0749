"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from batlights import __version__
from batlights.models.config import CONFIG_DIR, DEFAULT_CONFIG_PATH

from .commands import color, config, mic, pattern, power, scan, tui
from .runtime import CliContext

logger = logging.getLogger(__name__)

_FILE_HANDLER_NAME = "batlights-file"


def resolve_log_path(debug: bool, log_file: Optional[Path]) -> Path:
    """Where log records go for the given flags."""
    if log_file:
        return log_file
    if debug:
        return Path.cwd() / "batlights-debug.log"
    return CONFIG_DIR / "logs" / "batlights.log"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> Path:
    """
    Configure logging for the application.

    The TUI owns stdout, so records only go to a rotating log file.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging in the current directory
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)

    Returns:
        Path of the log file
    """
    if debug:
        level = logging.DEBUG
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Explicit log level wins when logging to a custom file
    if log_file:
        level = getattr(logging, log_level.upper())

    log_path = resolve_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(threadName)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Rotating file handler (keeps last 5 files, max 10MB each)
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    file_handler.set_name(_FILE_HANDLER_NAME)
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() == _FILE_HANDLER_NAME:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path


@click.group()
@click.pass_context
@click.version_option(version=__version__, prog_name="batlights")
@click.option(
    '--address',
    '-a',
    type=str,
    default=None,
    help='Bluetooth address of the lights (default: from config)'
)
@click.option(
    '--characteristic',
    '-c',
    type=str,
    default=None,
    help='GATT characteristic UUID to write to (default: from config)'
)
@click.option(
    '--config',
    'config_file',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Configuration file (default: ~/.batlights/config.json)'
)
@click.option(
    '--dry-run',
    is_flag=True,
    help='Print frames instead of sending them over Bluetooth'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./batlights-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
def cli(
    ctx,
    address: Optional[str],
    characteristic: Optional[str],
    config_file: Optional[Path],
    dry_run: bool,
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    BatLights - controller for LEDDMX-00 Bluetooth LED strips.

    Send a single command, or open the interactive controller with 'tui'.

    \b
    Examples:
      # Store the address of your lights once
      batlights config set --address BE:27:62:00:3E:91

      # One-shot commands
      batlights power on
      batlights color 255 0 0
      batlights pattern 12
      batlights mic 128

      # Interactive session
      batlights tui

      # Find your lights
      batlights scan

      # See the frames without any hardware
      batlights --dry-run color 0 0 255
    """
    log_path = setup_logging(verbose, debug, log_file, log_level)
    # The config file is read on first use by a command
    ctx.obj = CliContext(
        config_path=config_file or DEFAULT_CONFIG_PATH,
        log_path=log_path,
        address=address,
        characteristic=characteristic,
        dry_run=dry_run,
    )
    logger.debug(f"Invoking '{ctx.invoked_subcommand}' (dry_run={dry_run})")


cli.add_command(power)
cli.add_command(color)
cli.add_command(pattern)
cli.add_command(mic)
cli.add_command(tui)
cli.add_command(scan)
cli.add_command(config)

if __name__ == "__main__":
    cli()
