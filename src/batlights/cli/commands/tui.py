"""Interactive session command."""

import logging

import click

from batlights.cli.runtime import CliContext
from batlights.core import DispatchPipeline

logger = logging.getLogger(__name__)


@click.command(name="tui")
@click.option(
    "--sync/--no-sync",
    default=False,
    help="Send the starting color, pattern and sensitivity when the session opens",
)
@click.pass_obj
def tui(obj: CliContext, sync: bool):
    """
    Open the interactive controller.

    \b
    Keys:
      Tab / Shift+Tab   switch between Color, Pattern and Mic
      Up, k / Down, j   adjust the active value
      1 / 2 / 3         select red, green or blue (Color tab)
      p                 toggle power
      q                 quit
    """
    # Lazy import keeps one-shot commands fast
    from batlights.tui import LightControllerApp

    capacity = obj.config.queue_capacity
    # No echo: the TUI owns the terminal
    connection = obj.connect()

    pipeline = DispatchPipeline(connection, capacity=capacity)
    pipeline.start()

    try:
        app = LightControllerApp(pipeline, address=connection.address, sync_on_start=sync)
        app.run()
    except KeyboardInterrupt:
        logger.info("Session interrupted by user")
        click.echo("\nShutting down...", err=True)
    finally:
        # Drain queued frames and disconnect before the process exits
        pipeline.close()
        pipeline.join()

    stats = pipeline.stats
    logger.info(f"Session ended: {stats.delivered} frame(s) sent, {stats.failed} failed")
    if stats.failed:
        click.echo(
            f"Warning: {stats.failed} command(s) could not be sent. See {obj.log_path}",
            err=True,
        )
