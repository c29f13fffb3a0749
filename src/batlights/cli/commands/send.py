"""One-shot commands: connect, send one frame, disconnect."""

import logging

import click

from batlights.cli.runtime import CliContext
from batlights.core import DispatchPipeline
from batlights.models import Color
from batlights.protocol import (
    clamp_pattern_index,
    encode_color,
    encode_mic,
    encode_pattern,
    encode_power,
    format_frame,
)

logger = logging.getLogger(__name__)

BYTE = click.IntRange(0, 255)


def send_frame(obj: CliContext, frame: bytes, description: str) -> None:
    """
    Deliver a single frame through a dispatch pipeline.

    Write failures are logged and reported as a warning; they don't change
    the exit status.
    """
    logger.info(f"{description} ({format_frame(frame)})")
    capacity = obj.config.queue_capacity
    connection = obj.connect(echo=click.echo)

    with DispatchPipeline(connection, capacity=capacity) as pipeline:
        pipeline.submit(frame)

    if pipeline.stats.failed:
        click.echo(
            f"Warning: the lights did not accept the command. See {obj.log_path}",
            err=True,
        )
    else:
        click.echo(description)


@click.command(name="power")
@click.argument("state", type=click.Choice(["on", "off"], case_sensitive=False))
@click.pass_obj
def power(obj: CliContext, state: str):
    """Turn the lights on or off."""
    on = state.lower() == "on"
    send_frame(obj, encode_power(on), f"Power set to: {'On' if on else 'Off'}")


@click.command(name="color")
@click.argument("r", type=BYTE)
@click.argument("g", type=BYTE)
@click.argument("b", type=BYTE)
@click.pass_obj
def color(obj: CliContext, r: int, g: int, b: int):
    """
    Set a static color (each channel 0-255).

    \b
    Example:
      batlights color 255 0 0
    """
    rgb = Color(r=r, g=g, b=b)
    send_frame(obj, encode_color(rgb), f"Setting colors to {rgb.to_hex()}")


@click.command(name="pattern")
@click.argument("index", type=BYTE)
@click.pass_obj
def pattern(obj: CliContext, index: int):
    """Select a built-in pattern (0-255, values above 210 select 210)."""
    effective = clamp_pattern_index(index)
    description = f"Setting pattern {index}"
    if effective != index:
        description += f" (clamped to {effective})"
    send_frame(obj, encode_pattern(index), description)


@click.command(name="mic")
@click.argument("sensitivity", type=BYTE)
@click.pass_obj
def mic(obj: CliContext, sensitivity: int):
    """Set microphone sensitivity (0-255)."""
    send_frame(obj, encode_mic(sensitivity), f"Mic sensitivity {sensitivity}")
