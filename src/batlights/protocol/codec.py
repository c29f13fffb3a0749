"""
Command frame encoder for LEDDMX-00 light controllers.

Frames: What the Controller Understands
========================================

Every command is a fixed nine-byte frame written to a single GATT
characteristic. The layout is dictated by the controller firmware::

    [0x7B] [0xFF] [opcode] [payload ...] [0xBF]
     Start  fixed   │                      End
                    └─ 0x04 power, 0x07 color, 0x03 pattern, 0x0B mic

Unused payload positions carry filler bytes (mostly 0xFF), never zero,
unless the firmware expects a zero in that position.

Frame Layouts
-------------

::

    power    7B FF 04 [03|02] FF FF FF FF BF     03 = on, 02 = off
    color    7B FF 07  r  g  b 00 FF BF
    pattern  7B FF 03 idx FF FF FF FF BF         idx clamped to 0-210
    mic      7B FF 0B  s 00 FF FF BF 00          trailer shifted by one

The mic frame really does end in 0x00, with the 0xBF terminator one byte
earlier. It is reproduced byte for byte.

Key Design Principle
--------------------

**Pure functions**: nothing here talks to hardware or keeps state. Equal
inputs always give identical frames, so frames can be compared in tests
and deduplicated by callers. Pattern index clamping happens here and
nowhere else.

References
----------

- LEDDMX-00 protocol notes (user154lt/LEDDMX-00, Dmx00Data.kt)
"""

from enum import IntEnum

from batlights.models import Color, LightState

FRAME_LENGTH = 9
HEADER = 0x7B
MAX_PATTERN_INDEX = 210

POWER_ON = 0x03
POWER_OFF = 0x02


class Opcode(IntEnum):
    """Command kind, stored in byte 2 of every frame."""

    PATTERN = 0x03
    POWER = 0x04
    COLOR = 0x07
    MIC = 0x0B


def encode_power(on: bool) -> bytes:
    """Build the power on/off frame."""
    return bytes([
        HEADER, 0xFF, Opcode.POWER,
        POWER_ON if on else POWER_OFF,
        0xFF, 0xFF, 0xFF, 0xFF, 0xBF,
    ])


def encode_color(color: Color) -> bytes:
    """
    Build the static color frame.

    Example:
        >>> encode_color(Color(r=255, g=0, b=0)).hex(" ")
        '7b ff 07 ff 00 00 00 ff bf'
    """
    return bytes([HEADER, 0xFF, Opcode.COLOR, color.r, color.g, color.b, 0x00, 0xFF, 0xBF])


def clamp_pattern_index(index: int) -> int:
    """Clamp a pattern index to the controller's range (0-210)."""
    return max(0, min(index, MAX_PATTERN_INDEX))


def encode_pattern(index: int) -> bytes:
    """
    Build the built-in pattern frame.

    Out-of-range indices are clamped, never rejected:
    ``encode_pattern(255) == encode_pattern(210)``.
    """
    return bytes([
        HEADER, 0xFF, Opcode.PATTERN,
        clamp_pattern_index(index),
        0xFF, 0xFF, 0xFF, 0xFF, 0xBF,
    ])


def encode_mic(sensitivity: int) -> bytes:
    """
    Build the microphone sensitivity frame.

    The full byte range is legal, so no clamping is applied. Values outside
    0-255 raise ValueError.
    """
    return bytes([HEADER, 0xFF, Opcode.MIC, sensitivity, 0x00, 0xFF, 0xFF, 0xBF, 0x00])


def encode_state(state: LightState) -> list[bytes]:
    """
    Build the frames that reproduce a whole LightState on the controller.

    Order: power, color, pattern, mic.
    """
    return [
        encode_power(state.power),
        encode_color(state.color),
        encode_pattern(state.pattern_index),
        encode_mic(state.mic_sensitivity),
    ]


def format_frame(frame: bytes) -> str:
    """Render a frame as spaced upper-case hex, e.g. '7B FF 04 03 ...'."""
    return frame.hex(" ").upper()
