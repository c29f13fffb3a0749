"""Wire protocol for the light controller."""

from .codec import (
    FRAME_LENGTH,
    HEADER,
    MAX_PATTERN_INDEX,
    Opcode,
    clamp_pattern_index,
    encode_color,
    encode_mic,
    encode_pattern,
    encode_power,
    encode_state,
    format_frame,
)

__all__ = [
    "FRAME_LENGTH",
    "HEADER",
    "MAX_PATTERN_INDEX",
    "Opcode",
    "clamp_pattern_index",
    "encode_color",
    "encode_mic",
    "encode_pattern",
    "encode_power",
    "encode_state",
    "format_frame",
]
