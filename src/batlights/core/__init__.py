"""Session logic and frame dispatch."""

from .dispatch import DEFAULT_CAPACITY, DispatchPipeline, FrameSink, PipelineStats
from .session import (
    COLOR_STEP,
    MIC_STEP,
    PATTERN_STEP,
    InputEvent,
    SessionState,
    Transition,
    saturating_add,
)

__all__ = [
    "COLOR_STEP",
    "DEFAULT_CAPACITY",
    "DispatchPipeline",
    "FrameSink",
    "InputEvent",
    "MIC_STEP",
    "PATTERN_STEP",
    "PipelineStats",
    "SessionState",
    "Transition",
    "saturating_add",
]
