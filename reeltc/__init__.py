"""
reeltc - SMPTE Timecode Values
Frame-accurate HH:MM:SS:FF timecodes with start offset support.
"""

__version__ = "0.1.0"

from .timecode import (
    DEFAULT_FRAMERATE,
    DEFAULT_START_OFFSET,
    ArithmeticResult,
    ParseError,
    Timecode,
    TimecodeObject,
    TimecodeOptions,
    object_to_frame_count,
    parse_input,
)
from .sequence import generate_countdown, generate_countup, frame_times, frame_sample_offsets

__all__ = [
    "DEFAULT_FRAMERATE",
    "DEFAULT_START_OFFSET",
    "ArithmeticResult",
    "ParseError",
    "Timecode",
    "TimecodeObject",
    "TimecodeOptions",
    "object_to_frame_count",
    "parse_input",
    "generate_countdown",
    "generate_countup",
    "frame_times",
    "frame_sample_offsets",
]
