"""
Timecode Sequences

Per-frame timecode runs for count-up and countdown material, plus the
wall-clock time and audio sample position of each frame.

Positions (start, duration) are given as frame counts or in timecode notation.
Numbers are absolute frame counts, the same as Timecode(number). At 30 fps
"01:00:00:00" and 108000 are the same position, with or without a start offset.
"""

import logging
import math
from typing import List, Optional, Union

import numpy as np

from reeltc.timecode import (
    Number,
    Timecode,
    TimecodeInput,
    TimecodeOptions,
    is_frame_count,
    object_to_frame_count,
)

_logger = logging.getLogger(__name__)

Position = Union[Number, TimecodeInput, Timecode]


def _frame_position(value: Position, options: TimecodeOptions, name: str) -> Number:
    if is_frame_count(value):
        position = value
    else:
        position = object_to_frame_count(value, options.framerate)

    if position < 0:
        raise ValueError(f"{name} cannot be negative (got {value})")
    return position


def _whole_frames(value: Position, options: TimecodeOptions, name: str) -> int:
    return math.floor(round(_frame_position(value, options, name), 6))


def generate_countup(duration: Position, start: Position = 0,
                     options: Optional[TimecodeOptions] = None) -> List[Timecode]:
    """
    Generate one timecode per frame counting up.

    Args:
        duration: Length of the run (frames or timecode notation)
        start: First position (default 0)
        options: TimecodeOptions shared by every generated timecode

    Returns:
        duration + 1 timecodes, from start to start + duration inclusive
    """
    options = options if options is not None else TimecodeOptions()
    total_frames = _whole_frames(duration, options, "Duration")
    start_total = _whole_frames(start, options, "Start")

    _logger.debug(f"Count-up: start={start_total}, frames={total_frames}, framerate={options.framerate}")
    return [Timecode(start_total + i, options) for i in range(total_frames + 1)]


def generate_countdown(duration: Position, start: Optional[Position] = None,
                       options: Optional[TimecodeOptions] = None) -> List[Timecode]:
    """
    Generate one timecode per frame counting down.

    Args:
        duration: Length of the run (frames or timecode notation)
        start: First position (default: duration frames past the start
            offset, so the run ends at frame_count() == 0)
        options: TimecodeOptions shared by every generated timecode

    Returns:
        Timecodes from start downwards, at most duration + 1 of them.
        The run stops at zero rather than going negative.
    """
    options = options if options is not None else TimecodeOptions()
    total_frames = _whole_frames(duration, options, "Duration")
    if start is None:
        start_total = math.floor(round(options.start_offset_frame_count, 6)) + total_frames
    else:
        start_total = _whole_frames(start, options, "Start")

    _logger.debug(f"Countdown: start={start_total}, frames={total_frames}, framerate={options.framerate}")

    result = []
    for i in range(total_frames + 1):
        remaining_frames = start_total - i
        if remaining_frames < 0:
            break
        result.append(Timecode(remaining_frames, options))
    return result


def frame_times(start: Position, count: int,
                options: Optional[TimecodeOptions] = None) -> np.ndarray:
    """
    Wall-clock time in seconds of count consecutive frames.

    Matches Timecode.to_seconds() for each frame, so a start offset is
    subtracted and frames before it read as 0.0.

    Returns:
        float64 array of length count
    """
    options = options if options is not None else TimecodeOptions()
    if count < 0:
        raise ValueError(f"Frame count cannot be negative (got {count})")

    first = _frame_position(start, options, "Start")
    positions = first + np.arange(count, dtype=np.float64)
    positions = np.maximum(positions - options.start_offset_frame_count, 0.0)
    return positions / options.framerate


def frame_sample_offsets(start: Position, count: int, sample_rate: int,
                         options: Optional[TimecodeOptions] = None) -> np.ndarray:
    """
    Audio sample index at which each of count consecutive frames begins.

    Args:
        start: First frame position
        count: Number of frames
        sample_rate: Audio sample rate (Hz)
        options: TimecodeOptions for framerate and start offset

    Returns:
        int64 array of length count
    """
    if sample_rate <= 0:
        raise ValueError(f"Sample rate must be positive (got {sample_rate})")

    times = frame_times(start, count, options)
    return np.round(times * sample_rate).astype(np.int64)
