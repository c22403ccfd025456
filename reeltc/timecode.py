"""
SMPTE Timecode Value Object

A timecode is stored as hours, minutes, seconds and frames bound to a framerate.
All arithmetic happens on the linear frame count:

    count = hours * 3600 * fps + minutes * 60 * fps + seconds * fps + frames

and the HH:MM:SS:FF fields are a normalized view of that count:
- frames  = count % fps
- seconds = floor(count / fps) % 60
- minutes = floor(count / (fps * 60)) % 60
- hours   = floor(count / (fps * 3600)) % 24 (wraps daily, like a broadcast clock)

The whole seconds and the frames remainder come from a single divmod so the
two always agree at fractional framerates.

Start offset (optional):
- A reel mastered to start at 01:00:00:00 treats that position as frame zero
- Positions before the offset read as zero, never negative
- Disabled unless TimecodeOptions.start_offset is set

No drop-frame compensation is applied. Fractional rates such as 29.97 are used
as-is, so frame counts and the frames field may be fractional.
"""

import logging
import math
import numbers
from collections.abc import Mapping
from dataclasses import dataclass
from functools import total_ordering
from typing import NamedTuple, Optional, Union

_logger = logging.getLogger(__name__)

Number = Union[int, float]

DEFAULT_FRAMERATE = 29.97
DEFAULT_START_OFFSET = "01:00:00:00"

_FIELDS = ("hours", "minutes", "seconds", "frames")
_INVALID_TIMECODE = "Input string is not a valid SMPTE timecode."


class ParseError(ValueError):
    """Raised when a timecode string is not HH:MM:SS:FF."""


@dataclass(frozen=True)
class TimecodeObject:
    """Plain HH:MM:SS:FF fields, not bound to a framerate."""
    hours: Number = 0
    minutes: Number = 0
    seconds: Number = 0
    frames: Number = 0


# A timecode string ("01:00:00:00") or a TimecodeObject. Mappings with the four
# keys and anything exposing the four attributes (e.g. a Timecode) also work.
TimecodeInput = Union[str, TimecodeObject]


def _parse_segment(segment: str) -> Number:
    try:
        return int(segment)
    except ValueError:
        pass

    try:
        value = float(segment)
    except ValueError:
        value = math.nan

    # Non-numeric segments are rejected rather than carried along as NaN
    if not math.isfinite(value):
        raise ParseError(f"Input string is not a valid SMPTE timecode (segment {segment!r} is not a number).")
    return int(value) if value.is_integer() else value


def parse_input(value: TimecodeInput) -> TimecodeObject:
    """
    Parse a timecode string or copy a timecode-like object.

    Args:
        value: "HH:MM:SS:FF" string, TimecodeObject, mapping with the four
            field keys, or any object with hours/minutes/seconds/frames

    Returns:
        A new TimecodeObject (never the object passed in)

    Raises:
        ParseError: String does not have exactly four numeric segments
        TypeError: Value is not timecode-like
    """
    if isinstance(value, str):
        parts = value.split(":")
        if len(parts) != 4:
            raise ParseError(_INVALID_TIMECODE)

        hours, minutes, seconds, frames = (_parse_segment(part) for part in parts)
        return TimecodeObject(hours=hours, minutes=minutes, seconds=seconds, frames=frames)

    if isinstance(value, Mapping):
        missing = [name for name in _FIELDS if name not in value]
        if missing:
            raise TypeError(f"Timecode mapping is missing {', '.join(missing)}")
        return TimecodeObject(*(value[name] for name in _FIELDS))

    if all(hasattr(value, name) for name in _FIELDS):
        return TimecodeObject(*(getattr(value, name) for name in _FIELDS))

    raise TypeError(f"Cannot interpret {value!r} as a timecode")


def object_to_frame_count(value: TimecodeInput, framerate: float) -> Number:
    """Convert HH:MM:SS:FF fields to a frame count. No rounding is applied."""
    if not isinstance(value, TimecodeObject):
        value = parse_input(value)

    count = 0
    count += value.hours * 60 * 60 * framerate
    count += value.minutes * 60 * framerate
    count += value.seconds * framerate
    count += value.frames
    return count


def is_frame_count(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _display_int(value: Number) -> int:
    # Fractional frames (from fractional framerates) show the frame in progress
    if isinstance(value, float):
        return math.floor(round(value, 6))
    return int(value)


def _pad(value: Number) -> str:
    return f"{_display_int(value):02d}"


@dataclass(frozen=True)
class TimecodeOptions:
    """
    Configuration bound to a Timecode for its whole lifetime.

    Attributes:
        framerate: Frames per second (default 29.97, no drop-frame)
        start_offset: Position treated as frame zero, or None for no offset.
            Strings and mappings are parsed into a TimecodeObject.
    """
    framerate: float = DEFAULT_FRAMERATE
    start_offset: Optional[TimecodeInput] = None

    def __post_init__(self):
        if self.start_offset is not None:
            object.__setattr__(self, "start_offset", parse_input(self.start_offset))

    @classmethod
    def broadcast(cls, framerate: float = DEFAULT_FRAMERATE,
                  start_offset: TimecodeInput = DEFAULT_START_OFFSET) -> 'TimecodeOptions':
        """Options for reels that start at 01:00:00:00."""
        return cls(framerate=framerate, start_offset=start_offset)

    @property
    def start_offset_frame_count(self) -> Number:
        """Frame count of the start offset at this framerate (0 when unset)."""
        if self.start_offset is None:
            return 0
        return object_to_frame_count(self.start_offset, self.framerate)


class ArithmeticResult(NamedTuple):
    """Result of Timecode.add_checked(): the new timecode and whether it hit zero."""
    timecode: 'Timecode'
    clamped: bool


@total_ordering
class Timecode:
    """
    SMPTE timecode bound to a framerate and an optional start offset.

    Instances are immutable values: add() and subtract() return a new Timecode
    with the same options. Augmented assignment (tc += 30) rebinds the name.

    Args:
        value: Frame count (normalized into HH:MM:SS:FF) or a TimecodeInput
            (fields stored verbatim, e.g. "25:61:99:05" is kept as-is)
        options: TimecodeOptions (default 29.97 fps, no start offset)
    """

    __slots__ = ("_hours", "_minutes", "_seconds", "_frames", "_options", "_start_offset_frame_count")

    parse_input = staticmethod(parse_input)
    object_to_frame_count = staticmethod(object_to_frame_count)

    def __init__(self, value: Union[Number, TimecodeInput], options: Optional[TimecodeOptions] = None):
        self._options = options if options is not None else TimecodeOptions()

        if is_frame_count(value):
            fields = self._frame_count_to_object(value)
        else:
            fields = parse_input(value)

        self._hours = fields.hours
        self._minutes = fields.minutes
        self._seconds = fields.seconds
        self._frames = fields.frames
        self._start_offset_frame_count = self._options.start_offset_frame_count

    @property
    def hours(self) -> Number:
        return self._hours

    @property
    def minutes(self) -> Number:
        return self._minutes

    @property
    def seconds(self) -> Number:
        return self._seconds

    @property
    def frames(self) -> Number:
        return self._frames

    @property
    def options(self) -> TimecodeOptions:
        return self._options

    @property
    def framerate(self) -> float:
        return self._options.framerate

    @property
    def start_offset_frame_count(self) -> Number:
        return self._start_offset_frame_count

    def _frame_count_to_object(self, count: Number) -> TimecodeObject:
        fps = self._options.framerate
        total_seconds, frames = divmod(count, fps)

        # A float remainder a hair below fps belongs to the next second
        if isinstance(frames, float) and fps - frames < 1e-6:
            total_seconds, frames = total_seconds + 1, 0.0

        total_seconds = int(total_seconds)
        return TimecodeObject(
            hours=(total_seconds // 3600) % 24,
            minutes=(total_seconds // 60) % 60,
            seconds=total_seconds % 60,
            frames=frames,
        )

    def _raw_frame_count(self) -> Number:
        return object_to_frame_count(self.to_object(), self.framerate)

    def _to_frame_delta(self, value: Union[Number, TimecodeInput]) -> Number:
        if is_frame_count(value):
            return value
        return object_to_frame_count(parse_input(value), self.framerate)

    def frame_count(self) -> Number:
        """
        Frame count of this timecode.

        With a start offset the offset is subtracted and anything before it
        reads as 0. Without one the raw count is returned.
        """
        count = self._raw_frame_count()
        if self._options.start_offset is None:
            return count

        count -= self._start_offset_frame_count
        if count < 0:
            return 0
        return count

    def add_checked(self, value: Union[Number, TimecodeInput], subtract: bool = False) -> ArithmeticResult:
        """
        Add (or subtract) a duration and report whether the result was clamped.

        Args:
            value: Frame count, or a duration in timecode notation
            subtract: Subtract instead of add

        Returns:
            ArithmeticResult(timecode, clamped), clamped is True when the
            result would have been negative and was set to zero
        """
        delta = self._to_frame_delta(value)
        count = self.frame_count() - delta if subtract else self.frame_count() + delta

        clamped = count < 0
        if clamped:
            _logger.debug(f"Clamping {self} {'-' if subtract else '+'} {delta} frames to zero (result was {count})")
            count = 0

        return ArithmeticResult(Timecode(self._start_offset_frame_count + count, self._options), clamped)

    def subtract_checked(self, value: Union[Number, TimecodeInput]) -> ArithmeticResult:
        return self.add_checked(value, subtract=True)

    def add(self, value: Union[Number, TimecodeInput], subtract: bool = False) -> 'Timecode':
        """Return a new timecode moved by value frames. Never goes below zero."""
        return self.add_checked(value, subtract).timecode

    def subtract(self, value: Union[Number, TimecodeInput]) -> 'Timecode':
        return self.add(value, subtract=True)

    def to_milliseconds(self) -> float:
        return (1000 / self.framerate) * self.frame_count()

    def to_seconds(self) -> float:
        return (1 / self.framerate) * self.frame_count()

    def to_object(self) -> TimecodeObject:
        return TimecodeObject(self._hours, self._minutes, self._seconds, self._frames)

    def to_string(self) -> str:
        """Format as HH:MM:SS:FF (fields padded to two digits, never truncated)."""
        return f"{_pad(self._hours)}:{_pad(self._minutes)}:{_pad(self._seconds)}:{_pad(self._frames)}"

    def _same_timebase(self, other: 'Timecode') -> bool:
        return (self.framerate == other.framerate
                and self._start_offset_frame_count == other._start_offset_frame_count)

    @staticmethod
    def _is_operand(value) -> bool:
        return is_frame_count(value) or isinstance(value, (str, Mapping, TimecodeObject, Timecode))

    def __add__(self, other):
        if not self._is_operand(other):
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other):
        if not self._is_operand(other):
            return NotImplemented
        return self.subtract(other)

    def __eq__(self, other):
        if not isinstance(other, Timecode):
            return NotImplemented
        return self._same_timebase(other) and self._raw_frame_count() == other._raw_frame_count()

    def __lt__(self, other):
        if not isinstance(other, Timecode) or not self._same_timebase(other):
            return NotImplemented
        return self._raw_frame_count() < other._raw_frame_count()

    def __hash__(self):
        return hash((self.framerate, self._start_offset_frame_count, self._raw_frame_count()))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        if self._options.start_offset is None:
            return f"Timecode('{self}', framerate={self.framerate})"
        offset = Timecode(self._options.start_offset, TimecodeOptions(framerate=self.framerate))
        return f"Timecode('{self}', framerate={self.framerate}, start_offset='{offset}')"
