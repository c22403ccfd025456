"""Shared test fixtures."""

import pytest

from reeltc.timecode import TimecodeOptions


@pytest.fixture
def fps30() -> TimecodeOptions:
    return TimecodeOptions(framerate=30)


@pytest.fixture
def fps2997() -> TimecodeOptions:
    return TimecodeOptions(framerate=29.97)


@pytest.fixture
def broadcast30() -> TimecodeOptions:
    return TimecodeOptions.broadcast(framerate=30)
