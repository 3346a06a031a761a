"""Timer package."""

from .engine import (
    TimeEngine,
    Session,
    Reading,
    Status,
    Mode,
    Timer,
    Stopwatch,
    Alarm,
    local_now,
)
from .parser import (
    ParseError,
    parse_duration,
    parse_clock_time,
    parse_mode,
)

__all__ = [
    "TimeEngine",
    "Session",
    "Reading",
    "Status",
    "Mode",
    "Timer",
    "Stopwatch",
    "Alarm",
    "local_now",
    "ParseError",
    "parse_duration",
    "parse_clock_time",
    "parse_mode",
]
