"""Clock-face formatting shared by the engine and the frame builder."""

from __future__ import annotations

import math
from datetime import datetime, timedelta


def whole_seconds(value: timedelta, *, round_up: bool = False) -> int:
    """Seconds in *value* as a non-negative int.

    Countdowns round up so the face only reads zero once time is really
    gone; elapsed counters round down.
    """
    total = max(0.0, value.total_seconds())
    return math.ceil(total) if round_up else math.floor(total)


def format_clock(seconds: int) -> str:
    """``HH:MM:SS`` for a whole number of seconds."""
    hours, rem = divmod(max(0, seconds), 3600)
    minutes, secs = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_countdown(remaining: timedelta) -> str:
    return format_clock(whole_seconds(remaining, round_up=True))


def format_elapsed(elapsed: timedelta) -> str:
    """``HH:MM:SS.t`` with tenths, for the stopwatch."""
    total = max(0.0, elapsed.total_seconds())
    tenths = int(total * 10) % 10
    return f"{format_clock(math.floor(total))}.{tenths}"


def format_wall_time(moment: datetime) -> str:
    """``07:30 AM`` style label for alarm targets."""
    return moment.strftime("%I:%M %p")
