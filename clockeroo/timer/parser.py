"""Turn command-line strings into durations, clock times and modes."""

from __future__ import annotations

import re
from datetime import datetime, time, timedelta

from .engine import Alarm, Mode, Stopwatch, Timer, local_now, on_local_date

UNIT_SECONDS = {"h": 3600, "m": 60, "s": 1}

_DURATION_GROUP = re.compile(r"(\d+)([hms]?)")
_TWELVE_HOUR = re.compile(r"(\d{1,2})(?::(\d{2}))?\s*(am|pm)")
_TWENTY_FOUR_HOUR = re.compile(r"(\d{1,2}):(\d{2})")


class ParseError(ValueError):
    """A duration or clock time that could not be understood.

    ``token`` is the part of the input that was rejected.
    """

    def __init__(self, token: str, message: str) -> None:
        super().__init__(message)
        self.token = token


def parse_duration(text: str) -> timedelta:
    """Parse ``20m``, ``1h30m``, ``1h30m45s`` or bare seconds (``90``).

    ``0`` is accepted and means a timer that is already done.
    """
    cleaned = text.strip().lower()
    if not cleaned:
        raise ParseError(text, "empty duration. Use formats like 120s, 5m, 2h, 1h30m.")

    total = 0
    pos = 0
    seen_units: set[str] = set()
    while pos < len(cleaned):
        match = _DURATION_GROUP.match(cleaned, pos)
        if not match:
            token = cleaned[pos:]
            raise ParseError(
                token,
                f"unexpected '{token}' in duration. Use formats like 120s, 5m, 2h, 1h30m.",
            )
        amount, unit = int(match.group(1)), match.group(2)
        if not unit and match.end() != len(cleaned):
            token = cleaned[match.end():]
            raise ParseError(
                token,
                f"unexpected '{token}' after '{match.group(0)}'; only the last number may omit its unit.",
            )
        unit = unit or "s"
        if unit in seen_units:
            raise ParseError(match.group(0), f"unit '{unit}' given twice.")
        seen_units.add(unit)
        total += amount * UNIT_SECONDS[unit]
        pos = match.end()

    return timedelta(seconds=total)


def parse_clock_time(text: str) -> time:
    """Parse ``7:30am``, ``7pm``, ``12:00am`` or 24-hour ``14:30``."""
    cleaned = text.strip().lower()

    match = _TWELVE_HOUR.fullmatch(cleaned)
    if match:
        hour = int(match.group(1))
        minute = int(match.group(2) or 0)
        if not 1 <= hour <= 12:
            raise ParseError(match.group(1), f"hour {hour} is not valid with am/pm.")
        if match.group(3) == "pm" and hour != 12:
            hour += 12
        elif match.group(3) == "am" and hour == 12:
            hour = 0
        return _build_time(hour, minute, text)

    match = _TWENTY_FOUR_HOUR.fullmatch(cleaned)
    if match:
        return _build_time(int(match.group(1)), int(match.group(2)), text)

    raise ParseError(
        text, f"invalid time '{text}'. Use formats like 7:20am, 7:20pm, or 19:20."
    )


def _build_time(hour: int, minute: int, original: str) -> time:
    if hour > 23:
        raise ParseError(str(hour), f"hour {hour} is out of range in '{original}'.")
    if minute > 59:
        raise ParseError(f"{minute:02d}", f"minute {minute} is out of range in '{original}'.")
    return time(hour, minute)


def alarm_target(clock: time, now: datetime) -> datetime:
    """Today's occurrence of *clock*, with the local offset for today.

    Moving a past time to tomorrow is the engine's decision, not ours.
    """
    return on_local_date(
        now.replace(hour=clock.hour, minute=clock.minute, second=0, microsecond=0)
    )


def parse_mode(kind: str, argument: str | None = None, *, now: datetime | None = None) -> Mode:
    """Build a :data:`Mode` for ``timer``, ``stopwatch`` or ``alarm``."""
    if kind == "timer":
        return Timer(total=parse_duration(argument or ""))
    if kind == "stopwatch":
        return Stopwatch()
    if kind == "alarm":
        clock = parse_clock_time(argument or "")
        return Alarm(target=alarm_target(clock, now or local_now()))
    raise ParseError(kind, f"unknown mode '{kind}'.")
