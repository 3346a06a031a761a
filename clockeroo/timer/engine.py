"""Time engine for clockeroo.

Modes
-----
Timer(total)      Count down from a fixed duration.
Stopwatch()       Count up until the user stops it.
Alarm(target)     Count down to a wall-clock moment.

Statuses
--------
RUNNING           Initial; the clock is live.
COMPLETED         Timer or alarm ran out (terminal).
STOPPED_BY_USER   Stopwatch halted with ``s`` (terminal).

Transitions
-----------
RUNNING → COMPLETED        (time exhausted, timer/alarm only)
RUNNING → STOPPED_BY_USER  (stop, stopwatch only)

Every reading is derived from ``now - started_at`` (or ``target - now``),
never from a per-tick counter, so a slow terminal or a suspended laptop
cannot make the display drift from real time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

from PyQt6.QtCore import QObject, pyqtSignal

from .formatting import format_countdown, format_elapsed

logger = logging.getLogger(__name__)


# ── modes ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Timer:
    total: timedelta


@dataclass(frozen=True)
class Stopwatch:
    pass


@dataclass(frozen=True)
class Alarm:
    target: datetime


Mode = Timer | Stopwatch | Alarm


class Status(Enum):
    RUNNING = "running"
    STOPPED_BY_USER = "stopped_by_user"
    COMPLETED = "completed"

    @property
    def is_terminal(self) -> bool:
        return self is not Status.RUNNING


# ── constants ─────────────────────────────────────────────────────────────

ALARM_ROLL = timedelta(days=1)
ZERO = timedelta(0)


def local_now() -> datetime:
    """Timezone-aware local wall-clock time."""
    return datetime.now().astimezone()


def on_local_date(moment: datetime) -> datetime:
    """Give *moment* the UTC offset its own date has in the local zone.

    ``astimezone()`` attaches a fixed offset, which is wrong once wall-clock
    arithmetic crosses a DST change.  Such values are re-resolved from their
    wall time; named zones and UTC already carry the right offset.
    """
    tz = moment.tzinfo
    if tz is None or (isinstance(tz, timezone) and tz is not timezone.utc):
        return moment.replace(tzinfo=None).astimezone()
    return moment


# ── session data ──────────────────────────────────────────────────────────


@dataclass
class Session:
    """Live state of one run.  Owned by a single :class:`TimeEngine`."""

    mode: Mode
    started_at: datetime
    status: Status = Status.RUNNING
    target: datetime | None = None       # resolved alarm moment
    ended_at: datetime | None = None     # stamped once on the terminal edge


@dataclass(frozen=True)
class Reading:
    """What one tick shows: the clock value, its text, and the status."""

    value: timedelta
    text: str
    status: Status


# ── engine ────────────────────────────────────────────────────────────────


class TimeEngine(QObject):
    """Owns the :class:`Session` and evaluates it against wall-clock time.

    Signals
    -------
    status_changed(status: Status)
        Emitted once, on the edge into a terminal status.
    ticked(reading: Reading)
        Emitted for every call to :meth:`tick`.
    """

    status_changed = pyqtSignal(object)
    ticked = pyqtSignal(object)

    def __init__(
        self,
        mode: Mode,
        parent: QObject | None = None,
        *,
        now: datetime | None = None,
        roll_alarm_forward: bool = True,
    ) -> None:
        super().__init__(parent)
        now = now or local_now()
        self._session = Session(mode=mode, started_at=now)

        if isinstance(mode, Alarm):
            target = mode.target
            if target < now and roll_alarm_forward:
                target = on_local_date(target + ALARM_ROLL)
                logger.info("Alarm time already passed today; ringing at %s",
                            target.isoformat())
            self._session.target = target

        logger.info("Session started: %s at %s", mode, now.isoformat())

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def session(self) -> Session:
        return self._session

    @property
    def mode(self) -> Mode:
        return self._session.mode

    @property
    def status(self) -> Status:
        return self._session.status

    @property
    def is_running(self) -> bool:
        return self._session.status is Status.RUNNING

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def tick(self, now: datetime) -> Reading:
        """Evaluate the session at *now*.

        Updates ``status`` at most once (the completion edge).  Once the
        session is terminal the reading is frozen at ``ended_at``.
        """
        session = self._session
        if session.status.is_terminal:
            reading = self._read(session.ended_at or now)
            self.ticked.emit(reading)
            return reading

        reading = self._read(now)
        if reading.status is Status.COMPLETED:
            self._finish(Status.COMPLETED, self._completion_moment(now))
        self.ticked.emit(reading)
        return reading

    def stop(self, now: datetime | None = None) -> bool:
        """Stop a running stopwatch.

        A no-op (returns False) for timers, alarms, or a session that has
        already ended, so a repeated key press is harmless.
        """
        if not isinstance(self.mode, Stopwatch) or not self.is_running:
            return False
        self._finish(Status.STOPPED_BY_USER, now or local_now())
        return True

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _read(self, now: datetime) -> Reading:
        session = self._session
        match session.mode:
            case Timer(total=total):
                remaining = max(ZERO, total - (now - session.started_at))
                done = remaining <= ZERO
                status = Status.COMPLETED if done else session.status
                return Reading(remaining, format_countdown(remaining), status)
            case Stopwatch():
                elapsed = max(ZERO, now - session.started_at)
                return Reading(elapsed, format_elapsed(elapsed), session.status)
            case Alarm():
                remaining = max(ZERO, session.target - now)
                done = remaining <= ZERO
                status = Status.COMPLETED if done else session.status
                return Reading(remaining, format_countdown(remaining), status)
        raise TypeError(f"unknown mode: {session.mode!r}")

    def _completion_moment(self, now: datetime) -> datetime:
        session = self._session
        if isinstance(session.mode, Timer):
            return min(now, session.started_at + session.mode.total)
        return now

    def _finish(self, status: Status, when: datetime) -> None:
        self._session.status = status
        self._session.ended_at = when
        logger.info("Session %s at %s", status.value, when.isoformat())
        self.status_changed.emit(status)
