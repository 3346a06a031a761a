"""The session loop: poll a key, tick the engine, paint, repeat.

One thread does everything.  The bounded key poll at the top of each
cycle is both the input check and the tick-rate limiter, so there is no
separate sleep and no busy spinning.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Protocol

from ..audio.alerts import AlertDispatchError
from ..ui.frames import Frame, build_frame
from .engine import Reading, Status, Stopwatch, TimeEngine, local_now
from .formatting import format_wall_time

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({"q", "Q", "\x03"})
STOP_KEYS = frozenset({"s", "S"})


class ExitReason(Enum):
    COMPLETED = "completed"
    STOPPED_BY_USER = "stopped_by_user"
    USER_QUIT = "user_quit"


_STATUS_TO_EXIT: dict[Status, ExitReason] = {
    Status.COMPLETED: ExitReason.COMPLETED,
    Status.STOPPED_BY_USER: ExitReason.STOPPED_BY_USER,
}


@dataclass(frozen=True)
class LoopResult:
    reason: ExitReason
    reading: Reading | None
    alert_fired: bool = False


class RenderSurface(Protocol):
    def poll_key(self, timeout: float) -> str | None: ...

    def paint(self, frame: Frame) -> None: ...


class AlertSink(Protocol):
    def fire(self, title: str, message: str) -> None: ...


class SessionLoop:
    """Drives a :class:`TimeEngine` until it ends or the user quits.

    Usage::

        loop = SessionLoop(engine, surface, alerts, tick_interval=1.0)
        result = loop.run()
    """

    def __init__(
        self,
        engine: TimeEngine,
        surface: RenderSurface,
        alerts: AlertSink,
        *,
        tick_interval: float = 1.0,
        clock: Callable[[], datetime] = local_now,
        big_digits: bool = True,
    ) -> None:
        self._engine = engine
        self._surface = surface
        self._alerts = alerts
        self._tick_interval = tick_interval
        self._clock = clock
        self._big_digits = big_digits

        self._last_frame: Frame | None = None
        self._last_reading: Reading | None = None
        self._alert_armed = False
        self._paints = 0

        engine.status_changed.connect(self._on_status_changed)

    @property
    def paints(self) -> int:
        """How many distinct frames have been painted so far."""
        return self._paints

    def run(self) -> LoopResult:
        try:
            reason = self._cycle_until_done()
        except KeyboardInterrupt:
            reason = ExitReason.USER_QUIT
        logger.info("Session loop exited: %s", reason.value)

        fired = False
        if reason is ExitReason.COMPLETED and self._alert_armed:
            self._alert_armed = False
            fired = self._fire_alert()
        return LoopResult(reason, self._last_reading, fired)

    # ── internal ──────────────────────────────────────────────────────

    def _cycle_until_done(self) -> ExitReason:
        engine = self._engine
        while True:
            key = self._surface.poll_key(self._tick_interval)
            if key in QUIT_KEYS:
                return ExitReason.USER_QUIT

            now = self._clock()
            if key in STOP_KEYS and isinstance(engine.mode, Stopwatch):
                engine.stop(now)
            reading = engine.tick(now)

            self._last_reading = reading
            self._paint(build_frame(engine.session, reading, big_digits=self._big_digits))

            if reading.status.is_terminal:
                return _STATUS_TO_EXIT[reading.status]

    def _paint(self, frame: Frame) -> None:
        if frame == self._last_frame:
            return
        self._surface.paint(frame)
        self._last_frame = frame
        self._paints += 1

    def _on_status_changed(self, status: Status) -> None:
        if status is Status.COMPLETED:
            self._alert_armed = True

    def _fire_alert(self) -> bool:
        title, message = _alert_text(self._engine)
        try:
            self._alerts.fire(title, message)
        except AlertDispatchError as exc:
            logger.warning("Alert could not be delivered: %s", exc)
        except KeyboardInterrupt:
            # Ctrl-C while the bell rings silences it; the session still completed
            logger.info("Alert interrupted by user")
        return True


def _alert_text(engine: TimeEngine) -> tuple[str, str]:
    if engine.session.target is not None:
        return "Alarm!", f"It's {format_wall_time(engine.session.target)}!"
    return "Timer Finished!", "Your timer has completed!"
