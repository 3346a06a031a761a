"""Frame construction: one immutable snapshot of what the terminal shows.

A :class:`Frame` is plain data.  Two ticks that would look the same
produce equal frames, which lets the loop skip repaints.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..timer.engine import Alarm, Reading, Session, Status, Stopwatch, Timer
from ..timer.formatting import format_wall_time, whole_seconds
from . import glyphs


HINT_CANCEL = "Press 'q' or Ctrl-C to cancel"
HINT_STOPWATCH = "Press 's' to stop, 'q' or Ctrl-C to quit"

# Remaining-seconds thresholds for countdown colours
RED_BELOW = 10
YELLOW_BELOW = 60


@dataclass(frozen=True)
class Frame:
    heading: str
    clock: str
    art: tuple[str, ...]
    caption: str
    hint: str
    tone: str          # rich colour name for the clock face


def countdown_tone(reading: Reading) -> str:
    seconds = whole_seconds(reading.value, round_up=True)
    if seconds < RED_BELOW:
        return "red"
    if seconds < YELLOW_BELOW:
        return "yellow"
    return "green"


def build_frame(session: Session, reading: Reading, *, big_digits: bool = True) -> Frame:
    """Describe the screen for *session* as it reads at this tick."""
    art = glyphs.render(reading.text) if big_digits else ()
    finished = reading.status is Status.COMPLETED

    match session.mode:
        case Timer():
            if finished:
                return Frame("TIMER FINISHED!", reading.text, art,
                             "Your timer has completed!", "", "red")
            return Frame("Timer Running", reading.text, art,
                         "Time Remaining", HINT_CANCEL, countdown_tone(reading))
        case Stopwatch():
            if reading.status is Status.STOPPED_BY_USER:
                return Frame("Stopwatch Stopped", reading.text, art,
                             "Final Time", "", "yellow")
            return Frame("Stopwatch Running", reading.text, art,
                         "Elapsed Time", HINT_STOPWATCH, "green")
        case Alarm():
            ring_at = format_wall_time(session.target or session.mode.target)
            if finished:
                return Frame("ALARM!", reading.text, art,
                             f"It's {ring_at}!", "", "red")
            return Frame("Alarm Set", reading.text, art,
                         f"Ringing at {ring_at}", HINT_CANCEL, countdown_tone(reading))
    raise TypeError(f"unknown mode: {session.mode!r}")
