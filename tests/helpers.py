"""Shared test helpers for clockeroo."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from clockeroo.audio.alerts import AlertDispatchError

START = datetime(2025, 1, 1, 6, 0, tzinfo=timezone.utc)


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Wall clock that only moves when told to."""

    def __init__(self, start: datetime = START):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class ScriptedSurface:
    """Render surface driven by a key script.

    Each ``poll_key`` consumes one script entry.  ``None`` means no key:
    the whole timeout elapses on the fake clock.  A key is pressed at the
    start of the wait, so it returns without advancing time.  Once the
    script runs out every poll times out.
    """

    def __init__(self, clock: FakeClock, keys=(), *, fail_paint: Exception | None = None):
        self.clock = clock
        self.keys = list(keys)
        self.frames: list = []
        self.polls = 0
        self.fail_paint = fail_paint

    def poll_key(self, timeout: float):
        self.polls += 1
        key = self.keys.pop(0) if self.keys else None
        if key is None:
            self.clock.advance(timeout)
        return key

    def paint(self, frame) -> None:
        if self.fail_paint is not None:
            raise self.fail_paint
        self.frames.append(frame)

    @property
    def last_frame(self):
        return self.frames[-1] if self.frames else None


class RecordingAlerts:
    """Alert sink that counts calls, optionally failing each one."""

    def __init__(self, fail: bool | BaseException = False):
        self.calls: list[tuple[str, str]] = []
        self.fail = fail

    def fire(self, title: str, message: str) -> None:
        self.calls.append((title, message))
        if isinstance(self.fail, BaseException):
            raise self.fail
        if self.fail:
            raise AlertDispatchError("speaker unplugged")

    def __len__(self):
        return len(self.calls)
