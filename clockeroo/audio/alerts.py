"""Completion alerts: terminal bell, alert tone, desktop notification.

:meth:`AlertDispatcher.fire` runs every enabled channel on a daemon
worker thread and waits at most ``timeout`` seconds for it.  A player or
notifier that hangs is left behind; it can never hold the process open.
"""

from __future__ import annotations

import logging
import platform
import shutil
import subprocess
import sys
import threading
from pathlib import Path
from typing import Callable, TextIO

from .sounds import ensure_sound, play_file

logger = logging.getLogger(__name__)


class AlertDispatchError(RuntimeError):
    """One or more alert channels failed or timed out."""


def notification_command(title: str, message: str) -> list[str] | None:
    """The command that raises a desktop notification here, if any."""
    system = platform.system()
    if system == "Darwin" and shutil.which("osascript"):
        script = f'display notification "{_quote(message)}" with title "{_quote(title)}"'
        return ["osascript", "-e", script]
    if system == "Linux" and shutil.which("notify-send"):
        return ["notify-send", "--app-name=clockeroo", title, message]
    return None


def _quote(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


class AlertDispatcher:
    """Fires the end-of-session alert.

    Usage::

        alerts = AlertDispatcher(volume=30, notify=False)
        alerts.fire("Timer Finished!", "Your timer has completed!")
    """

    def __init__(
        self,
        *,
        bell: bool = True,
        sound: bool = True,
        notify: bool = True,
        volume: int = 20,
        timeout: float = 3.0,
        stream: TextIO | None = None,
        sounds_dir: Path | None = None,
    ) -> None:
        self._bell = bell
        self._sound = sound
        self._notify = notify
        self._volume = volume
        self._timeout = timeout
        self._stream = stream or sys.stdout
        self._sounds_dir = sounds_dir
        self._errors: list[str] = []

    @property
    def timeout(self) -> float:
        return self._timeout

    # ── public API ────────────────────────────────────────────────────

    def fire(self, title: str, message: str) -> None:
        """Run all enabled channels; raise if any failed or overran."""
        self._errors = []
        worker = threading.Thread(
            target=self._dispatch,
            args=(title, message),
            name="clockeroo-alert",
            daemon=True,
        )
        worker.start()
        worker.join(self._timeout)

        if worker.is_alive():
            raise AlertDispatchError(f"alert still running after {self._timeout:.1f}s")
        if self._errors:
            raise AlertDispatchError("; ".join(self._errors))
        logger.info("Alert delivered: %s", title)

    # ── internal ──────────────────────────────────────────────────────

    def _channels(self, title: str, message: str) -> list[tuple[str, Callable[[], None]]]:
        channels: list[tuple[str, Callable[[], None]]] = []
        if self._bell:
            channels.append(("bell", self._ring_bell))
        if self._sound:
            channels.append(("sound", self._play_sound))
        if self._notify:
            channels.append(("notification", lambda: self._send_notification(title, message)))
        return channels

    def _dispatch(self, title: str, message: str) -> None:
        for name, channel in self._channels(title, message):
            try:
                channel()
            except Exception as exc:
                logger.warning("Alert channel %s failed: %s", name, exc)
                self._errors.append(f"{name}: {exc}")

    def _ring_bell(self) -> None:
        self._stream.write("\a")
        self._stream.flush()

    def _play_sound(self) -> None:
        path = ensure_sound(self._volume, self._sounds_dir)
        play_file(path, timeout=self._timeout)

    def _send_notification(self, title: str, message: str) -> None:
        command = notification_command(title, message)
        if command is None:
            raise AlertDispatchError("no desktop notifier available")
        subprocess.run(
            command,
            check=True,
            timeout=self._timeout,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
