"""Terminal render surface: paints frames with rich, reads single keys.

On a TTY the surface switches stdin to cbreak mode (keys arrive without
Enter, Ctrl-C still raises KeyboardInterrupt) and draws in the alternate
screen.  Without a TTY it degrades to a plain timed wait with no input.
"""

from __future__ import annotations

import logging
import os
import select
import sys
import termios
import time
import tty
from typing import TextIO

from rich import box
from rich.align import Align
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from .frames import Frame
from .glyphs import BANNER

logger = logging.getLogger(__name__)


class RenderSurfaceError(RuntimeError):
    """The terminal could not be drawn on or read from."""


def render_frame(frame: Frame) -> Panel:
    """Build the rich renderable for *frame*."""
    parts = [Text(BANNER, style="bright_black", no_wrap=True), Text(""), Text("")]
    parts.append(Text(frame.heading, style="bold cyan"))
    parts.append(Text(""))
    parts.append(Text(frame.caption, style="grey70"))
    if frame.art:
        parts.append(Text(""))
        parts.append(Text("\n".join(frame.art), style=f"bold {frame.tone}"))
    parts.append(Text(""))
    parts.append(Text(frame.clock, style=f"bold {frame.tone}"))
    if frame.hint:
        parts.append(Text(""))
        parts.append(Text(frame.hint, style="grey50"))

    body = Group(*(Align.center(part) for part in parts))
    return Panel(
        Align.center(body, vertical="middle"),
        border_style="cyan",
        box=box.ROUNDED,
        expand=True,
    )


class TerminalSurface:
    """Context manager owning the terminal for one session.

    Usage::

        with TerminalSurface() as surface:
            key = surface.poll_key(1.0)
            surface.paint(frame)
    """

    def __init__(
        self,
        console: Console | None = None,
        *,
        stdin: TextIO | None = None,
    ) -> None:
        self._console = console or Console()
        self._stdin = stdin or sys.stdin
        self._interactive = self._stdin.isatty()
        self._saved_attrs: list | None = None
        self._live: Live | None = None

    @property
    def interactive(self) -> bool:
        return self._interactive

    # ── context management ────────────────────────────────────────────

    def __enter__(self) -> TerminalSurface:
        if self._interactive:
            fd = self._stdin.fileno()
            try:
                self._saved_attrs = termios.tcgetattr(fd)
                tty.setcbreak(fd)
            except (termios.error, OSError) as exc:
                raise RenderSurfaceError(f"cannot configure terminal input: {exc}") from exc
        self._live = Live(
            console=self._console,
            auto_refresh=False,
            screen=self._interactive,
            transient=not self._interactive,
        )
        try:
            self._live.start()
        except OSError as exc:
            self._restore_input()
            raise RenderSurfaceError(f"cannot start terminal display: {exc}") from exc
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._live is not None:
                self._live.stop()
                self._live = None
        finally:
            self._restore_input()

    # ── surface API ───────────────────────────────────────────────────

    def poll_key(self, timeout: float) -> str | None:
        """Wait up to *timeout* seconds for one key press."""
        if not self._interactive:
            time.sleep(timeout)
            return None
        fd = self._stdin.fileno()
        try:
            ready, _, _ = select.select([fd], [], [], timeout)
            if not ready:
                return None
            data = os.read(fd, 1)
        except InterruptedError:
            return None
        except OSError as exc:
            raise RenderSurfaceError(f"cannot read from terminal: {exc}") from exc
        if not data:
            # EOF: select stays ready, so wait out the interval instead
            time.sleep(timeout)
            return None
        return data.decode("utf-8", errors="replace")

    def paint(self, frame: Frame) -> None:
        if self._live is None:
            raise RenderSurfaceError("surface is not open")
        try:
            self._live.update(render_frame(frame), refresh=True)
        except OSError as exc:
            raise RenderSurfaceError(f"cannot draw to terminal: {exc}") from exc

    # ── internal ──────────────────────────────────────────────────────

    def _restore_input(self) -> None:
        if self._saved_attrs is None:
            return
        try:
            termios.tcsetattr(self._stdin.fileno(), termios.TCSADRAIN, self._saved_attrs)
        except (termios.error, OSError):
            logger.error("Failed to restore terminal attributes", exc_info=True)
        self._saved_attrs = None
