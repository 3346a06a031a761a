"""Allow running clockeroo as a module: python -m clockeroo."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from rich.console import Console

from . import __version__
from .audio.alerts import AlertDispatcher
from .settings import LOG_PATH, Settings, load_settings
from .timer.engine import Alarm, Mode, Stopwatch, TimeEngine
from .timer.formatting import format_elapsed
from .timer.loop import ExitReason, LoopResult, SessionLoop
from .timer.parser import ParseError, parse_clock_time, parse_duration, parse_mode
from .ui.terminal import RenderSurfaceError, TerminalSurface


def setup_logging() -> None:
    """Configure logging to file; the terminal belongs to the live view."""
    LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
    level = os.environ.get("CLOCKEROO_LOG_LEVEL", "INFO").upper()

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(LOG_PATH, mode="a"),
        ],
    )
    logging.info("clockeroo %s starting, logging to %s", __version__, LOG_PATH)


def _checked(parse):
    """argparse ``type=`` hook: validate with *parse* but keep the raw text."""
    def check(text: str) -> str:
        try:
            parse(text)
        except ParseError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from exc
        return text
    check.__name__ = parse.__name__
    return check


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clockeroo",
        description="A terminal timer, stopwatch and alarm",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--no-sound", action="store_true", help="Do not play the alert tone")
    parser.add_argument("--no-notify", action="store_true", help="Do not raise a desktop notification")
    parser.add_argument("--no-bell", action="store_true", help="Do not ring the terminal bell")

    subparsers = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    timer_parser = subparsers.add_parser(
        "timer",
        help='Set a countdown timer (e.g. "120s", "5m", "2h", "1h30m")',
    )
    timer_parser.add_argument(
        "argument",
        metavar="duration",
        type=_checked(parse_duration),
        help="Duration: 120s, 5m, 2h, 1h30m, or bare seconds",
    )

    stopwatch_parser = subparsers.add_parser("stopwatch", help="Run a stopwatch")
    stopwatch_parser.add_argument("action", choices=["start"], help="Start the stopwatch")

    alarm_parser = subparsers.add_parser(
        "alarm",
        help='Set an alarm for a clock time (e.g. "7:20am", "19:20", "7:20pm")',
    )
    alarm_parser.add_argument(
        "argument",
        metavar="time",
        type=_checked(parse_clock_time),
        help="Time: 7:20am, 7:20pm, or 19:20",
    )
    return parser


def mode_from_args(args: argparse.Namespace) -> Mode:
    return parse_mode(args.command, getattr(args, "argument", None))


def summary(result: LoopResult, mode: Mode) -> str:
    if result.reason is ExitReason.USER_QUIT:
        return "[grey70]Cancelled.[/]"
    if result.reason is ExitReason.STOPPED_BY_USER:
        final = format_elapsed(result.reading.value) if result.reading else "?"
        return f"[yellow][Stopwatch stopped][/] Final time: [bold]{final}[/]"
    if isinstance(mode, Alarm):
        return "[bold red]Alarm![/] Time's up."
    return "[bold green]Timer finished![/]"


def run(args: argparse.Namespace, settings: Settings, console: Console) -> int:
    mode = mode_from_args(args)
    engine = TimeEngine(mode, roll_alarm_forward=settings.alarm_roll_forward)
    alerts = AlertDispatcher(
        bell=settings.bell_enabled and not args.no_bell,
        sound=settings.sound_enabled and not args.no_sound,
        notify=settings.notifications_enabled and not args.no_notify,
        volume=settings.sound_volume,
        timeout=settings.alert_timeout,
    )
    interval = (
        settings.stopwatch_tick_interval
        if isinstance(mode, Stopwatch)
        else settings.tick_interval
    )

    try:
        with TerminalSurface(console) as surface:
            loop = SessionLoop(
                engine,
                surface,
                alerts,
                tick_interval=interval,
                big_digits=settings.big_digits,
            )
            result = loop.run()
    except RenderSurfaceError as exc:
        logging.error("Terminal failure: %s", exc)
        Console(stderr=True).print(f"[bold red]error:[/] {exc}")
        return 1

    console.print(summary(result, mode))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()
    settings = load_settings()
    return run(args, settings, Console())


if __name__ == "__main__":
    sys.exit(main())
