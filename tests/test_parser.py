from datetime import datetime, time, timedelta, timezone

import pytest

from clockeroo.timer.engine import Alarm, Stopwatch, Timer
from clockeroo.timer.parser import (
    ParseError,
    alarm_target,
    parse_clock_time,
    parse_duration,
    parse_mode,
)


def _now() -> datetime:
    return datetime(2025, 1, 1, 6, 0, 42, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "text,seconds",
    [
        ("120s", 120),
        ("5m", 300),
        ("2h", 7200),
        ("1h30m", 5400),
        ("1h30m45s", 5445),
        ("90", 90),
        ("20M", 1200),
        ("1h30", 3630),
        ("0", 0),
        (" 45s ", 45),
    ],
)
def test_parse_duration(text, seconds):
    assert parse_duration(text) == timedelta(seconds=seconds)


@pytest.mark.parametrize(
    "text,token",
    [
        ("abc", "abc"),
        ("5x", "x"),
        ("10 5m", " 5m"),
        ("1m1m", "1m"),
        ("-5", "-5"),
    ],
)
def test_parse_duration_reports_offending_token(text, token):
    with pytest.raises(ParseError) as info:
        parse_duration(text)
    assert info.value.token == token


def test_parse_duration_rejects_empty():
    with pytest.raises(ParseError):
        parse_duration("   ")


@pytest.mark.parametrize(
    "text,expected",
    [
        ("7:20am", time(7, 20)),
        ("7:20pm", time(19, 20)),
        ("7:20 PM", time(19, 20)),
        ("23:45", time(23, 45)),
        ("12:00am", time(0, 0)),
        ("12:00pm", time(12, 0)),
        ("7pm", time(19, 0)),
        ("0:05", time(0, 5)),
    ],
)
def test_parse_clock_time(text, expected):
    assert parse_clock_time(text) == expected


@pytest.mark.parametrize(
    "text,token",
    [
        ("13:00pm", "13"),
        ("0:30am", "0"),
        ("25:00", "25"),
        ("7:75", "75"),
        ("noon", "noon"),
        ("7", "7"),
    ],
)
def test_parse_clock_time_errors(text, token):
    with pytest.raises(ParseError) as info:
        parse_clock_time(text)
    assert info.value.token == token


def test_alarm_target_is_today_on_the_minute():
    target = alarm_target(time(7, 30), _now())
    assert target == datetime(2025, 1, 1, 7, 30, tzinfo=timezone.utc)


def test_alarm_target_in_the_past_is_left_for_the_engine():
    target = alarm_target(time(5, 0), _now())
    assert target < _now()


def test_parse_mode_variants():
    assert parse_mode("timer", "1h30m") == Timer(timedelta(minutes=90))
    assert parse_mode("stopwatch") == Stopwatch()
    assert parse_mode("alarm", "7:30am", now=_now()) == Alarm(
        datetime(2025, 1, 1, 7, 30, tzinfo=timezone.utc)
    )


def test_parse_mode_unknown():
    with pytest.raises(ParseError) as info:
        parse_mode("egg-timer", "5m")
    assert info.value.token == "egg-timer"
