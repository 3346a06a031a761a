"""Shared pytest fixtures for clockeroo tests."""

import os
import sys
import time
import pytest

from PyQt6.QtCore import QCoreApplication

from helpers import FakeClock, RecordingAlerts


@pytest.fixture(scope="session")
def qapp():
    """A single QCoreApplication instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Keep settings and the sound cache out of the real home directory."""
    monkeypatch.setattr("clockeroo.settings.SETTINGS_PATH", tmp_path / "settings.json")
    monkeypatch.setattr("clockeroo.audio.sounds.SOUNDS_DIR", tmp_path / "sounds")
    yield


@pytest.fixture
def clock():
    """Fake wall clock starting at 2025-01-01 06:00 UTC."""
    return FakeClock()


@pytest.fixture
def alerts():
    return RecordingAlerts()


@pytest.fixture
def new_york_local():
    """Run with the process-local timezone set to America/New_York."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is unavailable on this platform")
    saved = os.environ.get("TZ")
    os.environ["TZ"] = "America/New_York"
    time.tzset()
    yield
    if saved is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = saved
    time.tzset()
