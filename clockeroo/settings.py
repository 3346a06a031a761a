"""Application settings with JSON persistence.

Settings are stored at:
    $XDG_CONFIG_HOME/clockeroo/settings.json   (~/.config by default)

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path

logger = logging.getLogger(__name__)


def _xdg_dir(env_name: str, fallback: str) -> Path:
    base = os.environ.get(env_name)
    root = Path(base) if base else Path.home() / fallback
    return root / "clockeroo"


CONFIG_DIR = _xdg_dir("XDG_CONFIG_HOME", ".config")
CACHE_DIR = _xdg_dir("XDG_CACHE_HOME", ".cache")
STATE_DIR = _xdg_dir("XDG_STATE_HOME", ".local/state")

SETTINGS_PATH = CONFIG_DIR / "settings.json"
LOG_PATH = STATE_DIR / "clockeroo.log"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── ticking ───────────────────────────────────────────────────────
    tick_interval: float = 1.0             # seconds, timer + alarm
    stopwatch_tick_interval: float = 0.1   # seconds

    # ── alerts ────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 20                 # 0-100
    notifications_enabled: bool = True
    bell_enabled: bool = True
    alert_timeout: float = 3.0             # seconds before giving up on alerts

    # ── alarm ─────────────────────────────────────────────────────────
    alarm_roll_forward: bool = True        # past clock times mean tomorrow

    # ── display ───────────────────────────────────────────────────────
    big_digits: bool = True


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from disk, falling back to defaults."""
    path = path or SETTINGS_PATH
    if not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
    return Settings()


def save_settings(settings: Settings, path: Path | None = None) -> None:
    """Write settings to disk as JSON."""
    path = path or SETTINGS_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
