"""Alert tone synthesis and playback.

The tone is generated with numpy as a WAV file (sine wave shaped by an
ADSR envelope) and cached on disk, then handed to whichever command-line
player the system has.

Sound names
-----------
- ``alert``: three soft 440 Hz pulses (A4)
"""

from __future__ import annotations

import io
import logging
import shutil
import subprocess
import wave
from pathlib import Path

import numpy as np

from ..settings import CACHE_DIR

logger = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

SOUNDS_DIR = CACHE_DIR / "sounds"

SAMPLE_RATE = 44100

# First entry found on PATH wins
PLAYER_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("paplay",),
    ("aplay", "-q"),
    ("afplay",),
)


class SoundError(RuntimeError):
    """No player was found or the player failed."""


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def generate_alert(volume: float = 0.2, pulses: int = 3) -> bytes:
    """Three gentle A4 pulses: 300 ms each with a 50 ms fade-in."""
    pulse_dur = 0.3
    gap = 0.15
    parts: list[np.ndarray] = []
    for i in range(pulses):
        tone = _sine(440.0, pulse_dur) * volume
        env = _make_envelope(
            len(tone),
            attack=int(SAMPLE_RATE * 0.05),
            decay=int(SAMPLE_RATE * 0.05),
            sustain_level=0.8,
            release=int(SAMPLE_RATE * 0.08),
        )
        parts.append(tone * env)
        if i < pulses - 1:
            parts.append(np.zeros(int(SAMPLE_RATE * gap)))
    return _to_wav_bytes(np.concatenate(parts))


def ensure_sound(volume: int = 20, sounds_dir: Path | None = None) -> Path:
    """Return the cached alert WAV for *volume* (0-100), writing it if missing."""
    volume = max(0, min(volume, 100))
    directory = sounds_dir or SOUNDS_DIR
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"alert-{volume}.wav"
    if not path.exists():
        path.write_bytes(generate_alert(volume / 100.0))
        logger.info("Generated alert sound at %s", path)
    return path


# ═══════════════════════════════════════════════════════════════════════════
#  PLAYBACK
# ═══════════════════════════════════════════════════════════════════════════


def find_player() -> tuple[str, ...] | None:
    for command in PLAYER_COMMANDS:
        if shutil.which(command[0]):
            return command
    return None


def play_file(path: Path, timeout: float = 3.0) -> None:
    """Play *path* with the system player, blocking up to *timeout* seconds."""
    command = find_player()
    if command is None:
        raise SoundError("no audio player found (tried paplay, aplay, afplay)")
    try:
        subprocess.run(
            [*command, str(path)],
            check=True,
            timeout=timeout,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except (subprocess.SubprocessError, OSError) as exc:
        raise SoundError(f"{command[0]} failed: {exc}") from exc
