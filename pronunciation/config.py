"""Environment-driven settings for the pronunciation engine."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .rules import HISTORY_CAPACITY, LIVE_INTERVAL_SECONDS, SESSION_CAPACITY, SESSION_IDLE_SECONDS

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"

ALIGNMENT_STRATEGIES = ("positional", "sequence")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_alignment(name: str, default: str) -> str:
    value = (os.getenv(name) or default).strip().lower()
    if value not in ALIGNMENT_STRATEGIES:
        raise ValueError(
            f"{name} must be one of {', '.join(ALIGNMENT_STRATEGIES)}, got {value!r}"
        )
    return value


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    return Path(raw).expanduser() if raw else None


HISTORY_PATH = _env_path("PRONUNCIATION_HISTORY_PATH") or DATA_DIR / "pronunciation_history.json"
HISTORY_LIMIT = _env_int("PRONUNCIATION_HISTORY_CAPACITY", HISTORY_CAPACITY)
LIVE_INTERVAL = _env_float("PRONUNCIATION_LIVE_INTERVAL", LIVE_INTERVAL_SECONDS)
SESSION_LIMIT = _env_int("PRONUNCIATION_SESSION_LIMIT", SESSION_CAPACITY)
SESSION_TTL = _env_float("PRONUNCIATION_SESSION_TTL", SESSION_IDLE_SECONDS)
PHONETIC_TABLE_PATH = _env_path("PRONUNCIATION_PHONETIC_TABLE")
USE_CMUDICT = _env_flag("PRONUNCIATION_USE_CMUDICT")
ALIGNMENT = _env_alignment("PRONUNCIATION_ALIGNMENT", "positional")
