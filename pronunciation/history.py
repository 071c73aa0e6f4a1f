"""Capped, newest-first persistence of pronunciation results."""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
import warnings
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence, Union

from . import config
from .models.result import PronunciationResult

logger = logging.getLogger(__name__)

_APPEND_LOCK = threading.Lock()


class HistoryPersistenceWarning(UserWarning):
    """A result could not be read from or written to the history store."""


class HistoryStore(Protocol):
    def load(self) -> List[PronunciationResult]:
        ...

    def save(self, results: Sequence[PronunciationResult]) -> None:
        ...

    def clear(self) -> None:
        ...


class InMemoryHistoryStore:
    def __init__(self, results: Optional[Sequence[PronunciationResult]] = None):
        self._results: List[PronunciationResult] = list(results or [])

    def load(self) -> List[PronunciationResult]:
        return list(self._results)

    def save(self, results: Sequence[PronunciationResult]) -> None:
        self._results = list(results)

    def clear(self) -> None:
        self._results = []


class JsonFileHistoryStore:
    """History kept as a JSON array of result dicts, newest first.

    Writes go to a temp file in the same directory and are renamed into
    place, so readers never see a half-written file.
    """

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path) if path is not None else config.HISTORY_PATH

    def load(self) -> List[PronunciationResult]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, list):
                raise ValueError("history root must be a JSON array")
            return [PronunciationResult.from_dict(item) for item in data]
        except (ValueError, TypeError, AttributeError, KeyError, OverflowError, OSError) as e:
            logger.warning("Ignoring unreadable history file %s: %s", self.path, e)
            warnings.warn(
                f"History file {self.path} is unreadable and was ignored: {e}",
                HistoryPersistenceWarning,
            )
            return []

    def save(self, results: Sequence[PronunciationResult]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [r.to_dict() for r in results]
        fd, tmp_path = tempfile.mkstemp(
            prefix=self.path.name, suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


def append_result(
    store: HistoryStore,
    result: PronunciationResult,
    capacity: Optional[int] = None,
) -> List[PronunciationResult]:
    """Prepend ``result`` and keep at most ``capacity`` entries.

    No de-duplication: repeating a phrase adds a new entry.

    Returns:
        The list that was saved (newest first)
    """
    if capacity is None:
        capacity = config.HISTORY_LIMIT
    with _APPEND_LOCK:
        results = [result] + store.load()
        results = results[:capacity]
        store.save(results)
    return results


def history_stats(
    results: Sequence[PronunciationResult],
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Summary counters for a history list.

    Returns:
        Dict with total, last_24_hours, last_7_days, average_score (None when
        empty) and best_score (None when empty)
    """
    if now is None:
        now = datetime.now(timezone.utc)
    day_ago = now - timedelta(days=1)
    week_ago = now - timedelta(days=7)

    scores = [r.overall_score for r in results]
    return {
        "total": len(results),
        "last_24_hours": sum(1 for r in results if r.timestamp > day_ago),
        "last_7_days": sum(1 for r in results if r.timestamp > week_ago),
        "average_score": round(sum(scores) / len(scores), 1) if scores else None,
        "best_score": max(scores) if scores else None,
    }
