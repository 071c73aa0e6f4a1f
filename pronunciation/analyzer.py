"""One analysis pass: word breakdown, overall score, feedback, history."""
from __future__ import annotations

import logging
import threading
import warnings
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from .alignment.aligner import Aligner
from .feedback import overall_score, session_feedback
from .history import HistoryPersistenceWarning, HistoryStore, append_result
from .models.result import PronunciationResult
from .phonetics.annotator import PhoneticAnnotator
from .scorer.word_scorer import align

logger = logging.getLogger(__name__)

_STAMP_LOCK = threading.Lock()
_last_stamp: Optional[datetime] = None


def _next_timestamp() -> datetime:
    """Current UTC instant at millisecond precision, strictly increasing."""
    global _last_stamp

    now = datetime.now(timezone.utc)
    now = now.replace(microsecond=now.microsecond // 1000 * 1000)
    with _STAMP_LOCK:
        if _last_stamp is not None and now <= _last_stamp:
            now = _last_stamp + timedelta(milliseconds=1)
        _last_stamp = now
    return now


def analyze_pronunciation(
    spoken: str,
    target: str,
    aligner: Optional[Aligner] = None,
    annotator: Optional[PhoneticAnnotator] = None,
) -> PronunciationResult:
    """Score ``spoken`` against ``target``. Pure apart from the timestamp.

    Args:
        spoken: Recognized transcript, possibly empty
        target: Phrase the learner was asked to say
        aligner: Pairing strategy (configured default if None)
        annotator: Phonetic annotator (configured default if None)

    Returns:
        PronunciationResult with per-word breakdown, overall score,
        feedback sentence and suggestions
    """
    breakdown = align(spoken, target, aligner=aligner, annotator=annotator)
    score = overall_score(breakdown)
    feedback, suggestions = session_feedback(score)
    logger.debug("Scored %d positions for target %r: %d", len(breakdown), target, score)
    return PronunciationResult(
        overall_score=score,
        word_breakdown=tuple(breakdown),
        feedback=feedback,
        suggestions=tuple(suggestions),
        timestamp=_next_timestamp(),
    )


class SessionAnalyzer:
    """Runs analyses and appends completed results to a history store.

    A failing store never changes or suppresses the result: the error is
    logged, kept in ``last_persist_error`` and reported as a
    HistoryPersistenceWarning.
    """

    def __init__(
        self,
        history: Optional[HistoryStore] = None,
        aligner: Optional[Aligner] = None,
        annotator: Optional[PhoneticAnnotator] = None,
        capacity: Optional[int] = None,
    ):
        self.history = history
        self.aligner = aligner
        self.annotator = annotator
        self.capacity = capacity
        self.last_persist_error: Optional[Exception] = None

    def analyze(self, spoken: str, target: str) -> PronunciationResult:
        return self.analyze_and_persist(spoken, target)[0]

    def analyze_and_persist(self, spoken: str, target: str) -> Tuple[PronunciationResult, bool]:
        """Analyze and persist in one call.

        Returns:
            The result and whether this call stored it. The flag belongs to
            this call only, unlike ``last_persist_error`` which is shared.
        """
        result = analyze_pronunciation(
            spoken, target, aligner=self.aligner, annotator=self.annotator
        )
        return result, self.persist(result)

    def quick_score(self, spoken: str, target: str) -> int:
        """Overall score only; nothing is persisted."""
        return analyze_pronunciation(
            spoken, target, aligner=self.aligner, annotator=self.annotator
        ).overall_score

    def persist(self, result: PronunciationResult) -> bool:
        """Append to history. Returns False if the store failed."""
        self.last_persist_error = None
        if self.history is None:
            return False
        try:
            append_result(self.history, result, capacity=self.capacity)
        except Exception as e:
            self.last_persist_error = e
            logger.warning("Result not persisted: %s", e)
            warnings.warn(f"Result not persisted: {e}", HistoryPersistenceWarning)
            return False
        return True
