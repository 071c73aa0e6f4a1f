"""Sentence-level aggregation, banding, and feedback.

Aggregates per-word scores into a single overall score and picks the
user-facing feedback sentence and suggestions for its band.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .models.result import WordAnalysis
from .rules import SCORE_BANDS, SESSION_FEEDBACK, band_index
from .scorer.word_scorer import round_half_up


def overall_score(breakdown: Sequence[WordAnalysis]) -> int:
    """Mean of the per-word scores, rounded; 0 for an empty breakdown."""
    total = sum(w.score for w in breakdown)
    return round_half_up(total / max(len(breakdown), 1))


def score_band(score: float) -> str:
    """Map a 0-100 score to a display bucket (excellent/good/fair/weak/poor)."""
    return SCORE_BANDS[band_index(score)]


def session_feedback(score: float) -> Tuple[str, List[str]]:
    """Holistic feedback sentence and improvement suggestions for a score."""
    feedback, suggestions = SESSION_FEEDBACK[band_index(score)]
    return feedback, list(suggestions)
