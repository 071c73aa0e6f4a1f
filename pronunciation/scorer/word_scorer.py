"""Word-level scoring of a spoken transcript against a target phrase."""
from __future__ import annotations

import math
from typing import List, Optional, Tuple

from .. import config
from ..alignment.aligner import Aligner, classify_pair, get_aligner
from ..alignment.edit_distance import similarity
from ..alignment.normalizer import tokenize
from ..models.result import WordAnalysis
from ..phonetics.annotator import PhoneticAnnotator, get_default_annotator
from ..rules import (
    EXTRA_WORD_FEEDBACK,
    EXTRA_WORD_SCORE,
    MISSING_WORD_FEEDBACK,
    MISSING_WORD_SCORE,
    PERFECT_MATCH_FEEDBACK,
    PERFECT_SCORE,
    WORD_FEEDBACK,
    band_index,
)


def round_half_up(value: float) -> int:
    """Round .5 upwards (Python's round() would give 2 for 2.5)."""
    return int(math.floor(value + 0.5))


def word_feedback(score: int) -> str:
    return WORD_FEEDBACK[band_index(score)]


def score_pair(spoken: str, target: str) -> Tuple[int, str]:
    """Score one spoken token against one target token.

    Either side may be "" for an unpaired position.

    Returns:
        (score 0-100, feedback label)
    """
    return score_op(classify_pair(target, spoken), spoken, target)


def score_op(op: str, spoken: str, target: str) -> Tuple[int, str]:
    """Score a position the aligner has already classified."""
    if op == "del":
        return MISSING_WORD_SCORE, MISSING_WORD_FEEDBACK
    if op == "ins":
        return EXTRA_WORD_SCORE, EXTRA_WORD_FEEDBACK
    if op == "match":
        return PERFECT_SCORE, PERFECT_MATCH_FEEDBACK

    score = round_half_up(similarity(spoken, target) * 100)
    return score, word_feedback(score)


def align(
    spoken: str,
    target: str,
    aligner: Optional[Aligner] = None,
    annotator: Optional[PhoneticAnnotator] = None,
) -> List[WordAnalysis]:
    """Pair spoken and target tokens and score every position.

    Args:
        spoken: Recognized transcript (may be partial or empty)
        target: Phrase the learner was asked to say
        aligner: Pairing strategy (configured default if None)
        annotator: Phonetic annotator (configured default if None)

    Returns:
        One WordAnalysis per aligned position, in order. With positional
        pairing that is max(len(spoken tokens), len(target tokens)) entries.
    """
    spoken_tokens = tokenize(spoken)
    target_tokens = tokenize(target)
    if aligner is None:
        aligner = get_aligner(config.ALIGNMENT)
    if annotator is None:
        annotator = get_default_annotator()
    phonetic = annotator.breakdown(target)

    breakdown: List[WordAnalysis] = []
    for pair in aligner.pair(spoken_tokens, target_tokens):
        expected = ""
        if pair.ref_index is not None and pair.ref_index < len(phonetic):
            expected = phonetic[pair.ref_index]
        score, feedback = score_op(pair.op, pair.hyp_word, pair.ref_word)
        breakdown.append(
            WordAnalysis(
                word=pair.ref_word,
                expected=expected,
                spoken=pair.hyp_word,
                score=score,
                feedback=feedback,
            )
        )
    return breakdown
