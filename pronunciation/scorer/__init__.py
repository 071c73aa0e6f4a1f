"""Word-level matching and scoring."""
from .word_scorer import align, round_half_up, score_op, score_pair, word_feedback

__all__ = ["align", "round_half_up", "score_op", "score_pair", "word_feedback"]
