"""Alignment utilities for matching a target phrase to a spoken transcript."""
from .aligner import Aligner, PositionalAligner, SequenceAligner, classify_pair, get_aligner
from .edit_distance import align_sequences, levenshtein_distance, similarity
from .normalizer import clean_token, tokenize

__all__ = [
    "Aligner",
    "PositionalAligner",
    "SequenceAligner",
    "classify_pair",
    "get_aligner",
    "align_sequences",
    "levenshtein_distance",
    "similarity",
    "clean_token",
    "tokenize",
]
