"""Data model for a target/spoken token pairing."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AlignedWord:
    """One aligned position between the target phrase and the transcript.

    Attributes:
        ref_word: Target token ("" if the position has no target word)
        hyp_word: Spoken token ("" if the position has no spoken word)
        op: Operation type - "match", "sub", "del", or "ins"
        ref_index: Index into the target tokens (None for insertions)
    """
    ref_word: str
    hyp_word: str
    op: str  # "match" | "sub" | "del" | "ins"
    ref_index: Optional[int] = None
