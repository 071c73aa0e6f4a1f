"""Pairing strategies between target tokens and spoken tokens."""
from __future__ import annotations

from typing import List, Protocol, Sequence

from ..models.aligned_word import AlignedWord
from .edit_distance import align_sequences


def classify_pair(target: str, spoken: str) -> str:
    """Edit operation for one position: "match", "sub", "del" or "ins"."""
    if target and not spoken:
        return "del"
    if spoken and not target:
        return "ins"
    return "match" if spoken == target else "sub"


class Aligner(Protocol):
    def pair(self, spoken: Sequence[str], target: Sequence[str]) -> List[AlignedWord]:
        ...


class PositionalAligner:
    """Pairs tokens strictly by index.

    An inserted or skipped word shifts every later pairing; there is no
    re-synchronization. Output length is max(len(spoken), len(target)).
    """

    name = "positional"

    def pair(self, spoken: Sequence[str], target: Sequence[str]) -> List[AlignedWord]:
        aligned: List[AlignedWord] = []
        for i in range(max(len(spoken), len(target))):
            s = spoken[i] if i < len(spoken) else ""
            t = target[i] if i < len(target) else ""
            aligned.append(
                AlignedWord(
                    ref_word=t,
                    hyp_word=s,
                    op=classify_pair(t, s),
                    ref_index=i if i < len(target) else None,
                )
            )
        return aligned


class SequenceAligner:
    """Token-level edit-distance alignment.

    Re-synchronizes after an inserted or skipped word, so one slip only
    affects its own position.
    """

    name = "sequence"

    def pair(self, spoken: Sequence[str], target: Sequence[str]) -> List[AlignedWord]:
        aligned: List[AlignedWord] = []
        for op, ri, hj in align_sequences(target, spoken):
            aligned.append(
                AlignedWord(
                    ref_word=target[ri] if ri is not None else "",
                    hyp_word=spoken[hj] if hj is not None else "",
                    op=op,
                    ref_index=ri,
                )
            )
        return aligned


ALIGNERS = {
    PositionalAligner.name: PositionalAligner,
    SequenceAligner.name: SequenceAligner,
}


def get_aligner(name: str) -> Aligner:
    """Instantiate an aligner by strategy name ("positional" or "sequence")."""
    try:
        return ALIGNERS[name]()
    except KeyError:
        raise ValueError(f"Unknown alignment strategy {name!r}; expected one of {sorted(ALIGNERS)}")
