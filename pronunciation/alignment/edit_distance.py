"""Edit distance between strings and between token sequences."""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple


def _require_str(name: str, value: object) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a str, got {type(value).__name__}")


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character inserts, deletes and substitutions.

    The table is laid out with one row per character of ``b`` and one column
    per character of ``a``; row 0 and column 0 hold 0..n.

    Args:
        a: First string
        b: Second string

    Returns:
        The unit-cost edit distance between ``a`` and ``b``
    """
    _require_str("a", a)
    _require_str("b", b)

    table = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]
    for i in range(len(a) + 1):
        table[0][i] = i
    for j in range(len(b) + 1):
        table[j][0] = j

    for j in range(1, len(b) + 1):
        for i in range(1, len(a) + 1):
            indicator = 0 if a[i - 1] == b[j - 1] else 1
            table[j][i] = min(
                table[j][i - 1] + 1,
                table[j - 1][i] + 1,
                table[j - 1][i - 1] + indicator,
            )
    return table[len(b)][len(a)]


def similarity(a: str, b: str) -> float:
    """Normalized similarity in [0, 1]: ``(maxLen - distance) / maxLen``.

    Two empty strings are a perfect match (1.0). Case is compared as-is, so
    callers lower-case beforehand.
    """
    distance = levenshtein_distance(a, b)
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return (max_len - distance) / max_len


def align_sequences(
    ref: Sequence[str], hyp: Sequence[str]
) -> List[Tuple[str, Optional[int], Optional[int]]]:
    """Classic edit-distance alignment returning a path of operations.

    Returns list of tuples: (op, ref_index, hyp_index)
      op in {"match","sub","del","ins"}.

      match -> identical tokens
      sub -> paired but different tokens
      del -> target token never spoken
      ins -> extra spoken token

    Args:
        ref: Reference sequence (target tokens)
        hyp: Hypothesis sequence (spoken tokens)

    Returns:
        List of tuples: (operation, ref_index, hyp_index)
    """
    n, m = len(ref), len(hyp)
    dp = [[0] * (m + 1) for _ in range(n + 1)]
    back: List[List[Tuple[str, Optional[int], Optional[int]]]] = [
        [("start", -1, -1)] * (m + 1) for _ in range(n + 1)
    ]

    for i in range(1, n + 1):
        dp[i][0] = i
        back[i][0] = ("del", i - 1, None)
    for j in range(1, m + 1):
        dp[0][j] = j
        back[0][j] = ("ins", None, j - 1)

    for i in range(1, n + 1):
        for j in range(1, m + 1):
            cost_sub = 0 if ref[i - 1] == hyp[j - 1] else 1
            # Diagonal first so ties prefer pairing over insert/delete
            candidates = [
                (dp[i - 1][j - 1] + cost_sub, ("match" if cost_sub == 0 else "sub", i - 1, j - 1)),
                (dp[i - 1][j] + 1, ("del", i - 1, None)),
                (dp[i][j - 1] + 1, ("ins", None, j - 1)),
            ]
            best_cost, best_step = min(candidates, key=lambda x: x[0])
            dp[i][j] = best_cost
            back[i][j] = best_step

    ops: List[Tuple[str, Optional[int], Optional[int]]] = []
    i, j = n, m
    while not (i == 0 and j == 0):
        op, ri, hj = back[i][j]
        ops.append((op, ri, hj))
        if op in ("match", "sub"):
            i -= 1
            j -= 1
        elif op == "del":
            i -= 1
        elif op == "ins":
            j -= 1
        else:
            break
    ops.reverse()
    return ops
