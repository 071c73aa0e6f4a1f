"""Token normalization utilities for alignment."""
from __future__ import annotations

import re
from typing import List

_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"[^\w]")


def tokenize(text: str) -> List[str]:
    """Lower-case, trim and split on whitespace runs.

    No punctuation is removed: "world," and "world" are different tokens.

    Args:
        text: Phrase or transcript

    Returns:
        List of tokens; empty for blank input
    """
    if not isinstance(text, str):
        raise TypeError(f"text must be a str, got {type(text).__name__}")
    stripped = text.lower().strip()
    if not stripped:
        return []
    return _WHITESPACE.split(stripped)


def clean_token(token: str) -> str:
    """Strip every non-word character (used for dictionary lookups)."""
    return _NON_WORD.sub("", token)
