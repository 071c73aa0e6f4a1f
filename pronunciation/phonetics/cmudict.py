"""CMU Pronouncing Dictionary integration via NLTK."""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from nltk.corpus import cmudict as nltk_cmudict

logger = logging.getLogger(__name__)

# Global cache for loaded CMUdict
_CMUDICT_CACHE: Optional[Dict[str, List[List[str]]]] = None


def ensure_cmudict_available() -> bool:
    """Check whether the NLTK cmudict corpus has been downloaded.

    Returns:
        True if CMUdict is available, False otherwise
    """
    try:
        load_cmudict()
        return True
    except LookupError:
        return False


def load_cmudict() -> Dict[str, List[List[str]]]:
    """Load CMU Pronouncing Dictionary via NLTK.

    Caches the dictionary after first load.

    Returns:
        Dict mapping lowercase words to lists of pronunciations.
        Each pronunciation is a list of ARPAbet phone symbols.
        Example: {"bicycle": [["B", "AY1", "S", "IH0", "K", "AH0", "L"]]}

    Raises:
        LookupError: If CMUdict is not downloaded (with instructions)
    """
    global _CMUDICT_CACHE

    if _CMUDICT_CACHE is not None:
        return _CMUDICT_CACHE

    try:
        _CMUDICT_CACHE = nltk_cmudict.dict()
        return _CMUDICT_CACHE
    except LookupError:
        raise LookupError(
            "CMUdict is not downloaded. Run:\n"
            "  python -c \"import nltk; nltk.download('cmudict')\""
        )


def get_word_pronunciation(
    word: str,
    cmu_dict: Optional[Dict[str, List[List[str]]]] = None,
) -> List[str]:
    """Get the first CMUdict pronunciation for a single word.

    Args:
        word: Word to look up (case-insensitive)
        cmu_dict: Optional pre-loaded CMUdict (loads if None)

    Returns:
        List of ARPAbet phone symbols, or empty list if the word (or the
        dictionary itself) is unavailable.
        Example: ["B", "AY1", "S", "IH0", "K", "AH0", "L"] for "bicycle"
    """
    if cmu_dict is None:
        try:
            cmu_dict = load_cmudict()
        except LookupError as e:
            logger.debug("CMUdict unavailable: %s", e)
            return []

    pronunciations = cmu_dict.get(word.lower().strip(), [])
    if not pronunciations:
        return []
    return pronunciations[0]
