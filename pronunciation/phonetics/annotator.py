"""Per-token phonetic annotation of a target phrase."""
from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional

from .. import config
from ..alignment.normalizer import clean_token, tokenize
from .cmudict import ensure_cmudict_available, get_word_pronunciation
from .ipa_table import DEFAULT_IPA_TABLE, load_phonetic_table

logger = logging.getLogger(__name__)


class PhoneticAnnotator:
    """Maps tokens to phonetic transcriptions.

    Lookup order: the IPA table, then (when enabled) CMUdict ARPAbet phones
    joined by spaces, then the cleaned token itself.
    """

    def __init__(
        self,
        table: Optional[Mapping[str, str]] = None,
        use_cmudict: bool = False,
        cmu_dict: Optional[Dict[str, List[List[str]]]] = None,
    ):
        self.table: Dict[str, str] = dict(DEFAULT_IPA_TABLE if table is None else table)
        self.use_cmudict = use_cmudict
        self.cmu_dict = cmu_dict

    def transcribe(self, token: str) -> str:
        word = clean_token(token.lower())
        if word in self.table:
            return self.table[word]
        if self.use_cmudict and word:
            phones = get_word_pronunciation(word, self.cmu_dict)
            if phones:
                return " ".join(phones)
        return word

    def breakdown(self, phrase: str) -> List[str]:
        """One transcription per whitespace-delimited token of ``phrase``."""
        return [self.transcribe(token) for token in tokenize(phrase)]


_DEFAULT_ANNOTATOR: Optional[PhoneticAnnotator] = None


def get_default_annotator() -> PhoneticAnnotator:
    """Annotator built once from configuration."""
    global _DEFAULT_ANNOTATOR

    if _DEFAULT_ANNOTATOR is None:
        table: Dict[str, str] = dict(DEFAULT_IPA_TABLE)
        if config.PHONETIC_TABLE_PATH is not None:
            table = load_phonetic_table(config.PHONETIC_TABLE_PATH, base=table)
        if config.USE_CMUDICT and not ensure_cmudict_available():
            logger.warning("PRONUNCIATION_USE_CMUDICT is set but the cmudict corpus is not downloaded")
        _DEFAULT_ANNOTATOR = PhoneticAnnotator(table, use_cmudict=config.USE_CMUDICT)
        logger.debug(
            "Phonetic annotator ready (%d entries, cmudict=%s)",
            len(table), config.USE_CMUDICT,
        )
    return _DEFAULT_ANNOTATOR


def phonetic_breakdown(phrase: str) -> List[str]:
    return get_default_annotator().breakdown(phrase)
