"""Phonetics package: IPA lookup table and CMU dictionary fallback."""
from .annotator import PhoneticAnnotator, get_default_annotator, phonetic_breakdown
from .cmudict import ensure_cmudict_available, get_word_pronunciation, load_cmudict
from .ipa_table import DEFAULT_IPA_TABLE, load_phonetic_table

__all__ = [
    "PhoneticAnnotator",
    "get_default_annotator",
    "phonetic_breakdown",
    "DEFAULT_IPA_TABLE",
    "load_phonetic_table",
    "load_cmudict",
    "get_word_pronunciation",
    "ensure_cmudict_available",
]
