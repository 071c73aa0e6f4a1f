"""Hand-curated IPA transcriptions and loaders for replacement tables."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

logger = logging.getLogger(__name__)

# Hyphens mark syllable breaks, ˈ/ˌ primary/secondary stress.
# Not meant to be complete: unknown words fall back to their spelling.
DEFAULT_IPA_TABLE: Dict[str, str] = {
    "hello": "hə-ˈloʊ",
    "world": "wɜːrld",
    "how": "haʊ",
    "are": "ɑːr",
    "you": "juː",
    "today": "tə-ˈdeɪ",
    "pronunciation": "prə-ˌnʌn-si-ˈeɪ-ʃən",
    "practice": "ˈpræk-tɪs",
    "language": "ˈlæŋ-ɡwɪdʒ",
    "speech": "spiːtʃ",
    "voice": "vɔɪs",
    "sound": "saʊnd",
    "learn": "lɜːrn",
    "improve": "ɪm-ˈpruːv",
    "communication": "kə-ˌmjuː-nɪ-ˈkeɪ-ʃən",
    "articulation": "ɑːr-ˌtɪk-jə-ˈleɪ-ʃən",
    "fluency": "ˈfluː-ən-si",
    "accent": "ˈæk-sent",
    "dialect": "ˈdaɪ-ə-lekt",
}


def load_phonetic_table(
    path: Union[str, Path],
    base: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Load a ``{word: transcription}`` JSON object.

    Keys are lower-cased. Entries from the file override those in ``base``.

    Args:
        path: JSON file holding a single object of string to string
        base: Table to extend (None starts from an empty table)

    Returns:
        New merged table

    Raises:
        ValueError: If the file is not a JSON object of strings
        OSError: If the file cannot be read
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Phonetic table {path} is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise ValueError(f"Phonetic table {path} must be a JSON object")

    table: Dict[str, str] = dict(base or {})
    for word, transcription in data.items():
        if not isinstance(word, str) or not isinstance(transcription, str):
            raise ValueError(f"Phonetic table {path} has a non-string entry for {word!r}")
        table[word.lower()] = transcription

    logger.info("Loaded %d phonetic entries from %s", len(data), path)
    return table
