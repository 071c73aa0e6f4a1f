"""Text-level pronunciation scoring against a target phrase."""
from .alignment import similarity
from .analyzer import SessionAnalyzer, analyze_pronunciation
from .feedback import score_band
from .history import (
    HistoryPersistenceWarning,
    InMemoryHistoryStore,
    JsonFileHistoryStore,
    append_result,
    history_stats,
)
from .live import LiveAnalysisLoop, SessionState, TranscriptBuffer
from .models import PronunciationResult, WordAnalysis
from .phonetics import phonetic_breakdown
from .scorer import align

__all__ = [
    "similarity",
    "phonetic_breakdown",
    "align",
    "analyze_pronunciation",
    "SessionAnalyzer",
    "score_band",
    "PronunciationResult",
    "WordAnalysis",
    "HistoryPersistenceWarning",
    "InMemoryHistoryStore",
    "JsonFileHistoryStore",
    "append_result",
    "history_stats",
    "LiveAnalysisLoop",
    "SessionState",
    "TranscriptBuffer",
]
