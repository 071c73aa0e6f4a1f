"""Result data models."""
from .aligned_word import AlignedWord
from .result import PronunciationResult, WordAnalysis

__all__ = ["AlignedWord", "PronunciationResult", "WordAnalysis"]
