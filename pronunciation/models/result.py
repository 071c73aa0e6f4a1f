"""Word-level and session-level pronunciation results."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class WordAnalysis:
    """Score for one aligned position.

    Attributes:
        word: Target token ("" for an extra spoken word)
        expected: Phonetic form of the target token
        spoken: Spoken token ("" for a missing word)
        score: Integer 0-100
        feedback: Word-level label
    """
    word: str
    expected: str
    spoken: str
    score: int
    feedback: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "expected": self.expected,
            "spoken": self.spoken,
            "score": self.score,
            "feedback": self.feedback,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WordAnalysis":
        return cls(
            word=str(data.get("word", "")),
            expected=str(data.get("expected", "")),
            spoken=str(data.get("spoken", "")),
            score=int(data.get("score", 0)),
            feedback=str(data.get("feedback", "")),
        )


@dataclass(frozen=True)
class PronunciationResult:
    """Outcome of one completed analysis; never mutated after creation."""
    overall_score: int
    word_breakdown: Tuple[WordAnalysis, ...]
    feedback: str
    suggestions: Tuple[str, ...]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible form; timestamp as epoch milliseconds."""
        return {
            "overallScore": self.overall_score,
            "wordBreakdown": [w.to_dict() for w in self.word_breakdown],
            "feedback": self.feedback,
            "suggestions": list(self.suggestions),
            "timestamp": int(round(self.timestamp.timestamp() * 1000)),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PronunciationResult":
        stamp_ms = data.get("timestamp", 0)
        return cls(
            overall_score=int(data.get("overallScore", 0)),
            word_breakdown=tuple(
                WordAnalysis.from_dict(w) for w in data.get("wordBreakdown", [])
            ),
            feedback=str(data.get("feedback", "")),
            suggestions=tuple(str(s) for s in data.get("suggestions", [])),
            timestamp=datetime.fromtimestamp(float(stamp_ms) / 1000.0, tz=timezone.utc),
        )
