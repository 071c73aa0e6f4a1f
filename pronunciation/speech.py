"""Speech synthesis requests handed to the playback collaborator."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence

from .rules import (
    MAX_SPEECH_PITCH,
    MAX_SPEECH_RATE,
    MIN_SPEECH_PITCH,
    MIN_SPEECH_RATE,
    TARGET_PLAYBACK_RATE,
)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class SpeechRequest:
    """Text plus playback parameters; rate and pitch are clamped on creation."""
    text: str
    rate: float = 1.0
    pitch: float = 1.0
    voice: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.text, str):
            raise TypeError(f"text must be a str, got {type(self.text).__name__}")
        object.__setattr__(self, "rate", _clamp(float(self.rate), MIN_SPEECH_RATE, MAX_SPEECH_RATE))
        object.__setattr__(self, "pitch", _clamp(float(self.pitch), MIN_SPEECH_PITCH, MAX_SPEECH_PITCH))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SpeechOutput(Protocol):
    """Fire-and-forget playback; nothing is returned to the caller."""

    def speak(self, request: SpeechRequest) -> None:
        ...


def choose_voice(voices: Sequence[Mapping[str, str]]) -> Optional[str]:
    """Pick a default voice name: en-US first, then any English, then the first.

    Args:
        voices: Items like {"name": "Samantha", "lang": "en-US"}

    Returns:
        Voice name, or None if ``voices`` is empty
    """
    if not voices:
        return None
    for prefix in ("en-US", "en"):
        for voice in voices:
            if str(voice.get("lang", "")).startswith(prefix):
                return voice.get("name")
    return voices[0].get("name")


def target_playback_request(
    text: str,
    voices: Optional[Sequence[Mapping[str, str]]] = None,
) -> SpeechRequest:
    """Request for playing the target phrase, slowed down for learners."""
    return SpeechRequest(
        text=text,
        rate=TARGET_PLAYBACK_RATE,
        voice=choose_voice(voices or []),
    )


def play_target(output: SpeechOutput, text: str) -> SpeechRequest:
    request = target_playback_request(text)
    output.speak(request)
    return request
