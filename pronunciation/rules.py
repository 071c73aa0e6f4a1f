"""Scoring thresholds, labels and feedback text for pronunciation analysis."""
from __future__ import annotations

# Fixed per-word scores for unpaired positions
MISSING_WORD_SCORE = 0
EXTRA_WORD_SCORE = 20
PERFECT_SCORE = 100

MISSING_WORD_FEEDBACK = "Missing word"
EXTRA_WORD_FEEDBACK = "Extra word"
PERFECT_MATCH_FEEDBACK = "Perfect match"

# Score bands (inclusive lower bounds), highest first.
# Shared by word labels, sentence feedback and score_band().
BAND_THRESHOLDS = (90, 75, 60, 40)

# Word-level labels: one per band plus the bottom bucket
WORD_FEEDBACK = (
    "Excellent pronunciation",
    "Good pronunciation",
    "Needs improvement",
    "Significant difference",
    "Very different from target",
)

# Sentence-level feedback and suggestions, same band order.
# Lowest band carries the most foundational advice.
SESSION_FEEDBACK = (
    (
        "Outstanding pronunciation! You sound very natural.",
        ("Try more complex sentences to challenge yourself",),
    ),
    (
        "Great job! Your pronunciation is quite good.",
        (
            "Focus on the words with lower scores",
            "Practice speaking at a steady pace",
        ),
    ),
    (
        "Good effort! There's room for improvement.",
        (
            "Listen carefully to the target pronunciation",
            "Practice individual words that scored low",
            "Speak more slowly and clearly",
        ),
    ),
    (
        "Keep practicing! Focus on clarity and accuracy.",
        (
            "Break down words into syllables",
            "Practice in front of a mirror",
            "Record yourself multiple times",
        ),
    ),
    (
        "Don't give up! Pronunciation takes time to master.",
        (
            "Start with shorter, simpler words",
            "Listen to native speakers",
            "Practice basic sounds first",
        ),
    ),
)

# Display buckets (UI colour classes in the browser client)
SCORE_BANDS = ("excellent", "good", "fair", "weak", "poor")

# History store
HISTORY_CAPACITY = 50

# Live analysis tick period in seconds
LIVE_INTERVAL_SECONDS = 1.0

# Open live sessions per API process, and how long an untouched one survives
SESSION_CAPACITY = 100
SESSION_IDLE_SECONDS = 300.0

# Target playback is slowed down for learners
TARGET_PLAYBACK_RATE = 0.8

# Web Speech API accepted ranges
MIN_SPEECH_RATE = 0.1
MAX_SPEECH_RATE = 10.0
MIN_SPEECH_PITCH = 0.0
MAX_SPEECH_PITCH = 2.0

DEFAULT_TARGET = "Hello world, how are you today?"

PRACTICE_PHRASES = (
    DEFAULT_TARGET,
    "The quick brown fox jumps over the lazy dog",
    "She sells seashells by the seashore",
    "How much wood would a woodchuck chuck?",
    "Peter Piper picked a peck of pickled peppers",
    "Communication is the key to success",
    "Pronunciation practice makes perfect",
    "Artificial intelligence is fascinating",
)


def band_index(score: float) -> int:
    """Index into the band tables for a 0-100 score (0 = best band)."""
    for idx, threshold in enumerate(BAND_THRESHOLDS):
        if score >= threshold:
            return idx
    return len(BAND_THRESHOLDS)
