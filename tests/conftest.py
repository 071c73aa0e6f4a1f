import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pronunciation.history import InMemoryHistoryStore
from pronunciation.models.result import PronunciationResult


@pytest.fixture
def memory_store():
    return InMemoryHistoryStore()


@pytest.fixture
def make_result():
    def _make(score=50, **kwargs):
        return PronunciationResult(
            overall_score=score,
            word_breakdown=kwargs.pop("word_breakdown", ()),
            feedback=kwargs.pop("feedback", ""),
            suggestions=kwargs.pop("suggestions", ()),
            **kwargs,
        )
    return _make
