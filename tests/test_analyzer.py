from unittest.mock import MagicMock

import pytest

from pronunciation.analyzer import SessionAnalyzer, analyze_pronunciation
from pronunciation.feedback import overall_score, score_band, session_feedback
from pronunciation.history import HistoryPersistenceWarning, JsonFileHistoryStore
from pronunciation.models.result import PronunciationResult, WordAnalysis


class TestAnalyzePronunciation:
    def test_perfect_phrase(self):
        result = analyze_pronunciation("hello world", "hello world")
        assert result.overall_score == 100
        assert result.feedback == "Outstanding pronunciation! You sound very natural."
        assert result.suggestions == ("Try more complex sentences to challenge yourself",)

    def test_missing_word_halves_the_score(self):
        result = analyze_pronunciation("hello", "hello world")
        assert result.overall_score == 50
        assert result.feedback == "Keep practicing! Focus on clarity and accuracy."
        assert len(result.suggestions) == 3

    def test_close_but_imperfect_words(self):
        result = analyze_pronunciation("halo wurld", "hello world")
        assert all(0 < w.score < 100 for w in result.word_breakdown)
        assert 40 <= result.overall_score <= 90
        assert result.overall_score == 70
        assert result.suggestions

    def test_extra_word_counts_in_denominator(self):
        result = analyze_pronunciation("hello world extra", "hello world")
        # (100 + 100 + 20) / 3
        assert result.overall_score == 73
        assert result.feedback == "Good effort! There's room for improvement."

    def test_empty_inputs_do_not_raise(self):
        result = analyze_pronunciation("", "")
        assert result.word_breakdown == ()
        assert result.overall_score == 0
        assert result.feedback == "Don't give up! Pronunciation takes time to master."

        result = analyze_pronunciation("", "how are you")
        assert result.overall_score == 0
        assert [w.feedback for w in result.word_breakdown] == ["Missing word"] * 3

    def test_deterministic_apart_from_timestamp(self):
        first = analyze_pronunciation("halo wurld", "hello world")
        second = analyze_pronunciation("halo wurld", "hello world")
        assert first.word_breakdown == second.word_breakdown
        assert first.overall_score == second.overall_score
        assert second.timestamp > first.timestamp

    def test_overall_score_is_rounded_mean(self):
        result = analyze_pronunciation("the quik brwn fox", "the quick brown fox jumps")
        scores = [w.score for w in result.word_breakdown]
        assert len(scores) == 5
        assert result.overall_score == int(sum(scores) / len(scores) + 0.5)

    def test_to_dict_uses_wire_keys(self):
        data = analyze_pronunciation("hello", "hello").to_dict()
        assert set(data) == {"overallScore", "wordBreakdown", "feedback", "suggestions", "timestamp"}
        assert data["wordBreakdown"][0]["expected"] == "hə-ˈloʊ"
        assert isinstance(data["timestamp"], int)

    def test_dict_round_trip_keeps_fields(self):
        result = analyze_pronunciation("halo", "hello world")
        assert PronunciationResult.from_dict(result.to_dict()).to_dict() == result.to_dict()


class TestFeedback:
    @pytest.mark.parametrize("score,band", [
        (100, "excellent"), (90, "excellent"), (89, "good"), (75, "good"),
        (74, "fair"), (60, "fair"), (59, "weak"), (40, "weak"), (39, "poor"), (0, "poor"),
    ])
    def test_score_band(self, score, band):
        assert score_band(score) == band

    def test_lowest_band_has_foundational_suggestions(self):
        feedback, suggestions = session_feedback(10)
        assert "Practice basic sounds first" in suggestions
        assert feedback.startswith("Don't give up")

    def test_overall_score_of_empty_breakdown(self):
        assert overall_score([]) == 0

    def test_overall_score_rounds_half_up(self):
        words = [WordAnalysis("a", "a", "a", 100, ""), WordAnalysis("b", "b", "", 0, ""),
                 WordAnalysis("c", "c", "x", 1, ""), WordAnalysis("d", "d", "", 0, "")]
        # 101 / 4 = 25.25
        assert overall_score(words) == 25
        assert overall_score(words[:3] + [WordAnalysis("d", "d", "y", 1, "")]) == 26


class TestSessionAnalyzer:
    def test_analyze_appends_newest_first(self, memory_store):
        analyzer = SessionAnalyzer(history=memory_store)
        first = analyzer.analyze("hello", "hello world")
        second = analyzer.analyze("hello world", "hello world")
        assert memory_store.load() == [second, first]
        assert analyzer.last_persist_error is None

    def test_same_target_is_not_deduplicated(self, memory_store):
        analyzer = SessionAnalyzer(history=memory_store)
        analyzer.analyze("hello", "hello")
        analyzer.analyze("hello", "hello")
        assert len(memory_store.load()) == 2

    def test_quick_score_does_not_persist(self, memory_store):
        analyzer = SessionAnalyzer(history=memory_store)
        assert analyzer.quick_score("hello", "hello world") == 50
        assert memory_store.load() == []

    def test_store_failure_still_returns_result(self):
        store = MagicMock()
        store.load.return_value = []
        store.save.side_effect = OSError("disk full")
        analyzer = SessionAnalyzer(history=store)

        with pytest.warns(HistoryPersistenceWarning, match="not persisted"):
            result = analyzer.analyze("hello world", "hello world")

        assert result.overall_score == 100
        assert isinstance(analyzer.last_persist_error, OSError)

    def test_unreadable_history_file_does_not_block_analysis(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text('[{"overallScore": 10, "timestamp": 1e300}]', encoding="utf-8")
        analyzer = SessionAnalyzer(history=JsonFileHistoryStore(path))

        with pytest.warns(HistoryPersistenceWarning):
            result, persisted = analyzer.analyze_and_persist("hello", "hello")

        assert result.overall_score == 100
        assert persisted is True
        assert [r.to_dict() for r in JsonFileHistoryStore(path).load()] == [result.to_dict()]

    def test_unexpected_store_error_still_returns_result(self):
        store = MagicMock()
        store.load.side_effect = RuntimeError("backend unavailable")
        analyzer = SessionAnalyzer(history=store)

        with pytest.warns(HistoryPersistenceWarning, match="backend unavailable"):
            result = analyzer.analyze("hello", "hello")

        assert result.overall_score == 100
        assert isinstance(analyzer.last_persist_error, RuntimeError)

    def test_analyze_and_persist_reports_this_call(self):
        store = MagicMock()
        store.load.return_value = []
        store.save.side_effect = [OSError("disk full"), None]
        analyzer = SessionAnalyzer(history=store)

        with pytest.warns(HistoryPersistenceWarning):
            _, first = analyzer.analyze_and_persist("hello", "hello")
        _, second = analyzer.analyze_and_persist("hello", "hello")

        assert (first, second) == (False, True)

    def test_error_cleared_on_next_success(self, memory_store):
        analyzer = SessionAnalyzer(history=memory_store)
        analyzer.last_persist_error = OSError("old")
        analyzer.analyze("a", "a")
        assert analyzer.last_persist_error is None

    def test_capacity_is_passed_to_history(self, memory_store):
        analyzer = SessionAnalyzer(history=memory_store, capacity=2)
        for _ in range(3):
            analyzer.analyze("a", "a")
        assert len(memory_store.load()) == 2

    def test_without_history(self):
        analyzer = SessionAnalyzer()
        assert analyzer.analyze("a", "a").overall_score == 100
        assert analyzer.persist(analyzer.analyze("a", "a")) is False
