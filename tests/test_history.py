import json
from datetime import datetime, timedelta, timezone

import pytest

from pronunciation.analyzer import analyze_pronunciation
from pronunciation.history import (
    HistoryPersistenceWarning,
    JsonFileHistoryStore,
    append_result,
    history_stats,
)


def test_capacity_evicts_oldest(memory_store, make_result):
    for score in range(50):
        append_result(memory_store, make_result(score), capacity=50)
    assert len(memory_store.load()) == 50

    append_result(memory_store, make_result(50), capacity=50)
    loaded = memory_store.load()

    assert len(loaded) == 50
    assert loaded[0].overall_score == 50
    assert loaded[-1].overall_score == 1
    assert [r.overall_score for r in loaded] == list(range(50, 0, -1))


def test_default_capacity_is_fifty(memory_store, make_result):
    for score in range(55):
        append_result(memory_store, make_result(score))
    assert len(memory_store.load()) == 50


def test_append_returns_saved_list(memory_store, make_result):
    saved = append_result(memory_store, make_result(1))
    assert saved == memory_store.load()


class TestJsonFileHistoryStore:
    def test_missing_file_is_empty(self, tmp_path):
        assert JsonFileHistoryStore(tmp_path / "history.json").load() == []

    def test_save_and_load(self, tmp_path):
        store = JsonFileHistoryStore(tmp_path / "nested" / "history.json")
        first = analyze_pronunciation("halo wurld", "hello world")
        second = analyze_pronunciation("hello world", "hello world")

        append_result(store, first)
        append_result(store, second)
        loaded = store.load()

        assert [r.to_dict() for r in loaded] == [second.to_dict(), first.to_dict()]
        assert loaded[1].word_breakdown[0].spoken == "halo"

    def test_file_holds_newest_first_json(self, tmp_path, make_result):
        path = tmp_path / "history.json"
        store = JsonFileHistoryStore(path)
        append_result(store, make_result(10))
        append_result(store, make_result(20))

        data = json.loads(path.read_text(encoding="utf-8"))
        assert [item["overallScore"] for item in data] == [20, 10]
        assert list(tmp_path.iterdir()) == [path]

    def test_corrupt_file_loads_empty_with_warning(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.warns(HistoryPersistenceWarning):
            assert JsonFileHistoryStore(path).load() == []

    def test_wrong_root_type_loads_empty_with_warning(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text("{}", encoding="utf-8")
        with pytest.warns(HistoryPersistenceWarning):
            assert JsonFileHistoryStore(path).load() == []

    @pytest.mark.parametrize("raw", [
        '[{"overallScore": 10, "timestamp": Infinity}]',
        '[{"overallScore": 10, "timestamp": 1e300}]',
    ])
    def test_out_of_range_timestamp_loads_empty_with_warning(self, tmp_path, raw):
        path = tmp_path / "history.json"
        path.write_text(raw, encoding="utf-8")
        with pytest.warns(HistoryPersistenceWarning):
            assert JsonFileHistoryStore(path).load() == []

    def test_clear(self, tmp_path, make_result):
        store = JsonFileHistoryStore(tmp_path / "history.json")
        append_result(store, make_result(10))
        store.clear()
        assert store.load() == []
        store.clear()


def test_history_stats(make_result):
    now = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
    results = [
        make_result(90, timestamp=now - timedelta(hours=1)),
        make_result(60, timestamp=now - timedelta(days=2)),
        make_result(30, timestamp=now - timedelta(days=10)),
    ]
    stats = history_stats(results, now=now)
    assert stats == {
        "total": 3,
        "last_24_hours": 1,
        "last_7_days": 2,
        "average_score": 60.0,
        "best_score": 90,
    }


def test_history_stats_empty():
    stats = history_stats([])
    assert stats["total"] == 0
    assert stats["average_score"] is None
    assert stats["best_score"] is None
