"""Tests for HistoryStore"""

import threading

import pytest

from conftest import make_history_item
from insightai.config import Config
from insightai.models.insight import ContextType
from insightai.services.history import HistoryStore
from insightai.utils.helpers import make_history_id
from server import create_app


class TestBound:

    def test_twenty_five_records_keep_twenty(self, history):
        items = [make_history_item(f"query {i}") for i in range(25)]
        for item in items:
            history.record(item)
            assert history.all()[0] is item

        kept = history.all()
        assert len(kept) == 20
        assert [i.input for i in kept] == [f"query {i}" for i in range(24, 4, -1)]

    def test_custom_capacity(self):
        store = HistoryStore(capacity=2)
        for i in range(3):
            store.record(make_history_item(f"q{i}"))
        assert [i.input for i in store.all()] == ["q2", "q1"]

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValueError):
            HistoryStore(capacity=0)

    def test_default_capacity_is_fixed_at_twenty(self):
        assert HistoryStore().capacity == 20
        assert not hasattr(Config, "HISTORY_CAPACITY")

    def test_app_history_is_bounded_at_twenty(self, monkeypatch):
        monkeypatch.setenv("HISTORY_CAPACITY", "50")
        store = create_app().state.history

        for i in range(25):
            store.record(make_history_item(f"q{i}"))

        assert len(store) == 20


class TestOperations:

    def test_all_returns_a_copy(self, history):
        history.record(make_history_item())
        snapshot = history.all()
        snapshot.clear()
        assert len(history) == 1

    def test_no_deduplication(self, history):
        history.record(make_history_item("same"))
        history.record(make_history_item("same"))
        assert len(history) == 2

    def test_clear(self, history):
        for _ in range(3):
            history.record(make_history_item())
        history.clear()
        assert history.all() == []
        history.clear()
        assert len(history) == 0

    def test_get_by_id(self, history):
        item = make_history_item()
        history.record(item)
        assert history.get(item.id) is item
        assert history.get("missing") is None

    def test_stats_count_by_context(self, history):
        for context in ("Personal", "Personal", "Career", "General"):
            history.record(make_history_item(context=context))

        stats = history.stats()

        assert stats[ContextType.PERSONAL] == 2
        assert stats[ContextType.CAREER] == 1
        assert stats[ContextType.BUSINESS] == 0
        assert stats[ContextType.GENERAL] == 1

    def test_items_are_immutable(self):
        item = make_history_item()
        with pytest.raises(Exception):
            item.input = "changed"


class TestConcurrency:

    def test_concurrent_records_stay_bounded(self, history):
        def worker():
            for _ in range(50):
                history.record(make_history_item())

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(history) == 20


class TestHistoryIds:

    def test_ids_are_unique_and_increasing(self):
        ids = [int(make_history_id()) for _ in range(1000)]
        assert ids == sorted(ids)
        assert len(set(ids)) == len(ids)
