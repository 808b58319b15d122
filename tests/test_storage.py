"""Tests for the in-memory analysis store."""

import threading
import time

import pytest

from seo_text_analyzer.models import Analysis, ContentType, ReadabilityLevel
from seo_text_analyzer.storage import InMemoryAnalysisStore


def _analysis(text: str = "Some text to store here.") -> Analysis:
    return Analysis(
        original_text=text,
        content_type=ContentType.BLOG_POST,
        seo_score=60,
        readability_score=ReadabilityLevel.EASY,
        keyword_density=0.0,
        word_count=len(text.split()),
        optimized_text=text,
    )


class TestInMemoryAnalysisStore:
    """Tests for InMemoryAnalysisStore."""

    def test_ids_start_at_one_and_increase(self):
        """Test ids are assigned monotonically."""
        store = InMemoryAnalysisStore()

        first = store.create(_analysis("first text"))
        second = store.create(_analysis("second text"))

        assert (first.id, second.id) == (1, 2)
        assert len(store) == 2

    def test_create_does_not_mutate_input(self):
        """Test the caller's record keeps its id unset."""
        store = InMemoryAnalysisStore()
        record = _analysis()

        store.create(record)

        assert record.id is None

    def test_get_returns_copies(self):
        """Test mutating a returned record does not change stored state."""
        store = InMemoryAnalysisStore()
        created = store.create(_analysis())

        fetched = store.get(created.id)
        fetched.optimized_text = "changed"
        fetched.keywords.append("bogus")

        again = store.get(created.id)
        assert again.optimized_text == "Some text to store here."
        assert again.keywords == []

    def test_get_missing(self):
        """Test unknown ids return None."""
        assert InMemoryAnalysisStore().get(42) is None

    def test_update_changes_fields(self):
        """Test update applies changes and returns the new record."""
        store = InMemoryAnalysisStore()
        created = store.create(_analysis())

        updated = store.update(created.id, optimized_text="new text", keywords_inserted=1)

        assert updated.optimized_text == "new text"
        assert updated.keywords_inserted == 1
        assert updated.original_text == created.original_text
        assert store.get(created.id) == updated

    def test_update_missing(self):
        """Test updating an unknown id returns None."""
        assert InMemoryAnalysisStore().update(7, optimized_text="x") is None

    def test_update_cannot_change_id(self):
        """Test the id is immutable."""
        store = InMemoryAnalysisStore()
        created = store.create(_analysis())

        with pytest.raises(ValueError):
            store.update(created.id, id=99)

    def test_ids_not_reused_across_stores(self):
        """Test each store keeps its own counter."""
        assert InMemoryAnalysisStore().create(_analysis()).id == 1
        assert InMemoryAnalysisStore().create(_analysis()).id == 1

    def test_mutate_reads_current_record(self):
        """Test changes are computed from the stored record."""
        store = InMemoryAnalysisStore()
        created = store.create(_analysis())

        updated = store.mutate(created.id, lambda r: {"keywords_inserted": r.keywords_inserted + 2})

        assert updated.keywords_inserted == 2

    def test_mutate_missing(self):
        """Test mutating an unknown id returns None without calling the function."""
        calls = []

        assert InMemoryAnalysisStore().mutate(3, lambda r: calls.append(r) or {}) is None
        assert calls == []

    def test_concurrent_mutations_are_not_lost(self):
        """Test concurrent read-modify-write increments are all applied."""
        store = InMemoryAnalysisStore()
        created = store.create(_analysis())

        def increment(record):
            time.sleep(0.001)
            return {"keywords_inserted": record.keywords_inserted + 1}

        threads = [
            threading.Thread(target=store.mutate, args=(created.id, increment))
            for _ in range(20)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert store.get(created.id).keywords_inserted == 20
