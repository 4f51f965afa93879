import threading
from datetime import datetime, timezone

import pytest

from string_analyzer.analyzer import analyze
from string_analyzer.errors import ConflictError, InvalidInputError, NotFoundError
from string_analyzer.store import StringStore


class TestInsert:
    def test_insert_and_get_round_trip(self):
        store = StringStore()
        record = store.insert("Hello World")
        fetched = store.get("Hello World")
        assert fetched.value == "Hello World"
        assert fetched.properties == record.properties
        assert fetched.id == analyze("Hello World").sha256_hash
        assert fetched.created_at == record.created_at

    def test_created_at_is_utc(self):
        record = StringStore().insert("test")
        assert isinstance(record.created_at, datetime)
        assert record.created_at.tzinfo == timezone.utc

    def test_duplicate_raises_conflict(self):
        store = StringStore()
        store.insert("test string")
        with pytest.raises(ConflictError):
            store.insert("test string")
        assert len(store) == 1

    def test_exact_duplicates_conflict_only(self):
        store = StringStore()
        store.insert("Test String")
        store.insert("test string")
        store.insert("test string ")
        assert len(store) == 3

    def test_empty_string_is_allowed(self):
        store = StringStore()
        record = store.insert("")
        assert record.properties.length == 0
        assert "" in store

    def test_missing_value(self):
        with pytest.raises(InvalidInputError) as exc_info:
            StringStore().insert(None)
        assert exc_info.value.kind == InvalidInputError.MISSING
        assert exc_info.value.status_code == 400

    def test_wrong_type(self):
        with pytest.raises(InvalidInputError) as exc_info:
            StringStore().insert(123)
        assert exc_info.value.kind == InvalidInputError.WRONG_TYPE
        assert exc_info.value.status_code == 422

    def test_unencodable_text_is_rejected(self):
        store = StringStore()
        with pytest.raises(InvalidInputError) as exc_info:
            store.insert("\ud800")
        assert exc_info.value.kind == InvalidInputError.INVALID_TEXT
        assert exc_info.value.status_code == 400
        assert len(store) == 0

    def test_failed_insert_leaves_store_untouched(self):
        store = StringStore()
        with pytest.raises(InvalidInputError):
            store.insert(["not", "a", "string"])
        assert len(store) == 0

    def test_records_are_immutable(self):
        record = StringStore().insert("abc")
        with pytest.raises(Exception):
            record.value = "xyz"
        with pytest.raises(TypeError):
            record.properties.character_frequency_map["a"] = 5


class TestLookupAndDelete:
    def test_get_missing(self):
        with pytest.raises(NotFoundError):
            StringStore().get("nope")

    def test_list_keeps_insertion_order(self):
        store = StringStore()
        for value in ("one", "two", "three"):
            store.insert(value)
        assert [r.value for r in store.list()] == ["one", "two", "three"]

    def test_list_is_a_snapshot(self):
        store = StringStore()
        store.insert("one")
        snapshot = store.list()
        store.insert("two")
        assert len(snapshot) == 1

    def test_delete(self):
        store = StringStore()
        store.insert("to delete")
        store.delete("to delete")
        assert "to delete" not in store
        assert store.list() == []
        with pytest.raises(NotFoundError):
            store.get("to delete")

    def test_delete_missing(self):
        with pytest.raises(NotFoundError):
            StringStore().delete("ghost")

    def test_reinsert_after_delete(self):
        store = StringStore()
        store.insert("again")
        store.delete("again")
        assert store.insert("again").value == "again"

    def test_independent_instances(self):
        first, second = StringStore(), StringStore()
        first.insert("only here")
        assert "only here" not in second


def test_concurrent_inserts_of_same_value():
    store = StringStore()
    conflicts = []
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        try:
            store.insert("race")
        except ConflictError:
            conflicts.append(1)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store) == 1
    assert len(conflicts) == 7
