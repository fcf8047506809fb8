"""Tests for converge.store."""

from __future__ import annotations

from converge.store import MemoryStore


class TestMemoryStore:
    def test_get_prefers_desired(self):
        store = MemoryStore({"a": 1})
        store.set("a", 2)
        store.set("b", 3)
        assert store.get("a") == 1
        assert store.get("b") == 3
        assert store.get("missing") is None

    def test_has_change(self):
        store = MemoryStore({"a": 1})
        assert store.has_change("a")
        store.set("a", 1)
        assert not store.has_change("a")
        store.configure(a=2)
        assert store.has_change("a")

    def test_unconfigured_field_never_changes(self):
        store = MemoryStore()
        store.set("computed", "x")
        assert not store.has_change("computed")

    def test_identifier(self):
        store = MemoryStore()
        assert store.get_identifier() is None
        store.set_identifier("id-1", newly_created=True)
        assert store.get_identifier() == "id-1"
        assert store.is_newly_created()
        store.set_identifier("id-1")
        assert not store.is_newly_created()

    def test_replace_observed(self):
        store = MemoryStore()
        store.set("old", 1)
        store.replace_observed({"new": 2})
        assert store.observed() == {"new": 2}

    def test_observed_is_a_copy(self):
        store = MemoryStore()
        store.observed()["x"] = 1
        assert store.observed() == {}

    def test_clear(self):
        store = MemoryStore({"a": 1})
        store.set_identifier("id-1", newly_created=True)
        store.set("a", 1)
        store.clear()
        assert store.get_identifier() is None
        assert store.observed() == {}
        assert store.get("a") == 1

    def test_desired_skips_unset(self):
        store = MemoryStore({"a": 1})
        assert store.desired(["a", "b"]) == {"a": 1}

    def test_repr(self):
        assert "MemoryStore" in repr(MemoryStore())
