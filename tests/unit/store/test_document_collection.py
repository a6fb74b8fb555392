"""Unit tests for the in-memory document collection."""

from __future__ import annotations

import pytest

from core.errors import IceCavePatchError
from store.document_collection import DocumentCollection


def _const_query(field: str, value: str) -> dict[str, object]:
    return {
        "type": "object",
        "properties": {field: {"const": value}},
        "required": [field],
    }


def test_insert_copies_caller_document() -> None:
    """Mutating an inserted document should not change stored state."""
    collection = DocumentCollection()
    element = {"foo": "bar", "baz": 1}
    collection.insert(element)

    element["baz"] = 2

    assert collection.filter(_const_query("foo", "bar")) == [{"foo": "bar", "baz": 1}]


def test_filter_returns_copies() -> None:
    """Mutating a filter result should not change later results."""
    collection = DocumentCollection([{"foo": "bar", "nested": {"n": 1}}])
    (element,) = collection.filter(_const_query("foo", "bar"))

    element["nested"]["n"] = 2

    assert collection.filter(_const_query("foo", "bar")) == [{"foo": "bar", "nested": {"n": 1}}]


def test_filter_preserves_insertion_order() -> None:
    """Matches should come back in insertion order."""
    collection = DocumentCollection([{"k": "a", "i": 0}, {"k": "b"}, {"k": "a", "i": 2}])

    results = collection.filter(_const_query("k", "a"))

    assert [item["i"] for item in results] == [0, 2]


def test_delete_removes_matches_and_keeps_order() -> None:
    """Delete should drop matches without reordering survivors."""
    collection = DocumentCollection(
        [{"n": 1}, {"foo": "bar"}, {"n": 2}, {"foo": "bar"}, {"n": 3}]
    )

    collection.delete(_const_query("foo", "bar"))

    assert collection.snapshot() == [{"n": 1}, {"n": 2}, {"n": 3}]
    assert collection.filter(_const_query("foo", "bar")) == []


def test_update_patches_first_match_only() -> None:
    """Update should modify only the first matching document."""
    collection = DocumentCollection([{"k": "a", "v": 1}, {"k": "a", "v": 2}])

    updated = collection.update(_const_query("k", "a"), [{"op": "replace", "path": "/v", "value": 9}])

    assert updated == {"k": "a", "v": 9}
    assert collection.snapshot() == [{"k": "a", "v": 9}, {"k": "a", "v": 2}]


def test_update_returns_none_without_match() -> None:
    """Update should return None when nothing matches."""
    collection = DocumentCollection([{"k": "a"}])

    updated = collection.update(_const_query("k", "z"), [{"op": "remove", "path": "/k"}])

    assert updated is None and collection.snapshot() == [{"k": "a"}]


def test_update_stops_after_already_updated_shape() -> None:
    """A second update on the old shape should find nothing left."""
    collection = DocumentCollection([{"foo": "bar", "baz": "buzz"}])
    patch = [{"op": "replace", "path": "/baz", "value": "boo"}]
    collection.update(_const_query("baz", "buzz"), patch)

    second = collection.update(_const_query("baz", "buzz"), patch)

    assert second is None


def test_update_result_is_a_copy() -> None:
    """Mutating the returned update result should not change stored state."""
    collection = DocumentCollection([{"k": "a", "v": 1}])
    updated = collection.update(_const_query("k", "a"), [{"op": "replace", "path": "/v", "value": 2}])

    updated["v"] = 3

    assert collection.get(0) == {"k": "a", "v": 2}


def test_update_failure_leaves_document_unchanged() -> None:
    """A failing patch should propagate and leave the match untouched."""
    collection = DocumentCollection([{"k": "a", "v": 1}])
    patch = [
        {"op": "replace", "path": "/v", "value": 2},
        {"op": "replace", "path": "/missing", "value": 3},
    ]

    with pytest.raises(IceCavePatchError):
        collection.update(_const_query("k", "a"), patch)

    assert collection.snapshot() == [{"k": "a", "v": 1}]


def test_positional_accessors() -> None:
    """Positional helpers should return copies of addressed documents."""
    collection = DocumentCollection([{"id": 1}, {"id": 2}, {"id": 3}])

    assert collection.get(1) == {"id": 2}
    assert collection.first() == {"id": 1}
    assert collection.last() == {"id": 3}
    assert len(collection) == 3


def test_find_and_find_index() -> None:
    """Lookup helpers should report the first match or a miss."""
    collection = DocumentCollection([{"name": "Adam"}, {"name": "Ben"}, {"name": "Ben", "n": 2}])

    assert collection.find(_const_query("name", "Ben")) == {"name": "Ben"}
    assert collection.find_index(_const_query("name", "Ben")) == 1
    assert collection.find(_const_query("name", "Zed")) is None
    assert collection.find_index(_const_query("name", "Zed")) == -1


def test_empty_collection_accessors() -> None:
    """Empty collection should return None for first and last."""
    collection = DocumentCollection()

    assert collection.first() is None and collection.last() is None


def test_get_raises_for_out_of_range_index() -> None:
    """Out-of-range positions should raise IndexError."""
    collection = DocumentCollection()

    with pytest.raises(IndexError):
        collection.get(0)


def test_snapshot_is_disjoint_from_state() -> None:
    """Snapshot mutations should not leak into the collection."""
    collection = DocumentCollection([{"items": [1]}])
    snapshot = collection.snapshot()

    snapshot[0]["items"].append(2)
    collection.insert({"items": []})

    assert snapshot == [{"items": [1, 2]}]
    assert collection.snapshot() == [{"items": [1]}, {"items": []}]


def test_set_replaces_document_with_copy() -> None:
    """Positional set should store a copy of the new document."""
    collection = DocumentCollection([{"id": 1}, {"id": 2}])
    replacement = {"hello": "world"}
    collection.set(1, replacement)

    replacement["hello"] = "changed"

    assert collection.snapshot() == [{"id": 1}, {"hello": "world"}]


def test_remove_deletes_by_position_and_keeps_order() -> None:
    """Positional remove should shift later documents down."""
    collection = DocumentCollection([{"id": 1}, {"id": 2}, {"id": 3}])

    collection.remove(1)

    assert collection.snapshot() == [{"id": 1}, {"id": 3}]


def test_set_and_remove_raise_for_out_of_range_index() -> None:
    """Positional mutation outside the sequence should raise IndexError."""
    collection = DocumentCollection([{"id": 1}])

    with pytest.raises(IndexError):
        collection.set(5, {"id": 2})
    with pytest.raises(IndexError):
        collection.remove(5)

    assert collection.snapshot() == [{"id": 1}]
