"""Defensive copies for documents crossing the collection boundary."""

from __future__ import annotations

import copy

from core.types import Document


def clone_document(value: Document) -> Document:
    """Return a reference-disjoint copy of a JSON-compatible value.

    Args:
        value: Document, nested container, or primitive.

    Returns:
        Structurally identical copy sharing no mutable containers.
    """
    return copy.deepcopy(value)


def clone_documents(values: list[Document]) -> list[Document]:
    """Copy every document of a sequence into a new list."""
    return [clone_document(value) for value in values]
