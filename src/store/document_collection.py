"""Ordered in-memory document collection.

This module owns the mutable document sequence and every caller
operation on it. Documents are copied on the way in and on the way
out so stored state never aliases caller references.
"""

from __future__ import annotations

from typing import Iterable

from core.types import Document, PatchOperations, QueryDescription
from store.document_copy import clone_document, clone_documents
from store.patching import apply_patch
from store.predicate_cache import compile_query


class DocumentCollection:
    """Linear-scan document sequence with predicate queries."""

    def __init__(self, documents: Iterable[Document] = ()) -> None:
        """Create a collection seeded with copies of ``documents``.

        Args:
            documents: Initial documents in insertion order.
        """
        self._documents: list[Document] = [clone_document(item) for item in documents]

    def __len__(self) -> int:
        return len(self._documents)

    def insert(self, document: Document) -> None:
        """Append a copy of a document to the end of the sequence.

        Args:
            document: JSON-compatible value to store.
        """
        self._documents.append(clone_document(document))

    def filter(self, query: QueryDescription) -> list[Document]:
        """Return copies of every document matching a query.

        Args:
            query: JSON Schema query.

        Returns:
            Matching documents in insertion order.

        Raises:
            IceCaveQueryError: If the query cannot be compiled.
        """
        matches = compile_query(query)
        return [clone_document(item) for item in self._documents if matches(item)]

    def delete(self, query: QueryDescription) -> None:
        """Remove every document matching a query.

        Survivors keep their relative order.

        Args:
            query: JSON Schema query.

        Raises:
            IceCaveQueryError: If the query cannot be compiled.
        """
        matches = compile_query(query)
        self._documents = [item for item in self._documents if not matches(item)]

    def update(self, query: QueryDescription, patch: PatchOperations) -> Document | None:
        """Patch the first document matching a query.

        Only the first match in insertion order is replaced.

        Args:
            query: JSON Schema query.
            patch: RFC 6902 patch operations.

        Returns:
            Copy of the replaced document, or None when nothing matches.

        Raises:
            IceCaveQueryError: If the query cannot be compiled.
            IceCavePatchError: If the patch cannot be applied.
        """
        index = self.find_index(query)
        if index < 0:
            return None
        patched = apply_patch(patch, self._documents[index])
        self._documents[index] = patched
        return clone_document(patched)

    def find(self, query: QueryDescription) -> Document | None:
        """Return a copy of the first document matching a query, if any."""
        index = self.find_index(query)
        if index < 0:
            return None
        return clone_document(self._documents[index])

    def find_index(self, query: QueryDescription) -> int:
        """Return the position of the first matching document, or -1."""
        matches = compile_query(query)
        for index, item in enumerate(self._documents):
            if matches(item):
                return index
        return -1

    def get(self, index: int) -> Document:
        """Return a copy of the document at ``index``.

        Raises:
            IndexError: If ``index`` is out of range.
        """
        return clone_document(self._documents[index])

    def set(self, index: int, document: Document) -> None:
        """Replace the document at ``index`` with a copy of ``document``.

        Raises:
            IndexError: If ``index`` is out of range.
        """
        self._documents[index] = clone_document(document)

    def remove(self, index: int) -> None:
        """Delete the document at ``index``; later documents shift down.

        Raises:
            IndexError: If ``index`` is out of range.
        """
        del self._documents[index]

    def first(self) -> Document | None:
        """Return a copy of the first document, or None when empty."""
        if not self._documents:
            return None
        return clone_document(self._documents[0])

    def last(self) -> Document | None:
        """Return a copy of the last document, or None when empty."""
        if not self._documents:
            return None
        return clone_document(self._documents[-1])

    def snapshot(self) -> list[Document]:
        """Return a deep copy of the whole sequence for persistence."""
        return clone_documents(self._documents)
