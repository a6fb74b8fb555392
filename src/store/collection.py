"""Collection instance facade.

This module composes the document collection, the predicate cache and
the dump writer into one handle. It owns the periodic dump task and the
stop event that ends it at shutdown.
"""

from __future__ import annotations

import asyncio
import contextlib
from pathlib import Path
from types import TracebackType

from core.config import CollectionConfig, validate_directory
from core.errors import IceCaveConfigError, IceCaveStoreError
from core.logging_config import get_logger
from core.types import Document, PatchOperations, QueryDescription
from store.document_collection import DocumentCollection
from store.dump_writer import load_documents, write_documents

_LOGGER = get_logger(__name__)


class IceCave:
    """Embedded document store persisted to a flat JSON file.

    Instances must be created inside a running event loop: construction
    schedules the background dump task. Its first dump runs at the caller's
    first suspension point, so documents inserted synchronously right after
    construction are part of it. Later dumps follow once per configured
    interval until ``shutdown`` is awaited.
    """

    def __init__(self, config: CollectionConfig | None = None) -> None:
        """Open a collection and start its dump loop.

        Args:
            config: Optional collection configuration.

        Raises:
            IceCaveConfigError: If the directory is missing or no event loop runs.
        """
        self._config = config or CollectionConfig.from_env()
        validate_directory(self._config)
        try:
            event_loop = asyncio.get_running_loop()
        except RuntimeError as error:
            raise IceCaveConfigError(
                "IceCave must be created inside a running event loop. "
                "Construct it from a coroutine, for example under asyncio.run()."
            ) from error
        self._documents = DocumentCollection(load_documents(self._config.dump_path))
        self._dump_lock = asyncio.Lock()
        self._stopped = asyncio.Event()
        self._loop_task = event_loop.create_task(self._run_dump_loop())

    async def __aenter__(self) -> "IceCave":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.shutdown()

    def __len__(self) -> int:
        return len(self._documents)

    @property
    def config(self) -> CollectionConfig:
        """Return the immutable collection configuration."""
        return self._config

    @property
    def path(self) -> Path:
        """Return the dump file path."""
        return self._config.dump_path

    @property
    def running(self) -> bool:
        """Return whether periodic dumps are still scheduled."""
        return not self._stopped.is_set()

    def insert(self, document: Document) -> None:
        """Insert a copy of a document at the end of the collection.

        Args:
            document: JSON-compatible value to store.
        """
        self._documents.insert(document)

    def delete(self, query: QueryDescription) -> None:
        """Delete every document matching a JSON Schema query.

        Args:
            query: JSON Schema to validate documents against.
        """
        self._documents.delete(query)

    def filter(self, query: QueryDescription) -> list[Document]:
        """Return copies of every document matching a JSON Schema query.

        Args:
            query: JSON Schema to validate documents against.

        Returns:
            Matching documents in insertion order.
        """
        return self._documents.filter(query)

    def update(self, query: QueryDescription, patch: PatchOperations) -> Document | None:
        """Apply a JSON patch to the first document matching a query.

        Args:
            query: JSON Schema to validate documents against.
            patch: RFC 6902 patch operations.

        Returns:
            The updated document, or None when nothing matches.

        Raises:
            IceCavePatchError: If the patch cannot be applied.
        """
        return self._documents.update(query, patch)

    def find(self, query: QueryDescription) -> Document | None:
        """Return the first document matching a query."""
        return self._documents.find(query)

    def find_index(self, query: QueryDescription) -> int:
        """Return the position of the first document matching a query, or -1."""
        return self._documents.find_index(query)

    def get(self, index: int) -> Document:
        """Return the document stored at ``index``."""
        return self._documents.get(index)

    def set(self, index: int, document: Document) -> None:
        """Replace the document stored at ``index``."""
        self._documents.set(index, document)

    def remove(self, index: int) -> None:
        """Delete the document stored at ``index``."""
        self._documents.remove(index)

    def first(self) -> Document | None:
        """Return the first document in the collection."""
        return self._documents.first()

    def last(self) -> Document | None:
        """Return the last document in the collection."""
        return self._documents.last()

    async def dump(self) -> Path | None:
        """Write the collection to its JSON file.

        The snapshot is taken before the first suspension point, so
        operations issued while the file is written are not included.

        Returns:
            The dump path, or None in memory-only mode.

        Raises:
            IceCaveStoreError: If the file cannot be written.
        """
        if self._config.memory_only:
            return None
        snapshot = self._documents.snapshot()
        async with self._dump_lock:
            dump_path = await asyncio.to_thread(write_documents, self._config.dump_path, snapshot)
        _LOGGER.debug("dump_written", dump_path=str(dump_path), document_count=len(snapshot))
        return dump_path

    async def shutdown(self) -> None:
        """Stop periodic dumps and write one final dump.

        Any dump already in flight is allowed to finish first.

        Raises:
            IceCaveStoreError: If the final dump fails.
        """
        self._stopped.set()
        await self._loop_task
        await self.dump()
        _LOGGER.info(
            "collection_shutdown",
            name=self._config.name,
            memory_only=self._config.memory_only,
            document_count=len(self._documents),
        )

    async def _run_dump_loop(self) -> None:
        """Dump now and then once per interval until the stop event is set."""
        while not self._stopped.is_set():
            try:
                await self.dump()
            except IceCaveStoreError as error:
                _LOGGER.error("dump_failed", dump_path=str(self.path), error=str(error))
            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(
                    self._stopped.wait(),
                    timeout=self._config.dump_interval_seconds,
                )
