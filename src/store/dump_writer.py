"""Flat-file persistence for document collections.

This module isolates JSON dump IO: loading a seed file at startup and
streaming a snapshot to disk. Writes go to a sibling temporary file that
replaces the target only once the stream is complete.
"""

from __future__ import annotations

import contextlib
import json
import os
from pathlib import Path
from typing import TextIO

from core.constants import (
    DUMP_CLOSE_TOKEN,
    DUMP_FILE_ENCODING,
    DUMP_OPEN_TOKEN,
    DUMP_SEPARATOR_TOKEN,
    DUMP_TEMP_SUFFIX,
    EMPTY_DUMP_PAYLOAD,
)
from core.errors import IceCaveStoreError
from core.logging_config import get_logger
from core.types import Document

_LOGGER = get_logger(__name__)


def load_documents(dump_path: Path) -> list[Document]:
    """Read a dump file into a document list.

    Missing, unreadable or malformed files yield an empty list.

    Args:
        dump_path: Dump file path.

    Returns:
        Parsed documents, or an empty list.
    """
    try:
        payload = json.loads(dump_path.read_text(encoding=DUMP_FILE_ENCODING))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
        _LOGGER.info(
            "collection_load_skipped",
            dump_path=str(dump_path),
            reason=type(error).__name__,
        )
        return []
    if not isinstance(payload, list):
        _LOGGER.info(
            "collection_load_skipped",
            dump_path=str(dump_path),
            reason="top level is not a JSON array",
        )
        return []
    _LOGGER.info("collection_loaded", dump_path=str(dump_path), document_count=len(payload))
    return payload


def write_documents(dump_path: Path, documents: list[Document]) -> Path:
    """Write a document snapshot to the dump path.

    Args:
        dump_path: Target dump file path.
        documents: Snapshot owned by the caller for the write duration.

    Returns:
        The dump path written.

    Raises:
        IceCaveStoreError: If the file cannot be written.
    """
    temp_path = dump_path.with_name(dump_path.name + DUMP_TEMP_SUFFIX)
    try:
        with temp_path.open("w", encoding=DUMP_FILE_ENCODING) as dump_file:
            _stream_documents(dump_file, documents)
        os.replace(temp_path, dump_path)
    except OSError as error:
        with contextlib.suppress(OSError):
            temp_path.unlink(missing_ok=True)
        raise IceCaveStoreError(
            f"Failed to write collection dump at {dump_path}: {error}. "
            "Check directory permissions and free disk space."
        ) from error
    except (TypeError, ValueError) as error:
        temp_path.unlink(missing_ok=True)
        raise IceCaveStoreError(
            f"Failed to serialize collection dump at {dump_path}: {error}. "
            "Store only JSON-compatible documents."
        ) from error
    return dump_path


def _stream_documents(dump_file: TextIO, documents: list[Document]) -> None:
    """Emit a JSON array one document at a time.

    Args:
        dump_file: Open text file handle.
        documents: Documents to serialize.
    """
    if not documents:
        dump_file.write(EMPTY_DUMP_PAYLOAD)
        return
    last_index = len(documents) - 1
    dump_file.write(DUMP_OPEN_TOKEN)
    for index in range(last_index):
        dump_file.write(json.dumps(documents[index]))
        dump_file.write(DUMP_SEPARATOR_TOKEN)
    dump_file.write(json.dumps(documents[last_index]))
    dump_file.write(DUMP_CLOSE_TOKEN)
