"""JSON patch adapter.

This module applies RFC 6902 patch operations through jsonpatch
and maps library failures onto the IceCave error hierarchy.
"""

from __future__ import annotations

import jsonpatch
import jsonpointer

from core.errors import IceCavePatchError
from core.types import Document, PatchOperations


def apply_patch(patch: PatchOperations, document: Document) -> Document:
    """Apply patch operations to a document without mutating it.

    Args:
        patch: Sequence of RFC 6902 operations.
        document: Target document.

    Returns:
        New document reflecting the operations.

    Raises:
        IceCavePatchError: If an operation is malformed or its path is invalid.
    """
    try:
        json_patch = jsonpatch.JsonPatch(list(patch))
        return json_patch.apply(document, in_place=False)
    except (jsonpatch.JsonPatchException, jsonpointer.JsonPointerException) as error:
        raise IceCavePatchError(
            f"Failed to apply JSON patch: {error}. "
            "Check operation names and target paths."
        ) from error
    except (TypeError, KeyError) as error:
        raise IceCavePatchError(
            f"Malformed JSON patch operation: {error}. "
            "Each operation needs 'op' and 'path' keys."
        ) from error
