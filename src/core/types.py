"""Shared type aliases.

This module names the JSON-shaped values passed between the
collection, the predicate cache and the patch adapter.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

Document = Any
QueryDescription = Mapping[str, Any]
PatchOperations = Sequence[Mapping[str, Any]]
Predicate = Callable[[Document], bool]
