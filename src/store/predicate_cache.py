"""Compiled query predicate cache.

Query descriptions are JSON Schema documents. Compiling a schema into a
validator is the expensive step, so compiled predicates are memoized under
the canonical JSON text of the query. Structurally equal queries built at
different call sites therefore share one predicate object.

Each predicate is compiled from a private copy parsed back from its key, so
later changes to the caller's query dict never reach a cached validator.
Keys are exact JSON text: ``{"const": 1}`` and ``{"const": 1.0}`` match the
same documents but are cached as two entries.
"""

from __future__ import annotations

import json

import jsonschema
from jsonschema.exceptions import SchemaError

from core.errors import IceCaveQueryError
from core.types import Predicate, QueryDescription

# Unbounded: entries live for the process lifetime.
_PREDICATES: dict[str, Predicate] = {}


def compile_query(query: QueryDescription) -> Predicate:
    """Return the compiled predicate for a query description.

    Args:
        query: JSON Schema describing matching documents.

    Returns:
        Pure predicate returning True for matching documents.

    Raises:
        IceCaveQueryError: If the query is not serializable or not a valid schema.
    """
    cache_key = query_cache_key(query)
    predicate = _PREDICATES.get(cache_key)
    if predicate is None:
        predicate = _compile_schema(json.loads(cache_key))
        _PREDICATES[cache_key] = predicate
    return predicate


def query_cache_key(query: QueryDescription) -> str:
    """Build the structural cache key for a query description.

    Args:
        query: JSON Schema query.

    Returns:
        Canonical JSON text with sorted keys.

    Raises:
        IceCaveQueryError: If the query cannot be serialized to JSON.
    """
    try:
        return json.dumps(query, sort_keys=True, separators=(",", ":"))
    except (TypeError, ValueError) as error:
        raise IceCaveQueryError(
            f"Query is not JSON-serializable: {error}. "
            "Build queries from dicts, lists, strings, numbers, booleans and None."
        ) from error


def query_cache_size() -> int:
    """Return the number of distinct compiled query shapes."""
    return len(_PREDICATES)


def clear_query_cache() -> None:
    """Drop every compiled predicate."""
    _PREDICATES.clear()


def _compile_schema(query: QueryDescription) -> Predicate:
    """Compile a JSON Schema into a boolean predicate.

    Args:
        query: Private JSON Schema copy owned by the cache.

    Returns:
        Bound ``is_valid`` method of a schema validator.

    Raises:
        IceCaveQueryError: If the schema is invalid.
    """
    validator_class = jsonschema.validators.validator_for(query)
    try:
        validator_class.check_schema(query)
    except SchemaError as error:
        raise IceCaveQueryError(
            f"Invalid query schema: {error.message}. "
            "Queries must be valid JSON Schema documents."
        ) from error
    validator = validator_class(query)
    return validator.is_valid
