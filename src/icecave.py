"""Public SDK surface for IceCave.

This module provides a stable import path for library users.
It re-exports the collection handle, its config, and error types.
"""

from __future__ import annotations

from core.config import CollectionConfig
from core.errors import (
    IceCaveConfigError,
    IceCaveError,
    IceCavePatchError,
    IceCaveQueryError,
    IceCaveStoreError,
)
from store.collection import IceCave

__all__ = [
    "CollectionConfig",
    "IceCave",
    "IceCaveConfigError",
    "IceCaveError",
    "IceCavePatchError",
    "IceCaveQueryError",
    "IceCaveStoreError",
]
