"""IceCave exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class IceCaveError(Exception):
    """Base exception for all IceCave failures."""


class IceCaveConfigError(IceCaveError):
    """Raised for invalid collection configuration."""


class IceCaveQueryError(IceCaveError):
    """Raised when a query description cannot be compiled."""


class IceCavePatchError(IceCaveError):
    """Raised when a JSON patch cannot be applied to a document."""


class IceCaveStoreError(IceCaveError):
    """Raised for durable dump failures."""
