"""Document storage layer.

This module holds the in-memory collection, compiled query cache,
and flat-file dump persistence behind the IceCave handle.
"""
