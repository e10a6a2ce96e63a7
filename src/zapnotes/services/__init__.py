"""Connection bootstrap and zap receipt queries.

Attributes:
    RelayConnection: Single-use relay connection with a
        ``PENDING``/``READY``/``FAILED`` lifecycle.
    query_receipts: One filtered fetch for a normalized public key.
    lookup_receipts: Readiness check, key normalization and query in one call.
"""

from .connection import RelayConnection
from .receipts import DEFAULT_QUERY_TIMEOUT, lookup_receipts, query_receipts


__all__ = [
    "DEFAULT_QUERY_TIMEOUT",
    "RelayConnection",
    "lookup_receipts",
    "query_receipts",
]
