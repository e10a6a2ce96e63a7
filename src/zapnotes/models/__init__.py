"""Pure frozen dataclasses with zero I/O.

The models layer is the bottom of the dependency graph: it imports nothing
from ``zapnotes.core``, ``zapnotes.utils`` or ``zapnotes.services``.

Attributes:
    Relay: Validated, normalized ``ws://``/``wss://`` relay endpoint.
    ZapReceipt: Immutable kind 9735 event record built from a
        ``nostr_sdk.Event``.
    EventKind: NIP-57 event kinds.
    ConnectionState: ``PENDING`` / ``READY`` / ``FAILED`` lifecycle of the
        relay connection.
"""

from .constants import (
    DEFAULT_RELAYS,
    HEX_PUBLIC_KEY_LENGTH,
    NPUB_PREFIX,
    ConnectionState,
    EventKind,
)
from .receipt import ZapReceipt
from .relay import Relay


__all__ = [
    "DEFAULT_RELAYS",
    "HEX_PUBLIC_KEY_LENGTH",
    "NPUB_PREFIX",
    "ConnectionState",
    "EventKind",
    "Relay",
    "ZapReceipt",
]
