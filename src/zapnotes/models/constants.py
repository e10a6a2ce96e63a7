"""Shared constants for the models layer.

See Also:
    [zapnotes.models.receipt][]: Uses
        [EventKind][zapnotes.models.constants.EventKind] to check receipts.
    [zapnotes.services.connection][]: Tracks bootstrap progress with
        [ConnectionState][zapnotes.models.constants.ConnectionState].
"""

from __future__ import annotations

from enum import IntEnum, StrEnum


class EventKind(IntEnum):
    """Nostr event kinds used by zapnotes.

    Attributes:
        ZAP_RECEIPT: Kind 9735 -- zap receipt published by the recipient's
            lightning service once the invoice is paid (NIP-57).
    """

    ZAP_RECEIPT = 9_735


class ConnectionState(StrEnum):
    """Lifecycle of a [RelayConnection][zapnotes.services.connection.RelayConnection].

    ``PENDING`` until the single bootstrap attempt finishes, then either
    ``READY`` or ``FAILED`` for the rest of the session.
    """

    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


NPUB_PREFIX = "npub"
"""NIP-19 human-readable part for public keys."""

HEX_PUBLIC_KEY_LENGTH = 64
"""A 32-byte public key rendered as hexadecimal."""

DEFAULT_RELAYS: tuple[str, ...] = (
    "wss://relay.damus.io",
    "wss://relay.snort.social",
    "wss://nostr.wine",
)
