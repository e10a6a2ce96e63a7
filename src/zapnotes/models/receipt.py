"""
Immutable zap receipt record.

A zap receipt (kind 9735, NIP-57) is published by a lightning service after
a zap invoice is paid. Its ``p`` tag names the zapped user, its optional
``e`` tag the zapped note, and its ``bolt11`` tag the paid invoice.

[ZapReceipt][zapnotes.models.receipt.ZapReceipt] copies the fields of a
``nostr_sdk.Event`` into plain Python values so results can be rendered,
compared and serialized without touching the FFI object again. Signatures
are not verified.

See Also:
    [query_receipts()][zapnotes.services.receipts.query_receipts]: Produces
        these records from a relay query.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ._validation import freeze_tags, validate_instance, validate_str_not_empty, validate_timestamp
from .constants import EventKind


if TYPE_CHECKING:
    from nostr_sdk import Event as NostrEvent


@dataclass(frozen=True, slots=True)
class ZapReceipt:
    """A zap receipt event as returned by the relays.

    Attributes:
        id: Event id (hex).
        pubkey: Author public key (hex), i.e. the lightning service.
        created_at: Unix timestamp in seconds.
        kind: Event kind, normally ``EventKind.ZAP_RECEIPT``.
        tags: Tags as a tuple of string tuples.
        content: Free-text content (often the zap comment, often empty).

    Raises:
        TypeError: If a field has the wrong type.
        ValueError: If ``id`` or ``pubkey`` is empty or ``created_at`` is
            negative.

    Examples:
        ```python
        receipt = ZapReceipt.from_nostr_event(event)
        receipt.zapped_pubkeys   # ('82341f88...',)
        receipt.zapped_event_id  # 'e4b2...' or None
        ```
    """

    id: str
    pubkey: str
    created_at: int
    kind: int
    tags: tuple[tuple[str, ...], ...]
    content: str

    def __post_init__(self) -> None:
        validate_str_not_empty(self.id, "id")
        validate_str_not_empty(self.pubkey, "pubkey")
        validate_timestamp(self.created_at, "created_at")
        validate_timestamp(self.kind, "kind")
        validate_instance(self.content, str, "content")
        object.__setattr__(self, "tags", freeze_tags(self.tags, "tags"))

    @classmethod
    def from_nostr_event(cls, event: NostrEvent) -> ZapReceipt:
        """Build a receipt from a ``nostr_sdk.Event``."""
        return cls(
            id=event.id().to_hex(),
            pubkey=event.author().to_hex(),
            created_at=event.created_at().as_secs(),
            kind=event.kind().as_u16(),
            tags=[list(tag.as_vec()) for tag in event.tags().to_vec()],
            content=event.content(),
        )

    def _tag_values(self, name: str) -> list[str]:
        return [tag[1] for tag in self.tags if len(tag) >= 2 and tag[0] == name]

    @property
    def is_zap_receipt(self) -> bool:
        return self.kind == EventKind.ZAP_RECEIPT

    @property
    def zapped_pubkeys(self) -> tuple[str, ...]:
        """Values of all ``p`` tags."""
        return tuple(self._tag_values("p"))

    @property
    def zapped_event_id(self) -> str | None:
        """The zapped note (first ``e`` tag), or ``None`` for profile zaps."""
        values = self._tag_values("e")
        return values[0] if values else None

    @property
    def bolt11(self) -> str | None:
        values = self._tag_values("bolt11")
        return values[0] if values else None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation in NIP-01 field order."""
        return {
            "id": self.id,
            "pubkey": self.pubkey,
            "created_at": self.created_at,
            "kind": self.kind,
            "tags": [list(tag) for tag in self.tags],
            "content": self.content,
        }
