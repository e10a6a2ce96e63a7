"""Nostr client operations for zapnotes.

Thin helpers over ``nostr_sdk.Client``: client construction, connecting a
fixed relay list in one step, and the zap receipt filter. The relay
connection and the per-relay WebSocket handling are left to ``nostr_sdk``.

Attributes:
    create_client: Read-only client factory.
    connect_relays: Add relays to a client and wait for the connect attempt.
    zap_receipt_filter: Filter for kind 9735 events tagging a public key.
    fetch_zap_receipts: Run one settled fetch and convert the results.

Examples:
    ```python
    client = await create_client()
    connected, failed = await connect_relays(client, relays, timeout=10.0)
    receipts = await fetch_zap_receipts(client, pubkey_hex, timeout=10.0)
    ```
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from nostr_sdk import (
    Alphabet,
    ClientBuilder,
    Filter,
    Kind,
    RelayUrl,
    SingleLetterTag,
)

from zapnotes.models.constants import EventKind
from zapnotes.models.receipt import ZapReceipt


if TYPE_CHECKING:
    from collections.abc import Sequence

    from nostr_sdk import Client

    from zapnotes.models.relay import Relay


logger = logging.getLogger(__name__)


async def create_client() -> Client:
    """Create a read-only Nostr client (no signer)."""
    return ClientBuilder().build()


async def connect_relays(
    client: Client,
    relays: Sequence[Relay],
    timeout: float,  # noqa: ASYNC109
) -> tuple[list[Relay], dict[Relay, str]]:
    """Add every relay to *client* and wait for one connection attempt.

    Args:
        client: Client returned by [create_client()][zapnotes.utils.protocol.create_client].
        relays: Relays to connect to.
        timeout: Seconds to wait for the connections to open.

    Returns:
        A ``(connected, failed)`` pair: relays that connected, and a mapping
        of relays that did not to the error reported by ``nostr_sdk``.
    """
    urls = {}
    for relay in relays:
        relay_url = RelayUrl.parse(relay.url)
        await client.add_relay(relay_url)
        urls[relay] = relay_url

    output = await client.try_connect(timedelta(seconds=timeout))

    connected: list[Relay] = []
    failed: dict[Relay, str] = {}
    for relay, relay_url in urls.items():
        if relay_url in output.success:
            logger.debug("relay_connected relay=%s", relay.url)
            connected.append(relay)
        else:
            error = output.failed.get(relay_url, "Unknown error")
            logger.debug("relay_connect_failed relay=%s error=%s", relay.url, error)
            failed[relay] = error
    return connected, failed


def zap_receipt_filter(public_key: str) -> Filter:
    """Build the filter ``kind == 9735 AND #p contains public_key``.

    The key is passed as a raw tag value so the unchecked 64-character form
    produced by [normalize_public_key()][zapnotes.utils.keys.normalize_public_key]
    is sent as-is.
    """
    p_tag = SingleLetterTag.lowercase(Alphabet.P)
    return Filter().kind(Kind(int(EventKind.ZAP_RECEIPT))).custom_tag(p_tag, public_key)


async def fetch_zap_receipts(
    client: Client,
    public_key: str,
    timeout: float,  # noqa: ASYNC109
) -> list[ZapReceipt]:
    """Fetch zap receipts for *public_key* from every connected relay.

    ``nostr_sdk`` sends the request to all relays, waits until each one has
    sent EOSE or the timeout elapses, and merges the results without
    duplicates. Events that cannot be converted, or that are not kind 9735
    despite the filter, are skipped.

    Raises:
        nostr_sdk.NostrSdkError: On transport or protocol failure.
    """
    events = await client.fetch_events(zap_receipt_filter(public_key), timedelta(seconds=timeout))

    receipts = []
    for evt in events.to_vec():
        try:
            receipt = ZapReceipt.from_nostr_event(evt)
        except (ValueError, TypeError, OverflowError) as e:
            logger.debug("receipt_skipped error=%s", e)
            continue
        if not receipt.is_zap_receipt:
            logger.debug("receipt_skipped id=%s kind=%s", receipt.id, receipt.kind)
            continue
        receipts.append(receipt)
    return receipts
