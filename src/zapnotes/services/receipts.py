"""Zap receipt query.

One user action is one query: normalize the key, check the connection is
``READY``, issue a single filtered fetch to every connected relay and
return whatever the relays have sent once the fetch settles.

An empty list is a successful result. Deciding how to present "no receipts"
is left to the caller.

See Also:
    [RelayConnection][zapnotes.services.connection.RelayConnection]: The
        handle every query runs against.
    [fetch_zap_receipts()][zapnotes.utils.protocol.fetch_zap_receipts]: The
        underlying ``nostr_sdk`` fetch.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from nostr_sdk import NostrSdkError

from zapnotes.core.exceptions import ConnectionNotReadyError, QueryError
from zapnotes.core.logger import Logger
from zapnotes.utils.keys import normalize_public_key
from zapnotes.utils.protocol import fetch_zap_receipts


if TYPE_CHECKING:
    from zapnotes.models.receipt import ZapReceipt
    from zapnotes.services.connection import RelayConnection


DEFAULT_QUERY_TIMEOUT = 10.0

logger = Logger("receipts")


async def query_receipts(
    connection: RelayConnection,
    public_key: str,
    *,
    timeout: float = DEFAULT_QUERY_TIMEOUT,  # noqa: ASYNC109
) -> list[ZapReceipt]:
    """Fetch zap receipts tagging an already normalized public key.

    Args:
        connection: A ``READY`` relay connection.
        public_key: Output of
            [normalize_public_key()][zapnotes.utils.keys.normalize_public_key].
        timeout: Seconds to wait for the relays to settle.

    Returns:
        Matching receipts in the order the client returned them. May be
        empty.

    Raises:
        ConnectionNotReadyError: If the connection is ``PENDING`` or
            ``FAILED``. No network I/O is attempted.
        QueryError: If the fetch fails. The cause is chained.
    """
    if not connection.is_ready:
        logger.warning("query_rejected", state=connection.state)
        raise ConnectionNotReadyError(connection.state)

    logger.info("query_started", pubkey=public_key, timeout=timeout)
    try:
        receipts = await fetch_zap_receipts(connection.client, public_key, timeout)
    except (NostrSdkError, OSError, TimeoutError) as e:
        logger.error("query_failed", pubkey=public_key, error=str(e))
        raise QueryError(f"Failed to fetch data from relays: {e}") from e

    logger.info("query_completed", pubkey=public_key, count=len(receipts))
    return receipts


async def lookup_receipts(
    connection: RelayConnection,
    value: str,
    *,
    timeout: float = DEFAULT_QUERY_TIMEOUT,  # noqa: ASYNC109
) -> list[ZapReceipt]:
    """Normalize user input, then run [query_receipts()][zapnotes.services.receipts.query_receipts].

    Readiness is checked before the key is normalized, so a session whose
    bootstrap failed reports that failure for every input.

    Raises:
        KeyFormatError: If *value* cannot be normalized.
        ConnectionNotReadyError: If the connection is not ``READY``.
        QueryError: If the fetch fails.
    """
    if not connection.is_ready:
        raise ConnectionNotReadyError(connection.state)
    public_key = normalize_public_key(value)
    return await query_receipts(connection, public_key, timeout=timeout)
