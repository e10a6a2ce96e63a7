"""
Pytest configuration and shared fixtures for zapnotes tests.

Provides:
- Mock ``nostr_sdk.Event`` and ``nostr_sdk.Client`` factories
- A ``RelayConnection`` already in the READY state
- Known npub/hex key pairs
"""

import logging
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from nostr_sdk import NostrSdkError, PublicKey

from zapnotes.core.config import ConnectionConfig
from zapnotes.models.constants import ConnectionState
from zapnotes.services.connection import RelayConnection


# ============================================================================
# Test Constants
# ============================================================================

# NIP-19 reference pair
NIP19_NPUB = "npub10elfcs4fr0l0r8af98jlmgdh9c8tcxjvz9qkw038js35mp4dma8qzvjptg"
NIP19_HEX = "7e7e9c42a91bfef19fa929e5fda1b72e0ebc1a4c1141673e2794234d86addf4e"

TEST_RELAYS = ["wss://relay.damus.io", "wss://relay.snort.social", "wss://nostr.wine"]


# ============================================================================
# Logging Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Configure logging for tests."""
    logging.basicConfig(level=logging.DEBUG)


# ============================================================================
# Mock Fixtures
# ============================================================================


def make_mock_event(
    event_id: str = "a" * 64,
    pubkey: str = "b" * 64,
    created_at: int = 1700000000,
    kind: int = 9735,
    tags: Optional[list[list[str]]] = None,
    content: str = "Great post!",
) -> MagicMock:
    """Create a mock nostr_sdk.Event for testing."""
    if tags is None:
        tags = [["p", NIP19_HEX], ["e", "c" * 64], ["bolt11", "lnbc10n1test"]]

    mock_event = MagicMock()
    mock_event.id.return_value.to_hex.return_value = event_id
    mock_event.author.return_value.to_hex.return_value = pubkey
    mock_event.created_at.return_value.as_secs.return_value = created_at
    mock_event.kind.return_value.as_u16.return_value = kind
    mock_event.content.return_value = content

    mock_tags = []
    for tag in tags:
        mock_tag = MagicMock()
        mock_tag.as_vec.return_value = tag
        mock_tags.append(mock_tag)
    mock_event.tags.return_value.to_vec.return_value = mock_tags

    return mock_event


def make_mock_events(events: list[MagicMock]) -> MagicMock:
    """Wrap mock events in an object shaped like ``nostr_sdk.Events``."""
    events_obj = MagicMock()
    events_obj.to_vec.return_value = events
    return events_obj


@pytest.fixture
def mock_event() -> MagicMock:
    return make_mock_event()


@pytest.fixture
def mock_client() -> AsyncMock:
    """Create a mock nostr_sdk.Client where every relay connects."""
    client = AsyncMock()
    client.add_relay = AsyncMock()
    client.try_connect = AsyncMock(return_value=MagicMock(success=list(TEST_RELAYS), failed={}))
    client.fetch_events = AsyncMock(return_value=make_mock_events([]))
    client.shutdown = AsyncMock()
    return client


@pytest.fixture
def ready_connection(mock_client: AsyncMock) -> RelayConnection:
    """Create a RelayConnection already in the READY state."""
    connection = RelayConnection(ConnectionConfig(relays=TEST_RELAYS))
    connection._attempted = True
    connection._state = ConnectionState.READY
    connection._client = mock_client
    return connection


def make_sdk_error() -> Exception:
    """Return a real ``nostr_sdk.NostrSdkError`` raised by the bindings."""
    try:
        PublicKey.parse("not-a-public-key")
    except NostrSdkError as e:
        return e
    raise AssertionError("PublicKey.parse accepted an invalid key")
