r"""Relay connection bootstrap.

[RelayConnection][zapnotes.services.connection.RelayConnection] owns the
single ``nostr_sdk.Client`` of a session and its lifecycle state:

```text
PENDING --initialize()--> READY
       \--------------> FAILED   (terminal, no reconnect)
```

The connect attempt runs exactly once. Queries receive the handle and
check [state][zapnotes.services.connection.RelayConnection.state] before
touching the network.

Examples:
    ```python
    async with RelayConnection(ConnectionConfig()) as connection:
        receipts = await query_receipts(connection, pubkey_hex)
    ```
"""

from __future__ import annotations

import contextlib
from types import TracebackType
from typing import TYPE_CHECKING, NoReturn, Self

from zapnotes.core.config import ConnectionConfig
from zapnotes.core.exceptions import RelayConnectionError
from zapnotes.core.logger import Logger
from zapnotes.models.constants import ConnectionState
from zapnotes.utils.protocol import connect_relays, create_client


if TYPE_CHECKING:
    from nostr_sdk import Client

    from zapnotes.models.relay import Relay


class RelayConnection:
    """Live connection to a fixed set of relays.

    Attributes:
        config: The [ConnectionConfig][zapnotes.core.config.ConnectionConfig]
            used for the bootstrap attempt.
        connected_relays: Relays that accepted the connection.
        failed_relays: Relays that did not, mapped to their error message.
    """

    def __init__(self, config: ConnectionConfig | None = None) -> None:
        self.config = config if config is not None else ConnectionConfig()
        self.connected_relays: list[Relay] = []
        self.failed_relays: dict[Relay, str] = {}
        self._state = ConnectionState.PENDING
        self._client: Client | None = None
        self._error: RelayConnectionError | None = None
        self._attempted = False
        self._logger = Logger("connection")

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is ConnectionState.READY

    @property
    def error(self) -> RelayConnectionError | None:
        """The bootstrap error when ``FAILED``, otherwise ``None``."""
        return self._error

    @property
    def client(self) -> Client:
        """The connected ``nostr_sdk.Client``.

        Raises:
            RuntimeError: If the connection is not ``READY``.
        """
        if self._client is None or not self.is_ready:
            raise RuntimeError(f"Relay connection is {self._state}, not ready")
        return self._client

    async def initialize(self) -> Self:
        """Connect to the configured relays, once per session.

        The connection becomes ``READY`` when at least one relay connects.
        Later calls do not reconnect: they return ``self`` when ``READY`` and
        re-raise the stored error when ``FAILED``.

        Returns:
            This connection, ``READY``.

        Raises:
            RelayConnectionError: If no relay could be connected.
        """
        if self._attempted:
            if self._error is not None:
                raise self._error
            return self
        self._attempted = True

        relays = self.config.relay_models()
        self._logger.info("connecting", relays=len(relays), timeout=self.config.timeout)

        client = None
        try:
            client = await create_client()
            connected, failed = await connect_relays(client, relays, self.config.timeout)
        except Exception as e:  # nostr-sdk FFI can raise arbitrary exception types
            await self._fail(client, f"Failed to initialize relay connection: {e}", e)

        for relay, reason in failed.items():
            self._logger.warning("relay_unavailable", relay=relay.url, error=reason)

        if not connected:
            await self._fail(client, "Failed to initialize relay connection: no relay reachable")

        self._client = client
        self.connected_relays = connected
        self.failed_relays = failed
        self._state = ConnectionState.READY
        self._logger.info("connected", connected=len(connected), failed=len(failed))
        return self

    async def _fail(
        self,
        client: Client | None,
        message: str,
        cause: BaseException | None = None,
    ) -> NoReturn:
        self._state = ConnectionState.FAILED
        self._error = RelayConnectionError(message)
        self._logger.error("connection_failed", error=message)
        if client is not None:
            # nostr-sdk Rust FFI can raise arbitrary exception types during shutdown.
            with contextlib.suppress(Exception):
                await client.shutdown()
        raise self._error from cause

    async def close(self) -> None:
        """Shut the client down. The state is left unchanged."""
        client, self._client = self._client, None
        if client is None:
            return
        with contextlib.suppress(Exception):
            await client.shutdown()
        self._logger.debug("closed")

    async def __aenter__(self) -> Self:
        return await self.initialize()

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()
