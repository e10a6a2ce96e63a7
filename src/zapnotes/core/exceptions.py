"""zapnotes exception hierarchy.

Every failure a user action can hit maps to one typed exception, so the CLI
can turn it into a single human-readable message without inspecting
third-party error types.

Exception hierarchy:

```text
ZapNotesError (base -- never raised directly)
├── ConfigurationError            -- config file, YAML syntax, bad values
├── RelayConnectionError          -- bootstrap failed, terminal for the session
├── KeyFormatError                -- public key input could not be normalized
│   ├── UnrecognizedKeyFormatError
│   ├── KeyDecodeError            -- npub decoding failed
│   └── WrongKeyTypeError         -- bech32 payload is not a public key
└── QueryError                    -- zap receipt fetch failed
    └── ConnectionNotReadyError   -- query attempted before bootstrap finished
```

See Also:
    [RelayConnection][zapnotes.services.connection.RelayConnection]: Raises
        [RelayConnectionError][zapnotes.core.exceptions.RelayConnectionError].
    [normalize_public_key()][zapnotes.utils.keys.normalize_public_key]: Raises
        the [KeyFormatError][zapnotes.core.exceptions.KeyFormatError] family.
    [query_receipts()][zapnotes.services.receipts.query_receipts]: Raises
        [QueryError][zapnotes.core.exceptions.QueryError].
"""

from __future__ import annotations


class ZapNotesError(Exception):
    """Base exception for all zapnotes errors.

    Never raised directly -- always use a specific subclass.
    """


class ConfigurationError(ZapNotesError):
    """Invalid or missing configuration (YAML file, relay list, CLI flags)."""


class RelayConnectionError(ZapNotesError):
    """The relay connection could not be established.

    Terminal for the session: no automatic retry is attempted and the
    connection handle stays in the ``FAILED`` state.
    """


# ---------------------------------------------------------------------------
# Public key format
# ---------------------------------------------------------------------------


class KeyFormatError(ZapNotesError):
    """Base for public key normalization failures.

    Recoverable by the user correcting the input.
    """


class UnrecognizedKeyFormatError(KeyFormatError):
    """Input is neither an ``npub`` identifier nor a 64-character string."""

    def __init__(self) -> None:
        super().__init__("Invalid public key format. Please use npub or hex.")


class KeyDecodeError(KeyFormatError):
    """An ``npub`` identifier could not be decoded (bad checksum, bad data).

    Attributes:
        reason: The underlying decoder's message.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Error decoding public key: {reason}")


class WrongKeyTypeError(KeyFormatError):
    """A bech32 identifier decoded, but not to a public key.

    Attributes:
        prefix: The human-readable part found in the identifier.
    """

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix
        super().__init__("Invalid npub key.")


# ---------------------------------------------------------------------------
# Query
# ---------------------------------------------------------------------------


class QueryError(ZapNotesError):
    """Transport or protocol failure while fetching zap receipts.

    The original exception is chained as ``__cause__``. Not retried.
    """


class ConnectionNotReadyError(QueryError):
    """A query was issued while the connection was ``PENDING`` or ``FAILED``.

    Raised before any network I/O takes place.
    """

    def __init__(self, state: str) -> None:
        self.state = state
        super().__init__("Relay connection not initialized. Please wait and try again.")
