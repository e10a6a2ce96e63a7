"""Public key normalization for zapnotes.

Turns user input into the 64-character hex form used in relay filters.
Two input forms are accepted:

* ``npub1...`` NIP-19 identifiers, decoded with ``nostr_sdk``.
* Any 64-character string, passed through unchanged.

Note:
    The 64-character branch performs no hexadecimal character check, so
    ``"z" * 64`` is accepted. Relays simply return nothing for such a key.

Examples:
    ```python
    normalize_public_key(
        "npub10elfcs4fr0l0r8af98jlmgdh9c8tcxjvz9qkw038js35mp4dma8qzvjptg"
    )
    # '7e7e9c42a91bfef19fa929e5fda1b72e0ebc1a4c1141673e2794234d86addf4e'
    ```
"""

from __future__ import annotations

import logging

from bech32 import bech32_decode
from nostr_sdk import NostrSdkError, PublicKey

from zapnotes.core.exceptions import (
    KeyDecodeError,
    UnrecognizedKeyFormatError,
    WrongKeyTypeError,
)
from zapnotes.models.constants import HEX_PUBLIC_KEY_LENGTH, NPUB_PREFIX


logger = logging.getLogger(__name__)


def _bech32_prefix(value: str) -> str | None:
    """Return the human-readable part of a checksum-valid bech32 string."""
    hrp, _ = bech32_decode(value)
    return hrp


def decode_npub(value: str) -> str:
    """Decode a NIP-19 ``npub`` identifier into a hex public key.

    Args:
        value: Identifier starting with ``npub``.

    Returns:
        The 64-character hex public key.

    Raises:
        WrongKeyTypeError: If the string is valid bech32 but its prefix is
            not ``npub`` (e.g. ``npubx1...``).
        KeyDecodeError: For any other decoding failure (bad checksum,
            invalid characters, wrong payload length).
    """
    try:
        return PublicKey.parse(value).to_hex()
    except NostrSdkError as e:
        prefix = _bech32_prefix(value)
        if prefix is not None and prefix != NPUB_PREFIX:
            logger.debug("npub_wrong_type prefix=%s", prefix)
            raise WrongKeyTypeError(prefix) from e
        logger.debug("npub_decode_failed error=%s", e)
        raise KeyDecodeError(str(e) or type(e).__name__) from e


def normalize_public_key(value: str) -> str:
    """Normalize a user-supplied public key to its hex form.

    Branches are checked in order: ``npub`` prefix first, then length.

    Args:
        value: ``npub1...`` identifier or 64-character hex string.

    Returns:
        The normalized 64-character public key.

    Raises:
        KeyDecodeError: ``npub`` input that fails to decode.
        WrongKeyTypeError: ``npub``-prefixed bech32 input of another type.
        UnrecognizedKeyFormatError: Anything else that is not 64 characters.
    """
    if value.startswith(NPUB_PREFIX):
        return decode_npub(value)
    if len(value) == HEX_PUBLIC_KEY_LENGTH:
        return value
    raise UnrecognizedKeyFormatError()
