"""Public key normalization and Nostr client helpers.

The utils layer depends only on [zapnotes.models][zapnotes.models] and
``zapnotes.core.exceptions``.

Attributes:
    keys: ``npub``/hex public key normalization.
    protocol: Client factory, relay connection and the zap receipt fetch,
        built on ``nostr_sdk``.
"""
