"""
Unit tests for utils.keys module.

Tests:
- normalize_public_key() - npub branch, 64-character branch, fallthrough
- decode_npub() - checksum failures, wrong bech32 prefix
"""

from unittest.mock import patch

import pytest
from bech32 import bech32_encode, convertbits

from tests.conftest import NIP19_HEX, NIP19_NPUB
from zapnotes.core.exceptions import (
    KeyDecodeError,
    KeyFormatError,
    UnrecognizedKeyFormatError,
    WrongKeyTypeError,
)
from zapnotes.utils.keys import decode_npub, normalize_public_key


# =============================================================================
# Test Constants
# =============================================================================

# Last character changed: valid charset, invalid checksum
BAD_CHECKSUM_NPUB = NIP19_NPUB[:-1] + ("h" if NIP19_NPUB[-1] != "h" else "j")


def _encode(hrp: str, payload: bytes) -> str:
    return bech32_encode(hrp, convertbits(payload, 8, 5))


# =============================================================================
# 64-character Branch
# =============================================================================


class TestNormalizeSixtyFourChars:
    """Inputs of exactly 64 characters that do not start with npub."""

    def test_hex_returned_unchanged(self) -> None:
        assert normalize_public_key(NIP19_HEX) == NIP19_HEX

    def test_non_hex_accepted(self) -> None:
        """No charset validation is performed on this branch."""
        value = "a" * 64
        assert normalize_public_key(value) == value

    @pytest.mark.parametrize("value", ["z" * 64, "-" * 64, "G" * 32 + " " * 32])
    def test_any_64_char_string_accepted(self, value: str) -> None:
        assert normalize_public_key(value) == value

    def test_uppercase_hex_not_lowered(self) -> None:
        assert normalize_public_key(NIP19_HEX.upper()) == NIP19_HEX.upper()

    def test_uppercase_npub_prefix_goes_to_length_check(self) -> None:
        """The prefix check is case-sensitive."""
        with pytest.raises(UnrecognizedKeyFormatError):
            normalize_public_key(NIP19_NPUB.upper())


# =============================================================================
# Unrecognized Format
# =============================================================================


class TestNormalizeUnrecognized:
    """Inputs that neither start with npub nor have 64 characters."""

    @pytest.mark.parametrize("value", ["", "abc", "a" * 63, "a" * 65, NIP19_HEX + " "])
    def test_raises_unrecognized(self, value: str) -> None:
        with pytest.raises(UnrecognizedKeyFormatError):
            normalize_public_key(value)

    def test_message(self) -> None:
        with pytest.raises(KeyFormatError, match="Please use npub or hex"):
            normalize_public_key("abc")

    def test_nsec_is_unrecognized(self) -> None:
        nsec = "nsec1vl029mgpspedva04g90vltkh6fvh240zqtv9k0t9af8935ke9laqsnlfe5"  # pragma: allowlist secret
        with pytest.raises(UnrecognizedKeyFormatError):
            normalize_public_key(nsec)


# =============================================================================
# npub Branch
# =============================================================================


class TestNormalizeNpub:
    """Inputs starting with npub."""

    def test_known_pair_decodes(self) -> None:
        assert normalize_public_key(NIP19_NPUB) == NIP19_HEX

    def test_result_is_64_hex_chars(self) -> None:
        result = normalize_public_key(NIP19_NPUB)
        assert len(result) == 64
        int(result, 16)

    def test_encoded_payload_round_trips(self) -> None:
        payload = bytes(range(32))
        assert normalize_public_key(_encode("npub", payload)) == payload.hex()

    def test_off_curve_payload_accepted(self) -> None:
        """Only the encoding is checked, not that the key is a curve point."""
        assert normalize_public_key(_encode("npub", b"\xff" * 32)) == "ff" * 32

    def test_bad_checksum_raises_decode_error(self) -> None:
        with pytest.raises(KeyDecodeError) as exc_info:
            normalize_public_key(BAD_CHECKSUM_NPUB)
        assert exc_info.value.reason
        assert str(exc_info.value).startswith("Error decoding public key: ")

    @pytest.mark.parametrize("value", ["npub", "npub1", "npub1abc", "npub1" + "b" * 58])
    def test_malformed_raises_decode_error(self, value: str) -> None:
        with pytest.raises(KeyDecodeError):
            normalize_public_key(value)

    def test_short_payload_raises_decode_error(self) -> None:
        with pytest.raises(KeyDecodeError):
            normalize_public_key(_encode("npub", bytes(16)))

    def test_npub_branch_wins_over_length(self) -> None:
        """A 64-character string starting with npub is decoded, not passed through."""
        value = "npub" + "a" * 60
        with pytest.raises(KeyDecodeError):
            normalize_public_key(value)


class TestDecodeNpubWrongType:
    """Valid bech32 whose prefix starts with npub but is not npub."""

    def test_wrong_prefix_raises_wrong_key_type(self) -> None:
        value = _encode("npubx", bytes(32))
        with pytest.raises(WrongKeyTypeError) as exc_info:
            normalize_public_key(value)
        assert exc_info.value.prefix == "npubx"
        assert str(exc_info.value) == "Invalid npub key."

    def test_wrong_type_chains_decoder_error(self) -> None:
        with pytest.raises(WrongKeyTypeError) as exc_info:
            decode_npub(_encode("npubx", bytes(32)))
        assert exc_info.value.__cause__ is not None


class TestDecodeNpubDecoderMessage:
    """The decoder's own message is carried on KeyDecodeError."""

    def test_reason_is_decoder_message(self) -> None:
        class FakeDecoderError(Exception):
            pass

        with (
            patch("zapnotes.utils.keys.NostrSdkError", FakeDecoderError),
            patch("zapnotes.utils.keys.PublicKey") as mock_public_key,
        ):
            mock_public_key.parse.side_effect = FakeDecoderError("invalid checksum")
            with pytest.raises(KeyDecodeError) as exc_info:
                decode_npub(BAD_CHECKSUM_NPUB)

        assert exc_info.value.reason == "invalid checksum"
        assert str(exc_info.value) == "Error decoding public key: invalid checksum"

    def test_empty_decoder_message_falls_back_to_type_name(self) -> None:
        class FakeDecoderError(Exception):
            pass

        with (
            patch("zapnotes.utils.keys.NostrSdkError", FakeDecoderError),
            patch("zapnotes.utils.keys.PublicKey") as mock_public_key,
        ):
            mock_public_key.parse.side_effect = FakeDecoderError()
            with pytest.raises(KeyDecodeError) as exc_info:
                decode_npub(BAD_CHECKSUM_NPUB)

        assert exc_info.value.reason == "FakeDecoderError"

    def test_success_uses_decoder_hex(self) -> None:
        with patch("zapnotes.utils.keys.PublicKey") as mock_public_key:
            mock_public_key.parse.return_value.to_hex.return_value = NIP19_HEX
            assert decode_npub(NIP19_NPUB) == NIP19_HEX
            mock_public_key.parse.assert_called_once_with(NIP19_NPUB)
