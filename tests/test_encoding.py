"""
Tests for message and block hash encodings.
"""

import hashlib
import struct

import pytest

from ledgerguard.core.encoding import (
    MessageEncoding,
    block_hash_input,
    sha512_hex,
    transaction_message,
)
from ledgerguard.core.ledger import MalformedInputError


def frame(text: str) -> bytes:
    data = text.encode("utf-8")
    return struct.pack(">I", len(data)) + data


class TestTransactionMessage:
    """Tests for transaction message composition."""

    def test_canonical_layout(self):
        message = transaction_message("ab", "c", 5)

        assert message == frame("ab") + frame("c") + struct.pack(">q", 5)

    def test_legacy_is_plain_concatenation(self):
        message = transaction_message("ab", "c", 5, MessageEncoding.LEGACY)

        assert message == b"abc5"

    def test_legacy_field_boundaries_are_ambiguous(self):
        first = transaction_message("12", "3", 0, MessageEncoding.LEGACY)
        second = transaction_message("1", "23", 0, MessageEncoding.LEGACY)

        assert first == second

    def test_canonical_field_boundaries_are_unambiguous(self):
        assert transaction_message("12", "3", 0) != transaction_message("1", "23", 0)

    def test_canonical_negative_amount(self):
        message = transaction_message("a", "b", -1)

        assert message.endswith(b"\xff" * 8)

    def test_utf8_fields(self):
        message = transaction_message("é", "b", 0)

        assert message.startswith(b"\x00\x00\x00\x02\xc3\xa9")

    def test_amount_must_be_integer(self):
        with pytest.raises(MalformedInputError, match="amount"):
            transaction_message("a", "b", "5")

    def test_bool_amount_rejected(self):
        with pytest.raises(MalformedInputError):
            transaction_message("a", "b", True)

    def test_source_must_be_string(self):
        with pytest.raises(MalformedInputError, match="source"):
            transaction_message(None, "b", 1)

    def test_canonical_amount_overflow(self):
        with pytest.raises(MalformedInputError, match="64 bits"):
            transaction_message("a", "b", 2 ** 63)

    def test_legacy_accepts_large_amount(self):
        assert transaction_message("a", "b", 2 ** 63, MessageEncoding.LEGACY).endswith(
            str(2 ** 63).encode()
        )


class TestBlockHashInput:
    """Tests for block hash input composition."""

    def test_legacy_genesis_renders_null(self):
        assert block_hash_input(None, [], 0, MessageEncoding.LEGACY) == b"null0"

    def test_legacy_concatenates_signatures(self):
        data = block_hash_input("prev", ["s1", "s2"], 7, MessageEncoding.LEGACY)

        assert data == b"prevs1s27"

    def test_canonical_absent_previous_hash(self):
        data = block_hash_input(None, [], 0)

        assert data == b"\x00" + struct.pack(">I", 0) + struct.pack(">q", 0)

    def test_canonical_present_previous_hash(self):
        data = block_hash_input("ab", ["s"], 1)

        assert data == (
            b"\x01" + frame("ab")
            + struct.pack(">I", 1) + frame("s")
            + struct.pack(">q", 1)
        )

    def test_canonical_null_differs_from_literal_null(self):
        assert block_hash_input(None, [], 0) != block_hash_input("null", [], 0)

    def test_canonical_signature_split_is_unambiguous(self):
        assert block_hash_input("p", ["ab", "c"], 0) != block_hash_input("p", ["a", "bc"], 0)

    def test_nonce_must_be_integer(self):
        with pytest.raises(MalformedInputError, match="nonce"):
            block_hash_input(None, [], "0")

    def test_signature_must_be_string(self):
        with pytest.raises(MalformedInputError, match="signature"):
            block_hash_input(None, [b"raw"], 0)


class TestSha512Hex:

    def test_matches_hashlib(self):
        assert sha512_hex(b"null0") == hashlib.sha512(b"null0").hexdigest()

    def test_lowercase_hex(self):
        digest = sha512_hex(b"")

        assert len(digest) == 128
        assert digest == digest.lower()
