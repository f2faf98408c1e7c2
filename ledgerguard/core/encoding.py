"""
Byte encodings for signed messages and block hash input.

Two encodings are supported:

- CANONICAL: each field is framed so field boundaries are unambiguous.
  Strings are a 4-byte big-endian length followed by UTF-8 bytes,
  integers are 8-byte signed big-endian, and an optional string carries
  a presence byte (0x00 absent, 0x01 present) before its frame.
- LEGACY: plain string concatenation, byte-identical to ledgers signed
  by concatenating source, recipient and amount. None renders as "null".
  "12" + "3" and "1" + "23" collide under this encoding. Amounts must be
  integers here too.

Whatever encoding signed a ledger must also be used to validate it.
"""

import hashlib
import struct
from enum import Enum
from typing import Iterable, Optional

from .ledger import MalformedInputError

LEGACY_NULL = "null"

_INT64 = struct.Struct(">q")
_LENGTH = struct.Struct(">I")


class MessageEncoding(str, Enum):
    """
    How fields are joined before signing or hashing.

    LEGACY renders amounts as Python integers. Ledgers whose signer wrote
    fractional amounts (12.5) cannot be validated under either encoding;
    such records are rejected as malformed before any message is composed.
    """
    CANONICAL = "canonical"
    LEGACY = "legacy"


def _require_str(name: str, value: object) -> str:
    if not isinstance(value, str):
        raise MalformedInputError(f"{name} must be a string, got {type(value).__name__}")
    return value


def _require_int(name: str, value: object) -> int:
    # bool is an int subclass but never a valid amount or nonce
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedInputError(f"{name} must be an integer, got {type(value).__name__}")
    return value


def _frame_str(value: str) -> bytes:
    data = value.encode("utf-8")
    return _LENGTH.pack(len(data)) + data


def _frame_int(name: str, value: int) -> bytes:
    try:
        return _INT64.pack(value)
    except struct.error as e:
        raise MalformedInputError(f"{name} {value} does not fit in 64 bits") from e


def _frame_optional_str(value: Optional[str]) -> bytes:
    if value is None:
        return b"\x00"
    return b"\x01" + _frame_str(value)


def transaction_message(
    source: str,
    recipient: str,
    amount: int,
    encoding: MessageEncoding = MessageEncoding.CANONICAL,
) -> bytes:
    """
    Compose the message a transaction signature covers.

    Args:
        source: Signer identity (public key hex)
        recipient: Recipient identity
        amount: Transferred amount
        encoding: Field encoding used by the signer

    Returns:
        Message bytes

    Raises:
        MalformedInputError: If a field has the wrong type
    """
    source = _require_str("source", source)
    recipient = _require_str("recipient", recipient)
    amount = _require_int("amount", amount)

    if encoding is MessageEncoding.LEGACY:
        return f"{source}{recipient}{amount}".encode("utf-8")

    return _frame_str(source) + _frame_str(recipient) + _frame_int("amount", amount)


def block_hash_input(
    previous_hash: Optional[str],
    signatures: Iterable[str],
    nonce: int,
    encoding: MessageEncoding = MessageEncoding.CANONICAL,
) -> bytes:
    """
    Compose the bytes a block hash covers: previous hash, signatures, nonce.

    Raises:
        MalformedInputError: If a field has the wrong type
    """
    if previous_hash is not None:
        previous_hash = _require_str("previous_hash", previous_hash)
    signatures = [_require_str("signature", s) for s in signatures]
    nonce = _require_int("nonce", nonce)

    if encoding is MessageEncoding.LEGACY:
        prefix = LEGACY_NULL if previous_hash is None else previous_hash
        return f"{prefix}{''.join(signatures)}{nonce}".encode("utf-8")

    parts = [_frame_optional_str(previous_hash), _LENGTH.pack(len(signatures))]
    parts.extend(_frame_str(s) for s in signatures)
    parts.append(_frame_int("nonce", nonce))
    return b"".join(parts)


def sha512_hex(data: bytes) -> str:
    """Lowercase hex SHA-512 digest."""
    return hashlib.sha512(data).hexdigest()
