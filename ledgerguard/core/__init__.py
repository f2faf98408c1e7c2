"""
Core ledger records, encodings and the signature collaborator.

This package provides:
- Transaction, Block, Blockchain: ledger records
- MessageEncoding: canonical and legacy field encodings
- Ed25519 verification used by the validators by default
"""

from .ledger import (
    Transaction,
    Block,
    Blockchain,
    LedgerError,
    MalformedInputError,
    VerifierError,
    ConfigurationError,
)

from .encoding import (
    MessageEncoding,
    transaction_message,
    block_hash_input,
    sha512_hex,
)

from .crypto import (
    KeyPair,
    SignatureVerifier,
    generate_signing_keypair,
    sign_message,
    verify_signature,
    verify,
)

__all__ = [
    # Ledger
    "Transaction",
    "Block",
    "Blockchain",
    "LedgerError",
    "MalformedInputError",
    "VerifierError",
    "ConfigurationError",
    # Encoding
    "MessageEncoding",
    "transaction_message",
    "block_hash_input",
    "sha512_hex",
    # Crypto
    "KeyPair",
    "SignatureVerifier",
    "generate_signing_keypair",
    "sign_message",
    "verify_signature",
    "verify",
]
