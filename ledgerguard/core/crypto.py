"""
Signature collaborator for ledger transactions.

This module provides:
- Ed25519 key pair generation (for fixtures and demos)
- Message signing (for fixtures and demos)
- Signature verification, the only piece the validators depend on

Validators talk to verification through the SignatureVerifier contract:
    verifier(public_key_hex, message, signature_hex) -> bool
"""

import base64
from typing import Any, Callable

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from pydantic import BaseModel, field_serializer, field_validator, ConfigDict

from .ledger import VerifierError


# Type alias for signature verifier function
SignatureVerifier = Callable[[str, bytes, str], bool]


class KeyPair(BaseModel):
    """Container for an Ed25519 key pair."""

    private_key: bytes
    public_key: bytes

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_serializer('private_key', 'public_key')
    def serialize_bytes(self, v: bytes, _info):
        """Serialize bytes to base64 string."""
        return base64.b64encode(v).decode()

    @field_validator('private_key', 'public_key', mode='before')
    @classmethod
    def validate_bytes(cls, v: Any) -> bytes:
        """Decode base64 string to bytes if needed."""
        if isinstance(v, str):
            return base64.b64decode(v)
        return v

    @property
    def public_key_hex(self) -> str:
        """Get public key as hex string; this is a ledger identity."""
        return self.public_key.hex()

    def sign(self, message: bytes) -> str:
        """Sign a message and return the hex signature."""
        return sign_message(message, self.private_key).hex()


def generate_signing_keypair() -> KeyPair:
    """
    Generate an Ed25519 key pair for digital signatures.

    Returns:
        KeyPair with private and public signing keys
    """
    private_key = Ed25519PrivateKey.generate()
    public_key = private_key.public_key()

    private_bytes = private_key.private_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PrivateFormat.Raw,
        encryption_algorithm=serialization.NoEncryption()
    )
    public_bytes = public_key.public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw
    )

    return KeyPair(private_key=private_bytes, public_key=public_bytes)


def sign_message(message: bytes, private_key: bytes) -> bytes:
    """
    Sign a message using Ed25519.

    Args:
        message: The message to sign
        private_key: Ed25519 private key bytes

    Returns:
        64-byte signature
    """
    key = Ed25519PrivateKey.from_private_bytes(private_key)
    return key.sign(message)


def verify_signature(message: bytes, signature: bytes, public_key: bytes) -> bool:
    """
    Verify an Ed25519 signature.

    Args:
        message: The original message
        signature: The signature to verify
        public_key: Ed25519 public key bytes

    Returns:
        True if signature is valid, False if it does not match

    Raises:
        VerifierError: If the public key is not a valid Ed25519 key
    """
    try:
        key = Ed25519PublicKey.from_public_bytes(public_key)
    except ValueError as e:
        raise VerifierError(f"Invalid Ed25519 public key: {e}") from e

    try:
        key.verify(signature, message)
        return True
    except InvalidSignature:
        return False


def verify(public_key_hex: str, message: bytes, signature_hex: str) -> bool:
    """
    Default SignatureVerifier: hex-encoded key and signature.

    Args:
        public_key_hex: Signer public key as hex (the transaction source)
        message: Composed transaction message
        signature_hex: Signature as hex

    Returns:
        True if the signature verifies for this key and message

    Raises:
        VerifierError: If key or signature is not valid hex, or the key is unusable
    """
    try:
        public_key = bytes.fromhex(public_key_hex)
        signature = bytes.fromhex(signature_hex)
    except (TypeError, ValueError) as e:
        raise VerifierError(f"Key or signature is not hex: {e}") from e

    return verify_signature(message, signature, public_key)
