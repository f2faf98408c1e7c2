"""
Standalone Proof Verification Functions.

This module provides the individual checks the validation layers are
built from:
- Block hash recomputation and verification
- Genesis shape verification
- Chain link verification
- Transaction signature verification

Each function is pure and works on ledger models.
"""

import logging
from typing import Optional

from ..crypto import SignatureVerifier
from ..encoding import MessageEncoding, block_hash_input, sha512_hex, transaction_message
from ..ledger import Block, Transaction

logger = logging.getLogger(__name__)


def compute_block_hash(
    block: Block,
    encoding: MessageEncoding = MessageEncoding.CANONICAL,
) -> str:
    """
    Recompute a block's hash from its current content.

    Args:
        block: Block to hash
        encoding: Field encoding used when the block was sealed

    Returns:
        Lowercase hex SHA-512 digest
    """
    return sha512_hex(
        block_hash_input(block.previous_hash, block.signatures, block.nonce, encoding)
    )


def verify_block_hash(
    block: Block,
    encoding: MessageEncoding = MessageEncoding.CANONICAL,
) -> tuple[bool, str]:
    """
    Verify that a block's stored hash matches its content.

    Returns:
        Tuple of (is_valid, calculated_hash)
    """
    calculated = compute_block_hash(block, encoding)
    return calculated == block.hash, calculated


def verify_genesis(block: Block) -> bool:
    """A genesis block has no predecessor, so its previous hash is None."""
    return block.previous_hash is None


def verify_chain_link(block: Block, previous_block: Optional[Block]) -> bool:
    """
    Verify that a block correctly links to its predecessor.

    Args:
        block: Current block
        previous_block: Previous block (or None for genesis)

    Returns:
        True if chain link is valid
    """
    if previous_block is None:
        return verify_genesis(block)

    return block.previous_hash == previous_block.hash


def verify_transaction_signature(
    transaction: Transaction,
    verifier: SignatureVerifier,
    encoding: MessageEncoding = MessageEncoding.CANONICAL,
) -> bool:
    """
    Check a transaction's signature over source, recipient and amount.

    Errors raised by the verifier propagate to the caller.
    """
    message = transaction_message(
        transaction.source,
        transaction.recipient,
        transaction.amount,
        encoding,
    )
    return verifier(transaction.source, message, transaction.signature)
