"""
Validation Layers - Individual validator implementations.

Each layer checks one aspect of ledger integrity:
- Transaction: amount sign and signature
- Block: recomputed hash, then every contained transaction
- Genesis: chain is non-empty and starts with a null previous hash
- Linkage: every block records its predecessor's hash

Layers return error dicts instead of raising, since an invalid record is
an expected outcome. Malformed records and verifier failures still raise.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from ..crypto import verify
from ..encoding import MessageEncoding
from ..ledger import Block, Blockchain, Transaction
from .proofs import verify_block_hash, verify_chain_link, verify_genesis, verify_transaction_signature

logger = logging.getLogger(__name__)


def _encoding(context: dict[str, Any]) -> MessageEncoding:
    return context.get("encoding", MessageEncoding.CANONICAL)


class ValidationLayer(ABC):
    """Base class for validation layers."""

    name: str = "base"

    @abstractmethod
    def validate(self, subject: Any, context: dict[str, Any]) -> list[dict[str, Any]]:
        """
        Validate a ledger record.

        Args:
            subject: Record to validate
            context: Shared settings (signature_verifier, encoding)

        Returns:
            List of error dicts, empty if valid
        """
        pass


class TransactionValidator(ValidationLayer):
    """
    Leaf layer: Transaction Validation

    Rejects negative amounts before the signature is ever checked.
    """

    name = "transaction"

    def validate(self, transaction: Transaction, context: dict[str, Any]) -> list[dict[str, Any]]:
        if transaction.amount < 0:
            logger.warning(f"Rejecting transaction with negative amount {transaction.amount}")
            return [{
                "code": "NEGATIVE_AMOUNT",
                "message": f"Negative amount: {transaction.amount}",
                "details": {"amount": transaction.amount},
            }]

        verifier = context.get("signature_verifier", verify)
        if not verify_transaction_signature(transaction, verifier, _encoding(context)):
            logger.warning(f"Rejecting transaction from {transaction.source[:16]}...: bad signature")
            return [{
                "code": "SIGNATURE_INVALID",
                "message": "Signature does not match source, recipient and amount",
                "details": {"source": transaction.source, "recipient": transaction.recipient},
            }]

        return []


class BlockValidator(ValidationLayer):
    """
    Block Validation

    A hash mismatch stops the layer before any transaction is checked.
    """

    name = "block"

    def __init__(self, transaction_validator: TransactionValidator | None = None):
        self.transaction_validator = transaction_validator or TransactionValidator()

    def validate(self, block: Block, context: dict[str, Any]) -> list[dict[str, Any]]:
        is_valid, calculated = verify_block_hash(block, _encoding(context))
        if not is_valid:
            logger.warning(f"Block hash mismatch: stored {block.hash[:16]}..., calculated {calculated[:16]}...")
            return [{
                "code": "HASH_MISMATCH",
                "message": "Block hash does not match content",
                "details": {
                    "stored": block.hash,
                    "calculated": calculated,
                },
            }]

        errors = []
        for i, transaction in enumerate(block.transactions):
            for error in self.transaction_validator.validate(transaction, context):
                error["transaction_index"] = i
                errors.append(error)

        return errors


class GenesisValidator(ValidationLayer):
    """Chain must be non-empty and start with a genesis-shaped block."""

    name = "genesis"

    def validate(self, blockchain: Blockchain, context: dict[str, Any]) -> list[dict[str, Any]]:
        if not blockchain.blocks:
            logger.warning("Rejecting empty chain")
            return [{
                "code": "EMPTY_CHAIN",
                "message": "Chain has no genesis block",
            }]

        genesis = blockchain.blocks[0]
        if not verify_genesis(genesis):
            logger.warning("Rejecting chain whose genesis has a previous hash")
            return [{
                "code": "GENESIS_INVALID",
                "message": "Genesis block previous hash must be null",
                "block_index": 0,
                "details": {"previous_hash": genesis.previous_hash},
            }]

        return []


class LinkageValidator(ValidationLayer):
    """Every non-genesis block must record the exact hash of its predecessor."""

    name = "linkage"

    def validate(self, blockchain: Blockchain, context: dict[str, Any]) -> list[dict[str, Any]]:
        errors = []
        blocks = blockchain.blocks

        for i in range(1, len(blocks)):
            current = blocks[i]
            previous = blocks[i - 1]

            if not verify_chain_link(current, previous):
                logger.warning(f"Block {i} chain link broken")
                errors.append({
                    "code": "CHAIN_LINK_BROKEN",
                    "message": f"Block {i} does not link to block {i - 1}",
                    "block_index": i,
                    "details": {
                        "expected": previous.hash,
                        "actual": current.previous_hash,
                    },
                })

        return errors
