"""
Ledger Validation Engine.

This module provides a layered validation system for hash-linked ledgers
of signed transactions:

- Transaction validation (amount sign, signature)
- Block validation (SHA-512 content hash, contained transactions)
- Chain validation (genesis shape, hash linkage, blocks, transactions)

Usage:
    from ledgerguard.core.validation import ValidationEngine

    engine = ValidationEngine()
    result = engine.validate_chain(chain)
    if not result.is_valid:
        print(result.first_error.code.name)
"""

from .engine import (
    ValidationEngine,
    ValidationResult,
    ValidationError,
    ValidationErrorCode,
    is_valid_transaction,
    is_valid_block,
    is_valid_chain,
)
from .layers import (
    ValidationLayer,
    TransactionValidator,
    BlockValidator,
    GenesisValidator,
    LinkageValidator,
)
from .proofs import (
    compute_block_hash,
    verify_block_hash,
    verify_genesis,
    verify_chain_link,
    verify_transaction_signature,
)
from .report import ValidationReport, generate_chain_report

__all__ = [
    # Engine
    "ValidationEngine",
    "ValidationResult",
    "ValidationError",
    "ValidationErrorCode",
    "is_valid_transaction",
    "is_valid_block",
    "is_valid_chain",
    # Validators
    "ValidationLayer",
    "TransactionValidator",
    "BlockValidator",
    "GenesisValidator",
    "LinkageValidator",
    # Proofs
    "compute_block_hash",
    "verify_block_hash",
    "verify_genesis",
    "verify_chain_link",
    "verify_transaction_signature",
    # Reports
    "ValidationReport",
    "generate_chain_report",
]
