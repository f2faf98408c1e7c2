"""
ledgerguard - Integrity validation for hash-linked ledgers.

Checks that signed transactions are authentic and unmodified, that each
block's SHA-512 hash matches its content, and that a chain is correctly
linked from its genesis block.

Quick Start:
    from ledgerguard import ValidationEngine, is_valid_chain

    if not is_valid_chain(chain):
        result = ValidationEngine().validate_chain(chain)
        print(result.first_error.code.name)
"""

from .core import (
    Transaction,
    Block,
    Blockchain,
    MessageEncoding,
    LedgerError,
    MalformedInputError,
    VerifierError,
    ConfigurationError,
)
from .core.validation import (
    ValidationEngine,
    ValidationResult,
    ValidationError,
    ValidationErrorCode,
    ValidationReport,
    generate_chain_report,
    is_valid_transaction,
    is_valid_block,
    is_valid_chain,
)
from .config import ValidatorSettings, load_settings, configure_logging

__version__ = "1.0.0"

__all__ = [
    # Records
    "Transaction",
    "Block",
    "Blockchain",
    "MessageEncoding",
    # Validation
    "ValidationEngine",
    "ValidationResult",
    "ValidationError",
    "ValidationErrorCode",
    "ValidationReport",
    "generate_chain_report",
    "is_valid_transaction",
    "is_valid_block",
    "is_valid_chain",
    # Configuration
    "ValidatorSettings",
    "load_settings",
    "configure_logging",
    # Exceptions
    "LedgerError",
    "MalformedInputError",
    "VerifierError",
    "ConfigurationError",
    # Version
    "__version__",
]
