"""
Validation Engine - Main orchestrator for ledger validation.

The ValidationEngine runs transactions, blocks and whole chains through
the validation layers and reports a ValidationResult that records which
layer failed and why. The boolean helpers wrap the same checks for callers
that only need a verdict.
"""

import logging
import time
from enum import Enum
from typing import Any, Optional, List, Dict

from pydantic import BaseModel, Field, ConfigDict

from ..crypto import SignatureVerifier, verify
from ..encoding import MessageEncoding
from ..ledger import Block, Blockchain, Transaction, VerifierError, coerce
from .layers import BlockValidator, GenesisValidator, LinkageValidator, TransactionValidator

logger = logging.getLogger(__name__)


class ValidationErrorCode(Enum):
    """Error codes for validation failures."""
    # Chain shape errors (1xx)
    EMPTY_CHAIN = 100
    GENESIS_INVALID = 101

    # Cryptographic errors (2xx)
    HASH_MISMATCH = 200
    SIGNATURE_INVALID = 201

    # Transaction errors (3xx)
    NEGATIVE_AMOUNT = 300

    # Linkage errors (4xx)
    CHAIN_LINK_BROKEN = 400


class ValidationError(BaseModel):
    """A single validation failure."""
    code: ValidationErrorCode
    message: str
    layer: str
    block_index: Optional[int] = None
    transaction_index: Optional[int] = None
    details: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @classmethod
    def from_layer(cls, layer: str, error: dict[str, Any]) -> "ValidationError":
        """Build from the error dict a validation layer returns."""
        return cls(
            code=ValidationErrorCode[error["code"]],
            message=error["message"],
            layer=layer,
            block_index=error.get("block_index"),
            transaction_index=error.get("transaction_index"),
            details=error.get("details", {}),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (compat alias)."""
        data = self.model_dump()
        data["code"] = self.code.value
        data["code_name"] = self.code.name
        return data


class ValidationResult(BaseModel):
    """Result of validating a transaction, block or chain."""
    is_valid: bool
    errors: List[ValidationError] = Field(default_factory=list)
    duration_ms: float = 0.0
    layers_passed: List[str] = Field(default_factory=list)
    layers_failed: List[str] = Field(default_factory=list)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def first_error(self) -> Optional[ValidationError]:
        return self.errors[0] if self.errors else None

    @property
    def codes(self) -> list[ValidationErrorCode]:
        return [e.code for e in self.errors]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (compat alias)."""
        data = self.model_dump(exclude={'errors'})
        data['errors'] = [e.to_dict() for e in self.errors]
        return data


class ValidationEngine:
    """
    Layered ledger validator.

    Chain validation runs four hard gates in order and stops at the first
    one that fails:
    1. Genesis - chain is non-empty, genesis previous hash is null
    2. Linkage - each block records its predecessor's hash
    3. Blocks - each block's hash matches its content, transactions valid
    4. Transactions - every transaction of the flattened chain is valid

    The engine holds configuration only, so one instance can validate
    different chains from several threads.

    Usage:
        engine = ValidationEngine(encoding=MessageEncoding.CANONICAL)
        result = engine.validate_chain(chain)

        if not result.is_valid:
            for error in result.errors:
                print(f"{error.layer}: {error.message}")
    """

    def __init__(
        self,
        verifier: SignatureVerifier = verify,
        encoding: MessageEncoding = MessageEncoding.CANONICAL,
    ) -> None:
        """
        Initialize the validation engine.

        Args:
            verifier: Signature collaborator, verifier(public_key, message, signature)
            encoding: Field encoding the ledger was signed and sealed with
        """
        self.verifier = verifier
        self.encoding = MessageEncoding(encoding)

        self.transaction_validator = TransactionValidator()
        self.block_validator = BlockValidator(self.transaction_validator)
        self.genesis_validator = GenesisValidator()
        self.linkage_validator = LinkageValidator()

    @classmethod
    def from_settings(cls, settings: Any, verifier: SignatureVerifier = verify) -> "ValidationEngine":
        """Create an engine from ValidatorSettings."""
        return cls(verifier=verifier, encoding=settings.encoding)

    @property
    def context(self) -> dict[str, Any]:
        return {
            "signature_verifier": self.verifier,
            "encoding": self.encoding,
        }

    def validate_transaction(self, transaction: Transaction | dict[str, Any]) -> ValidationResult:
        """
        Validate a single transaction.

        Raises:
            MalformedInputError: If the transaction is structurally broken
            VerifierError: If the signature collaborator fails
        """
        start_time = time.perf_counter()
        transaction = coerce(Transaction, transaction)

        errors = self._run(self.transaction_validator, transaction)
        return self._gate_result(self.transaction_validator.name, errors, [], start_time)

    def validate_block(self, block: Block | dict[str, Any]) -> ValidationResult:
        """
        Validate a single block: hash first, then its transactions.

        Raises:
            MalformedInputError: If the block is structurally broken
            VerifierError: If the signature collaborator fails
        """
        start_time = time.perf_counter()
        block = coerce(Block, block)

        errors = self._run(self.block_validator, block)
        return self._gate_result(self.block_validator.name, errors, [], start_time)

    def validate_chain(self, blockchain: Blockchain | dict[str, Any]) -> ValidationResult:
        """
        Validate an entire chain through all four gates.

        Raises:
            MalformedInputError: If the chain is structurally broken
            VerifierError: If the signature collaborator fails
        """
        start_time = time.perf_counter()
        blockchain = coerce(Blockchain, blockchain)
        layers_passed: list[str] = []

        gates = [
            (self.genesis_validator.name, lambda: self._run(self.genesis_validator, blockchain)),
            (self.linkage_validator.name, lambda: self._run(self.linkage_validator, blockchain)),
            ("blocks", lambda: self._validate_blocks(blockchain)),
            ("transactions", lambda: self._validate_transactions(blockchain)),
        ]

        for layer, check in gates:
            errors = check()
            if errors:
                logger.warning(f"Chain of {len(blockchain)} blocks failed at {layer}: {errors[0].message}")
                return self._gate_result(layer, errors, layers_passed, start_time)
            layers_passed.append(layer)

        logger.debug(f"Chain of {len(blockchain)} blocks is valid")
        return self._create_result(True, [], layers_passed, [], start_time)

    def is_valid_transaction(self, transaction: Transaction | dict[str, Any]) -> bool:
        return self.validate_transaction(transaction).is_valid

    def is_valid_block(self, block: Block | dict[str, Any]) -> bool:
        return self.validate_block(block).is_valid

    def is_valid_chain(self, blockchain: Blockchain | dict[str, Any]) -> bool:
        return self.validate_chain(blockchain).is_valid

    def _run(self, layer: Any, subject: Any) -> list[ValidationError]:
        try:
            raw = layer.validate(subject, self.context)
        except VerifierError:
            logger.error(f"Signature verifier failed in {layer.name} layer")
            raise
        return [ValidationError.from_layer(layer.name, e) for e in raw]

    def _validate_blocks(self, blockchain: Blockchain) -> list[ValidationError]:
        errors = []
        for i, block in enumerate(blockchain.blocks):
            for error in self._run(self.block_validator, block):
                error.block_index = i
                errors.append(error)
            if errors:
                break
        return errors

    def _validate_transactions(self, blockchain: Blockchain) -> list[ValidationError]:
        positioned = [
            (bi, ti, transaction)
            for bi, block in enumerate(blockchain.blocks)
            for ti, transaction in enumerate(block.transactions)
        ]

        errors = []
        for bi, ti, transaction in positioned:
            for error in self._run(self.transaction_validator, transaction):
                error.block_index = bi
                error.transaction_index = ti
                errors.append(error)
        return errors

    def _gate_result(
        self,
        layer: str,
        errors: list[ValidationError],
        layers_passed: list[str],
        start_time: float,
    ) -> ValidationResult:
        if errors:
            return self._create_result(False, errors, layers_passed, [layer], start_time)
        return self._create_result(True, [], layers_passed + [layer], [], start_time)

    def _create_result(
        self,
        is_valid: bool,
        errors: list[ValidationError],
        layers_passed: list[str],
        layers_failed: list[str],
        start_time: float,
    ) -> ValidationResult:
        """Helper to create validation result with timing."""
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        return ValidationResult(
            is_valid=is_valid,
            errors=errors,
            duration_ms=elapsed_ms,
            layers_passed=layers_passed,
            layers_failed=layers_failed,
        )


_default_engine = ValidationEngine()


def is_valid_transaction(transaction: Transaction | dict[str, Any]) -> bool:
    """True if the amount is non-negative and the signature verifies."""
    return _default_engine.is_valid_transaction(transaction)


def is_valid_block(block: Block | dict[str, Any]) -> bool:
    """True if the stored hash matches the content and every transaction is valid."""
    return _default_engine.is_valid_block(block)


def is_valid_chain(blockchain: Blockchain | dict[str, Any]) -> bool:
    """True if genesis, linkage, every block and every transaction are valid."""
    return _default_engine.is_valid_chain(blockchain)
