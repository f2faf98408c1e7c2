"""
Ledger records for signed transactions and hash-linked blocks.

This module provides:
- Transaction: a transfer signed by its source
- Block: an ordered batch of transactions with a claimed SHA-512 hash
- Blockchain: an ordered sequence of blocks, index 0 being genesis
- The ledgerguard exception hierarchy

Records are plain pydantic models. Nothing here hashes, signs or mines;
construction of valid records is the job of an external builder.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError


class LedgerError(Exception):
    """Base exception for ledgerguard errors."""
    pass


class MalformedInputError(LedgerError):
    """A record is missing a field or has a field of the wrong shape."""
    pass


class VerifierError(LedgerError):
    """The signature-verification collaborator itself failed."""
    pass


class ConfigurationError(LedgerError):
    """Settings could not be loaded or did not validate."""
    pass


class Transaction(BaseModel):
    """A single signed transfer."""

    source: str
    recipient: str
    amount: int
    signature: str

    model_config = ConfigDict(arbitrary_types_allowed=True, from_attributes=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert transaction to dictionary representation (compat alias)."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Transaction":
        """Create a Transaction from dictionary representation (compat alias)."""
        return cls(**data)


class Block(BaseModel):
    """A single block in the ledger."""

    # Every field is required; a genesis block states previous_hash=None explicitly
    previous_hash: Optional[str]
    transactions: list[Transaction]
    nonce: int
    hash: str

    model_config = ConfigDict(arbitrary_types_allowed=True, from_attributes=True)

    @property
    def signatures(self) -> list[str]:
        """Transaction signatures in block order."""
        return [t.signature for t in self.transactions]

    def to_dict(self) -> dict[str, Any]:
        """Convert block to dictionary representation (compat alias)."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Block":
        """Create a Block from dictionary representation (compat alias)."""
        return cls(**data)


class Blockchain(BaseModel):
    """An ordered sequence of blocks; blocks[0] is genesis."""

    blocks: list[Block]

    model_config = ConfigDict(arbitrary_types_allowed=True, from_attributes=True)

    @property
    def height(self) -> int:
        return len(self.blocks)

    @property
    def genesis(self) -> Optional[Block]:
        return self.blocks[0] if self.blocks else None

    @property
    def tip_hash(self) -> Optional[str]:
        return self.blocks[-1].hash if self.blocks else None

    def transactions(self) -> list[Transaction]:
        """All transactions of all blocks, flattened in chain order."""
        return [t for block in self.blocks for t in block.transactions]

    def __len__(self) -> int:
        return len(self.blocks)

    def to_dict(self) -> dict[str, Any]:
        """Convert chain to dictionary representation (compat alias)."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Blockchain":
        """Create a Blockchain from dictionary representation (compat alias)."""
        return cls(**data)


def coerce(model: type[BaseModel], value: Any) -> Any:
    """
    Return value as an instance of model.

    Instances pass through untouched so callers keep their own references.
    Mappings and objects exposing the fields as attributes (dataclasses,
    namedtuples) are validated; anything else is malformed.

    Raises:
        MalformedInputError: If value cannot be read as model
    """
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except PydanticValidationError as e:
        raise MalformedInputError(
            f"Malformed {model.__name__}: {e.error_count()} field error(s)"
        ) from e
