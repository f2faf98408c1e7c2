"""
Validation Report Generation.

Generates audit reports for chain validation, useful for debugging
and for explaining why a ledger was rejected.
"""

import json
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field, ConfigDict

from ..ledger import Blockchain
from .engine import ValidationResult

VALIDATOR_VERSION = "1.0.0"


class ValidationReport(BaseModel):
    """Audit report for one chain validation run."""

    # Identification
    report_id: str = ""
    generated_at: str = ""
    validator_version: str = VALIDATOR_VERSION

    # Subject
    chain_height: int = 0
    transaction_count: int = 0
    genesis_hash: Optional[str] = None
    tip_hash: Optional[str] = None

    # Results
    is_valid: bool = False
    encoding: str = ""
    duration_ms: float = 0.0
    layers_passed: list[str] = Field(default_factory=list)
    layers_failed: list[str] = Field(default_factory=list)
    errors: list[dict[str, Any]] = Field(default_factory=list)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert report to dictionary."""
        return {
            "report_id": self.report_id,
            "generated_at": self.generated_at,
            "validator_version": self.validator_version,
            "subject": {
                "chain_height": self.chain_height,
                "transaction_count": self.transaction_count,
                "genesis_hash": self.genesis_hash,
                "tip_hash": self.tip_hash,
            },
            "result": {
                "is_valid": self.is_valid,
                "encoding": self.encoding,
                "duration_ms": self.duration_ms,
                "layers_passed": self.layers_passed,
                "layers_failed": self.layers_failed,
            },
            "errors": self.errors,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert report to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def to_markdown(self) -> str:
        """Generate markdown-formatted report."""
        def short(value: Optional[str]) -> str:
            return f"`{value[:16]}...`" if value else "-"

        lines = [
            "# Chain Validation Report",
            "",
            f"**Report ID**: `{self.report_id}`",
            f"**Generated**: {self.generated_at}",
            f"**Validator Version**: {self.validator_version}",
            "",
            "## Subject Chain",
            "",
            "| Property | Value |",
            "|----------|-------|",
            f"| **Blocks** | {self.chain_height} |",
            f"| **Transactions** | {self.transaction_count} |",
            f"| **Genesis** | {short(self.genesis_hash)} |",
            f"| **Tip** | {short(self.tip_hash)} |",
            "",
            "## Validation Result",
            "",
            "| Property | Value |",
            "|----------|-------|",
            f"| **Valid** | {'Yes' if self.is_valid else 'No'} |",
            f"| **Encoding** | {self.encoding} |",
            f"| **Duration** | {self.duration_ms:.2f}ms |",
            "",
            "## Layer Results",
            "",
            "| Layer | Status |",
            "|-------|--------|",
        ]
        lines.extend(f"| {layer} | passed |" for layer in self.layers_passed)
        lines.extend(f"| {layer} | failed |" for layer in self.layers_failed)
        lines.append("")

        if self.errors:
            lines.extend(["## Errors", ""])
            for err in self.errors:
                where = []
                if err.get("block_index") is not None:
                    where.append(f"block {err['block_index']}")
                if err.get("transaction_index") is not None:
                    where.append(f"transaction {err['transaction_index']}")
                position = f" ({', '.join(where)})" if where else ""
                lines.append(f"- **{err.get('code_name')}**{position}: {err.get('message')}")
            lines.append("")

        return "\n".join(lines)


def generate_chain_report(
    blockchain: Blockchain,
    validation_result: ValidationResult,
    encoding: str = "",
) -> ValidationReport:
    """
    Generate an audit report for a validated chain.

    Args:
        blockchain: The validated chain
        validation_result: ValidationResult from the engine
        encoding: Encoding the chain was validated with

    Returns:
        ValidationReport with full details
    """
    genesis = blockchain.genesis

    return ValidationReport(
        report_id=str(uuid.uuid4()),
        generated_at=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        chain_height=blockchain.height,
        transaction_count=len(blockchain.transactions()),
        genesis_hash=genesis.hash if genesis else None,
        tip_hash=blockchain.tip_hash,
        is_valid=validation_result.is_valid,
        encoding=str(getattr(encoding, "value", encoding)),
        duration_ms=validation_result.duration_ms,
        layers_passed=list(validation_result.layers_passed),
        layers_failed=list(validation_result.layers_failed),
        errors=[e.to_dict() for e in validation_result.errors],
    )
