#!/usr/bin/env python3
"""
Example 01: Tamper Detection

Builds a valid three-block ledger, validates it, rewrites one amount in
history and validates again.
"""

from ledgerguard import ValidationEngine, configure_logging, generate_chain_report, load_settings
from ledgerguard.testing import break_chain, sample_chain


def main():
    print("=" * 50)
    print("Example 01: Tamper Detection")
    print("=" * 50)

    settings = load_settings()
    configure_logging(settings.log_level)
    engine = ValidationEngine.from_settings(settings)

    print("\n[1] Building Ledger...")
    chain = sample_chain(settings.encoding)
    print(f"  Blocks: {chain.height}")
    print(f"  Transactions: {len(chain.transactions())}")
    print(f"  Tip: {chain.tip_hash[:16]}...")

    print("\n[2] Validating Untouched Ledger...")
    result = engine.validate_chain(chain)
    print(f"  Valid: {result.is_valid}")
    print(f"  Layers passed: {', '.join(result.layers_passed)}")

    print("\n[3] Rewriting History...")
    break_chain(chain)
    print(f"  Block 1, transaction 0 amount is now {chain.blocks[1].transactions[0].amount}")

    print("\n[4] Validating Tampered Ledger...")
    result = engine.validate_chain(chain)
    print(f"  Valid: {result.is_valid}")
    error = result.first_error
    print(f"  Failed at: {error.layer} ({error.code.name})")
    print(f"  Position: block {error.block_index}, transaction {error.transaction_index}")

    print("\n[5] Report...")
    print(generate_chain_report(chain, result, settings.encoding).to_markdown())

    print("=" * 50)
    print("Example 01 Complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
