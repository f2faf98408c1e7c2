"""
Tests for validation layers.

These tests cover:
- TransactionValidator
- BlockValidator
- GenesisValidator
- LinkageValidator
"""

import pytest

from ledgerguard.core.crypto import generate_signing_keypair, verify
from ledgerguard.core.encoding import MessageEncoding
from ledgerguard.core.ledger import Blockchain, Transaction, VerifierError
from ledgerguard.core.validation.layers import (
    BlockValidator,
    GenesisValidator,
    LinkageValidator,
    TransactionValidator,
)
from ledgerguard.testing import sample_chain, seal_block, sign_transaction

CONTEXT = {"signature_verifier": verify, "encoding": MessageEncoding.CANONICAL}


@pytest.fixture
def alice():
    return generate_signing_keypair()


@pytest.fixture
def bob():
    return generate_signing_keypair()


class TestTransactionValidator:
    """Tests for the transaction layer."""

    def test_valid_transaction(self, alice, bob):
        tx = sign_transaction(alice, bob.public_key_hex, 10)

        assert TransactionValidator().validate(tx, CONTEXT) == []

    def test_zero_amount_is_valid(self, alice, bob):
        tx = sign_transaction(alice, bob.public_key_hex, 0)

        assert TransactionValidator().validate(tx, CONTEXT) == []

    def test_negative_amount_skips_verifier(self):
        def exploding_verifier(public_key, message, signature):
            raise AssertionError("verifier must not be called")

        tx = Transaction(source="a", recipient="b", amount=-5, signature="s")
        errors = TransactionValidator().validate(tx, {"signature_verifier": exploding_verifier})

        assert [e["code"] for e in errors] == ["NEGATIVE_AMOUNT"]
        assert errors[0]["details"]["amount"] == -5

    def test_negative_amount_with_genuine_signature(self, alice, bob):
        tx = sign_transaction(alice, bob.public_key_hex, -10)

        errors = TransactionValidator().validate(tx, CONTEXT)

        assert [e["code"] for e in errors] == ["NEGATIVE_AMOUNT"]

    def test_altered_recipient(self, alice, bob):
        tx = sign_transaction(alice, bob.public_key_hex, 10)
        tx.recipient = alice.public_key_hex

        errors = TransactionValidator().validate(tx, CONTEXT)

        assert [e["code"] for e in errors] == ["SIGNATURE_INVALID"]

    def test_defaults_to_ed25519_canonical(self, alice, bob):
        tx = sign_transaction(alice, bob.public_key_hex, 10)

        assert TransactionValidator().validate(tx, {}) == []

    def test_verifier_failure_raises(self):
        tx = Transaction(source="xyz", recipient="b", amount=1, signature="00")

        with pytest.raises(VerifierError):
            TransactionValidator().validate(tx, CONTEXT)

    def test_validator_name(self):
        assert TransactionValidator().name == "transaction"


class TestBlockValidator:
    """Tests for the block layer."""

    def test_valid_block(self, alice, bob):
        block = seal_block("prev", [sign_transaction(alice, bob.public_key_hex, 1)])

        assert BlockValidator().validate(block, CONTEXT) == []

    def test_empty_block_is_valid(self):
        block = seal_block("prev", [])

        assert BlockValidator().validate(block, CONTEXT) == []

    def test_hash_mismatch_short_circuits(self):
        """A bad hash is reported without consulting the verifier."""
        def exploding_verifier(public_key, message, signature):
            raise AssertionError("verifier must not be called")

        tx = Transaction(source="a", recipient="b", amount=1, signature="s")
        block = seal_block("prev", [tx])
        block.hash = "0" * 128

        errors = BlockValidator().validate(block, {"signature_verifier": exploding_verifier})

        assert [e["code"] for e in errors] == ["HASH_MISMATCH"]
        assert errors[0]["details"]["stored"] == "0" * 128

    def test_hash_mismatch_with_valid_transactions(self, alice, bob):
        block = seal_block("prev", [sign_transaction(alice, bob.public_key_hex, 1)])
        block.previous_hash = "other"

        errors = BlockValidator().validate(block, CONTEXT)

        assert [e["code"] for e in errors] == ["HASH_MISMATCH"]

    def test_reports_transaction_position(self, alice, bob):
        good = sign_transaction(alice, bob.public_key_hex, 1)
        bad = sign_transaction(alice, bob.public_key_hex, 2)
        bad.amount = 3
        block = seal_block("prev", [good, bad])

        errors = BlockValidator().validate(block, CONTEXT)

        assert len(errors) == 1
        assert errors[0]["code"] == "SIGNATURE_INVALID"
        assert errors[0]["transaction_index"] == 1


class TestGenesisValidator:
    """Tests for the genesis layer."""

    def test_valid_genesis(self):
        chain = Blockchain(blocks=[seal_block(None)])

        assert GenesisValidator().validate(chain, CONTEXT) == []

    def test_empty_chain(self):
        errors = GenesisValidator().validate(Blockchain(blocks=[]), CONTEXT)

        assert [e["code"] for e in errors] == ["EMPTY_CHAIN"]

    def test_genesis_with_previous_hash(self):
        chain = Blockchain(blocks=[seal_block("0" * 128)])

        errors = GenesisValidator().validate(chain, CONTEXT)

        assert [e["code"] for e in errors] == ["GENESIS_INVALID"]
        assert errors[0]["block_index"] == 0


class TestLinkageValidator:
    """Tests for the linkage layer."""

    def test_linked_chain(self):
        assert LinkageValidator().validate(sample_chain(), CONTEXT) == []

    def test_single_block(self):
        chain = Blockchain(blocks=[seal_block(None)])

        assert LinkageValidator().validate(chain, CONTEXT) == []

    def test_broken_link(self):
        chain = sample_chain()
        chain.blocks[2].previous_hash = "f" * 128

        errors = LinkageValidator().validate(chain, CONTEXT)

        assert [e["code"] for e in errors] == ["CHAIN_LINK_BROKEN"]
        assert errors[0]["block_index"] == 2
        assert errors[0]["details"]["expected"] == chain.blocks[1].hash

    def test_null_previous_hash_after_genesis(self):
        chain = Blockchain(blocks=[seal_block(None), seal_block(None, nonce=1)])

        errors = LinkageValidator().validate(chain, CONTEXT)

        assert [e["block_index"] for e in errors] == [1]

    def test_every_break_reported(self):
        chain = sample_chain()
        chain.blocks[1].previous_hash = "a"
        chain.blocks[2].previous_hash = "b"

        errors = LinkageValidator().validate(chain, CONTEXT)

        assert [e["block_index"] for e in errors] == [1, 2]
