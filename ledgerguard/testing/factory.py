"""
Builders for genuinely signed transactions and correctly sealed blocks.

These stand in for the external transaction builder and miner so tests
and demos have real ledgers to validate.
"""

from typing import Optional, Sequence

from ..core.crypto import KeyPair, generate_signing_keypair
from ..core.encoding import MessageEncoding, transaction_message
from ..core.ledger import Block, Blockchain, Transaction
from ..core.validation.proofs import compute_block_hash


def sign_transaction(
    signer: KeyPair,
    recipient: str,
    amount: int,
    encoding: MessageEncoding = MessageEncoding.CANONICAL,
) -> Transaction:
    """Create a transaction from signer to recipient, signed over the composed message."""
    source = signer.public_key_hex
    message = transaction_message(source, recipient, amount, encoding)
    return Transaction(
        source=source,
        recipient=recipient,
        amount=amount,
        signature=signer.sign(message),
    )


def seal_block(
    previous_hash: Optional[str],
    transactions: Sequence[Transaction] = (),
    nonce: int = 0,
    encoding: MessageEncoding = MessageEncoding.CANONICAL,
) -> Block:
    """Create a block whose stored hash matches its content."""
    block = Block(previous_hash=previous_hash, transactions=list(transactions), nonce=nonce, hash="")
    block.hash = compute_block_hash(block, encoding)
    return block


def build_chain(
    batches: Sequence[Sequence[Transaction]],
    encoding: MessageEncoding = MessageEncoding.CANONICAL,
) -> Blockchain:
    """
    Seal one block per batch and link them, the first batch going into genesis.

    Nonces are the block positions, which is enough to make empty blocks
    hash differently.
    """
    blocks: list[Block] = []
    previous_hash = None

    for i, batch in enumerate(batches):
        block = seal_block(previous_hash, batch, nonce=i, encoding=encoding)
        blocks.append(block)
        previous_hash = block.hash

    return Blockchain(blocks=blocks)


def sample_chain(encoding: MessageEncoding = MessageEncoding.CANONICAL) -> Blockchain:
    """
    A valid three-block chain between fresh identities.

    Genesis carries no transactions; block 1 carries two, block 2 one.
    """
    alice = generate_signing_keypair()
    bob = generate_signing_keypair()
    carol = generate_signing_keypair()

    return build_chain(
        [
            [],
            [
                sign_transaction(alice, bob.public_key_hex, 50, encoding),
                sign_transaction(bob, carol.public_key_hex, 20, encoding),
            ],
            [
                sign_transaction(carol, alice.public_key_hex, 5, encoding),
            ],
        ],
        encoding,
    )
