"""
Fixture builders and the tamper injector.

Test and demo code only; nothing under ledgerguard.core imports this package.
"""

from .factory import build_chain, sample_chain, seal_block, sign_transaction
from .tamper import TAMPERED_AMOUNT, break_chain, tampered_copy

__all__ = [
    "build_chain",
    "sample_chain",
    "seal_block",
    "sign_transaction",
    "TAMPERED_AMOUNT",
    "break_chain",
    "tampered_copy",
]
