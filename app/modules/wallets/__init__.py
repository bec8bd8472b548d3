"""Wallet domain exports"""

from .models import BalanceCheck, Reconciliation, TransactionRecord, TransactionType, WalletSnapshot
from .service import WalletService

__all__ = [
    "BalanceCheck",
    "Reconciliation",
    "TransactionRecord",
    "TransactionType",
    "WalletSnapshot",
    "WalletService",
]
