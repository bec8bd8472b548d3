"""Shared abstractions used across domain modules."""

from .amounts import to_amount
from .exceptions import (
    AlreadyFinalizedError,
    DepositNotFoundError,
    InsufficientBalanceError,
    InvalidAmountError,
    LedgerError,
    MissingProofError,
    NotFoundError,
    OrderNotFoundError,
    StoreUnavailableError,
)

__all__ = [
    "to_amount",
    "LedgerError",
    "InvalidAmountError",
    "MissingProofError",
    "NotFoundError",
    "DepositNotFoundError",
    "OrderNotFoundError",
    "AlreadyFinalizedError",
    "InsufficientBalanceError",
    "StoreUnavailableError",
]
