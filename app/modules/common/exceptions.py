"""Ledger error kinds shared by every domain module.

Each error carries a stable ``code`` and the HTTP status the API layer renders
it with, so callers always receive a structured failure instead of a default.
"""


class LedgerError(Exception):
    """Base class for ledger domain errors."""

    code = "ledger_error"
    status_code = 400
    default_message = "Operation failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class InvalidAmountError(LedgerError):
    """Raised when an amount is below the minimum, non-positive or malformed."""

    code = "invalid_amount"
    default_message = "Invalid amount"


class MissingProofError(LedgerError):
    """Raised when a payment is submitted without its proof screenshot."""

    code = "missing_proof"
    default_message = "Payment proof image is required"


class NotFoundError(LedgerError):
    """Raised when a deposit, order, wallet or user cannot be found."""

    code = "not_found"
    status_code = 404
    default_message = "Not found"


class DepositNotFoundError(NotFoundError):
    default_message = "Deposit not found"


class OrderNotFoundError(NotFoundError):
    default_message = "Order not found"


class AlreadyFinalizedError(LedgerError):
    """Raised when a terminal record is asked to transition again."""

    code = "already_finalized"
    status_code = 409
    default_message = "Already finalized"


class InsufficientBalanceError(LedgerError):
    """Raised when a debit would take the wallet balance below zero."""

    code = "insufficient_balance"
    default_message = "Insufficient balance"


class StoreUnavailableError(LedgerError):
    """Raised when the persistence layer fails; safe for the caller to retry."""

    code = "store_unavailable"
    status_code = 503
    default_message = "Service temporarily unavailable, please retry"


__all__ = [
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
