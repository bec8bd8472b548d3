"""Deposit domain exports"""

from .models import Deposit, DepositApproval, DepositStatus, PaymentMethod, ReviewAction
from .service import DepositWorkflow

__all__ = [
    "Deposit",
    "DepositApproval",
    "DepositStatus",
    "PaymentMethod",
    "ReviewAction",
    "DepositWorkflow",
]
