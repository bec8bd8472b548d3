"""SQLAlchemy-backed repository implementations."""

from .account_repository import SqlAccountRepository
from .deposit_repository import SqlDepositRepository
from .order_repository import SqlOrderRepository
from .setting_repository import SqlSettingRepository
from .wallet_repository import SqlWalletRepository

__all__ = [
    "SqlAccountRepository",
    "SqlDepositRepository",
    "SqlOrderRepository",
    "SqlSettingRepository",
    "SqlWalletRepository",
]
