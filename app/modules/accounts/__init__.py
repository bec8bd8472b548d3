"""Account domain exports"""

from .exceptions import AccountAlreadyExistsError, AccountError, AccountNotFoundError
from .models import STAFF_ROLES, Account, AccountCreateInput, AccountRole
from .service import AccountService

__all__ = [
    "Account",
    "AccountCreateInput",
    "AccountRole",
    "STAFF_ROLES",
    "AccountError",
    "AccountAlreadyExistsError",
    "AccountNotFoundError",
    "AccountService",
]
