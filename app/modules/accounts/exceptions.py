"""Account domain specific exceptions."""

from app.modules.common.exceptions import NotFoundError


class AccountError(Exception):
    """Base class for account domain errors."""


class AccountAlreadyExistsError(AccountError):
    """Raised when attempting to create an account with duplicate username or email."""


class AccountNotFoundError(NotFoundError):
    """Raised when the requested account cannot be found."""

    default_message = "Account not found"
