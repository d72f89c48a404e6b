"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class InvalidTokenError(AccountsServiceError):
    """Raised when a refresh token cannot be decoded or has expired."""
    pass


class InvalidEmailError(AccountsServiceError):
    """Raised when an email address is malformed."""
    pass


class EmailTakenError(AccountsServiceError):
    """Raised when an email address already belongs to another account."""
    pass
