"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidTokenError,
    InvalidEmailError,
    EmailTakenError,
)
from .authentication import (
    authenticate_team,
    authenticate_admin,
    issue_tokens,
    revoke_refresh_token,
)
from .profile import (
    normalize_email_address,
    update_team_profile,
    list_teams,
)

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'InvalidTokenError',
    'InvalidEmailError',
    'EmailTakenError',
    # Authentication
    'authenticate_team',
    'authenticate_admin',
    'issue_tokens',
    'revoke_refresh_token',
    # Profile
    'normalize_email_address',
    'update_team_profile',
    'list_teams',
]
