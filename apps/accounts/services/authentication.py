"""Team and administrator authentication service."""

import structlog
from django.db import transaction
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import Account, AccountType

from .exceptions import InvalidCredentialsError, InactiveAccountError, InvalidTokenError

logger = structlog.get_logger(__name__)


def _check_password(account, password: str) -> Account:
    if not account.check_password(password):
        raise InvalidCredentialsError("Invalid credentials")

    if not account.is_active:
        raise InactiveAccountError("Account is deactivated")

    return account


@transaction.atomic
def authenticate_team(*, name: str, password: str) -> Account:
    """
    Authenticate a team by name, falling back to email, and password.

    Uses select_for_update() to serialize concurrent updates of last_activity.

    Args:
        name: Team name or team email
        password: Plain-text password

    Returns:
        Authenticated team Account

    Raises:
        InvalidCredentialsError: If the team is unknown or the password is wrong
        InactiveAccountError: If the account is deactivated
    """
    identifier = name.strip()
    teams = Account.objects.select_for_update().filter(account_type=AccountType.TEAM)
    # An exact name match wins over another team's email
    team = teams.filter(name=identifier).first()
    if team is None:
        team = teams.filter(email=identifier.lower()).first()
    if team is None:
        logger.info('team_login_failed', name=identifier, reason='unknown')
        raise InvalidCredentialsError("Invalid credentials")

    try:
        _check_password(team, password)
    except InvalidCredentialsError:
        logger.info('team_login_failed', team_id=team.id, reason='password')
        raise

    team.touch_activity()
    logger.info('team_login', team_id=team.id)
    return team


def authenticate_admin(*, username: str, password: str) -> Account:
    """
    Authenticate an administrator by username and password.

    Raises:
        InvalidCredentialsError: If the admin is unknown or the password is wrong
        InactiveAccountError: If the account is deactivated
    """
    try:
        admin = Account.objects.admins().get(name=username.strip())
    except Account.DoesNotExist:
        logger.info('admin_login_failed', username=username, reason='unknown')
        raise InvalidCredentialsError("Invalid credentials")

    _check_password(admin, password)
    logger.info('admin_login', admin_id=admin.id)
    return admin


def issue_tokens(account: Account) -> dict:
    """
    Issue a JWT refresh/access pair for an account.

    Both tokens carry a ``user_type`` claim so clients can route without
    another round trip.
    """
    refresh = RefreshToken.for_user(account)
    refresh['user_type'] = account.account_type
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


def revoke_refresh_token(token: str) -> None:
    """
    Validate a refresh token presented at logout.

    Tokens are stateless; there is no blacklist to write to.

    Raises:
        InvalidTokenError: If the token is malformed or expired
    """
    try:
        RefreshToken(token)
    except TokenError as e:
        raise InvalidTokenError("Invalid token") from e
