"""Team profile and roster service."""

import structlog
from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import Account

from .exceptions import EmailTakenError, InvalidEmailError

logger = structlog.get_logger(__name__)

MAX_EMAIL_LENGTH = 254


def normalize_email_address(email: str) -> str:
    """
    Validate and normalise an email address.

    The address must contain exactly one ``@`` with a non-empty local part
    and a domain containing a dot.

    Returns:
        The trimmed, lower-cased address

    Raises:
        InvalidEmailError: If the address is malformed
    """
    email = (email or '').strip().lower()

    if not email:
        raise InvalidEmailError("Email is required")
    if len(email) > MAX_EMAIL_LENGTH:
        raise InvalidEmailError("Email is too long")

    parts = email.split('@')
    if len(parts) != 2:
        raise InvalidEmailError("Invalid email format")

    local, domain = parts
    if not local or '.' not in domain or domain.startswith('.') or domain.endswith('.'):
        raise InvalidEmailError("Invalid email format")

    return email


@transaction.atomic
def update_team_profile(*, team: Account, email: str) -> Account:
    """
    Change a team's contact email.

    Args:
        team: Team account being updated
        email: New email address

    Returns:
        Updated team Account

    Raises:
        InvalidEmailError: If the address is malformed
        EmailTakenError: If another account already uses the address
    """
    email = normalize_email_address(email)

    if Account.objects.filter(email=email).exclude(id=team.id).exists():
        raise EmailTakenError("Email already taken")

    team = Account.objects.select_for_update().get(id=team.id)
    team.email = email
    team.save(update_fields=['email', 'updated_at'])

    logger.info('team_profile_updated', team_id=team.id)
    return team


def list_teams() -> QuerySet:
    """All team accounts, ordered by name."""
    return Account.objects.teams().order_by('name')
