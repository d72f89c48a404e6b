import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import Account
from apps.resources.models import Resource, ResourceType


def _authenticate(client, account):
    refresh = RefreshToken.for_user(account)
    refresh['user_type'] = account.account_type
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def team(db):
    """Create and return a team with the default 1000 credit."""
    return Account.objects.create_team(
        name='Team Alpha',
        email='alpha@example.com',
        password='AlphaPass123!',
        credit=1000,
    )


@pytest.fixture
def other_team(db):
    """Create and return a second team."""
    return Account.objects.create_team(
        name='Team Beta',
        email='beta@example.com',
        password='BetaPass123!',
        credit=1000,
    )


@pytest.fixture
def inactive_team(db):
    return Account.objects.create_team(
        name='Team Dormant',
        email='dormant@example.com',
        password='DormantPass123!',
        is_active=False,
    )


@pytest.fixture
def admin_account(db):
    """Create and return a marketplace administrator."""
    return Account.objects.create_admin(
        name='admin',
        email='admin@example.com',
        password='AdminPass123!',
    )


@pytest.fixture
def team_client(team):
    """Return an API client authenticated as ``team``."""
    return _authenticate(APIClient(), team)


@pytest.fixture
def other_team_client(other_team):
    return _authenticate(APIClient(), other_team)


@pytest.fixture
def admin_client(admin_account):
    """Return an API client authenticated as the administrator."""
    return _authenticate(APIClient(), admin_account)


@pytest.fixture
def resource(db):
    """Returnable equipment: cost 100, stock 10, max 3 per team."""
    return Resource.objects.create(
        name='Raspberry Pi',
        description='Single-board computer',
        cost=100,
        quantity=10,
        max_per_team=3,
        resource_type=ResourceType.EQUIPMENT,
    )


@pytest.fixture
def consumable(db):
    """Non-returnable perk: cost 20, stock 50, max 5 per team."""
    return Resource.objects.create(
        name='Pizza voucher',
        cost=20,
        quantity=50,
        max_per_team=5,
        resource_type=ResourceType.PERK,
        is_non_returnable=True,
    )


@pytest.fixture
def inactive_resource(db):
    return Resource.objects.create(
        name='Retired oscilloscope',
        cost=300,
        quantity=2,
        max_per_team=1,
        is_active=False,
    )
