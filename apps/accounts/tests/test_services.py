"""
Service layer tests for accounts app.

Tests cover:
- Team and admin authentication
- Token issuing and validation
- Profile updates and email normalisation
"""

import pytest
from rest_framework_simplejwt.tokens import AccessToken

from apps.accounts.models import Account
from apps.accounts.services import (
    authenticate_team,
    authenticate_admin,
    issue_tokens,
    revoke_refresh_token,
    normalize_email_address,
    update_team_profile,
    list_teams,
)
from apps.accounts.services.exceptions import (
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidTokenError,
    InvalidEmailError,
    EmailTakenError,
)


@pytest.mark.django_db
class TestAuthenticateTeam:

    def test_login_by_name(self, team):
        result = authenticate_team(name='Team Alpha', password='AlphaPass123!')

        assert result.id == team.id
        team.refresh_from_db()
        assert team.last_activity is not None

    def test_login_by_email_is_case_insensitive(self, team):
        result = authenticate_team(name='ALPHA@example.com', password='AlphaPass123!')

        assert result.id == team.id

    def test_name_match_wins_over_email(self, other_team):
        lookalike = Account.objects.create_team(
            name='beta@example.com',
            email='lookalike@example.com',
            password='LookPass123!',
        )

        result = authenticate_team(name='beta@example.com', password='LookPass123!')

        assert result.id == lookalike.id

    def test_email_owner_cannot_use_name_holder_identifier(self, other_team):
        Account.objects.create_team(
            name='beta@example.com',
            email='lookalike@example.com',
            password='LookPass123!',
        )

        with pytest.raises(InvalidCredentialsError):
            authenticate_team(name='beta@example.com', password='BetaPass123!')

    def test_wrong_password(self, team):
        with pytest.raises(InvalidCredentialsError, match="Invalid credentials"):
            authenticate_team(name='Team Alpha', password='nope')

    def test_unknown_team(self, db):
        with pytest.raises(InvalidCredentialsError):
            authenticate_team(name='Nobody', password='whatever')

    def test_inactive_team(self, inactive_team):
        with pytest.raises(InactiveAccountError):
            authenticate_team(name='Team Dormant', password='DormantPass123!')

    def test_admin_cannot_login_as_team(self, admin_account):
        with pytest.raises(InvalidCredentialsError):
            authenticate_team(name='admin', password='AdminPass123!')


@pytest.mark.django_db
class TestAuthenticateAdmin:

    def test_login(self, admin_account):
        assert authenticate_admin(username='admin', password='AdminPass123!').id == admin_account.id

    def test_team_cannot_login_as_admin(self, team):
        with pytest.raises(InvalidCredentialsError):
            authenticate_admin(username='Team Alpha', password='AlphaPass123!')


@pytest.mark.django_db
class TestTokens:

    def test_tokens_carry_user_type(self, team, admin_account):
        team_access = AccessToken(issue_tokens(team)['access'])
        admin_access = AccessToken(issue_tokens(admin_account)['access'])

        assert team_access['user_type'] == 'team'
        assert admin_access['user_type'] == 'admin'

    def test_revoke_valid_refresh(self, team):
        revoke_refresh_token(issue_tokens(team)['refresh'])

    def test_revoke_garbage(self):
        with pytest.raises(InvalidTokenError):
            revoke_refresh_token('not-a-token')


class TestNormalizeEmail:

    def test_trims_and_lowercases(self):
        assert normalize_email_address('  Foo@Example.COM ') == 'foo@example.com'

    @pytest.mark.parametrize('email', ['', 'plain', 'a@b', '@example.com', 'a@@example.com', 'a@example.'])
    def test_rejects_malformed(self, email):
        with pytest.raises(InvalidEmailError):
            normalize_email_address(email)


@pytest.mark.django_db
class TestProfile:

    def test_update_email(self, team):
        updated = update_team_profile(team=team, email='New@Example.com')

        assert updated.email == 'new@example.com'
        assert Account.objects.get(id=team.id).email == 'new@example.com'

    def test_email_taken(self, team, other_team):
        with pytest.raises(EmailTakenError, match="Email already taken"):
            update_team_profile(team=team, email='beta@example.com')

    def test_keep_own_email(self, team):
        assert update_team_profile(team=team, email='alpha@example.com').email == 'alpha@example.com'

    def test_list_teams_excludes_admins(self, team, other_team, admin_account):
        assert [t.name for t in list_teams()] == ['Team Alpha', 'Team Beta']
