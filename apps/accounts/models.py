from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone


class AccountType(models.TextChoices):
    TEAM = 'team', 'Team'
    ADMIN = 'admin', 'Admin'


def default_team_credit():
    return settings.INITIAL_TEAM_CREDIT


class AccountManager(BaseUserManager):
    """Manager for name-based authentication of teams and administrators."""

    def create_user(self, name, email, password=None, **extra_fields):
        if not name:
            raise ValueError('Name is required')
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email).lower()
        account = self.model(name=name, email=email, **extra_fields)
        account.set_password(password)
        account.save(using=self._db)
        return account

    def create_team(self, name, email, password=None, **extra_fields):
        extra_fields['account_type'] = AccountType.TEAM
        extra_fields.setdefault('credit', default_team_credit())
        return self.create_user(name, email, password, **extra_fields)

    def create_admin(self, name, email, password=None, **extra_fields):
        extra_fields['account_type'] = AccountType.ADMIN
        extra_fields.setdefault('credit', 0)
        extra_fields.setdefault('is_staff', True)
        return self.create_user(name, email, password, **extra_fields)

    def create_superuser(self, name, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_admin(name, email, password, **extra_fields)

    def teams(self):
        return self.filter(account_type=AccountType.TEAM)

    def admins(self):
        return self.filter(account_type=AccountType.ADMIN)


class Account(AbstractBaseUser, PermissionsMixin):
    """
    A principal of the marketplace.

    Teams hold a credit balance and place purchases; admins review them.
    Both log in with their unique name.
    """

    name = models.CharField(max_length=150, unique=True)
    email = models.EmailField(unique=True, max_length=254)
    account_type = models.CharField(
        max_length=10,
        choices=AccountType.choices,
        default=AccountType.TEAM,
    )

    # Teams only; admins keep 0
    credit = models.PositiveIntegerField(default=default_team_credit)
    last_activity = models.DateTimeField(null=True, blank=True)

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = AccountManager()

    USERNAME_FIELD = 'name'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['email']

    class Meta:
        db_table = 'accounts'
        ordering = ['name']
        indexes = [
            models.Index(fields=['account_type', 'name'], name='accounts_account_8c1f2e_idx'),
        ]

    def __str__(self):
        return self.name

    @property
    def is_team(self):
        return self.account_type == AccountType.TEAM

    @property
    def is_administrator(self):
        return self.account_type == AccountType.ADMIN

    def touch_activity(self):
        """Record that the team just authenticated."""
        self.last_activity = timezone.now()
        self.save(update_fields=['last_activity', 'updated_at'])
