"""
Management command to seed a marketplace for local development.

Usage:
    python manage.py seed_marketplace [--teams N] [--clear]

This creates:
- 1 administrator (admin / HackathonAdmin)
- N teams (TeamA / HackathonTeamA, TeamB / HackathonTeamB, ...)
- A catalog of services, equipment and perks
- One team composition per team
- One open poll
"""

from datetime import timedelta

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import Account
from apps.cart.models import CartItem
from apps.compositions.models import TeamComposition
from apps.polls.models import Poll, Vote, PollStatus
from apps.purchases.models import Purchase
from apps.resources.models import Resource, ResourceType

ADMIN_PASSWORD = 'HackathonAdmin'
TEAM_PASSWORD_PREFIX = 'HackathonTeam'

RESOURCES = [
    # name, type, cost, quantity, max_per_team, non-returnable
    ('Raspberry Pi 5', ResourceType.EQUIPMENT, 120, 20, 2, False),
    ('Arduino Uno', ResourceType.EQUIPMENT, 40, 30, 3, False),
    ('Sensor kit', ResourceType.EQUIPMENT, 60, 15, 1, False),
    ('Cloud VM (48h)', ResourceType.SERVICE, 150, 10, 1, True),
    ('Mentor session (30 min)', ResourceType.SERVICE, 80, 25, 2, True),
    ('Energy drinks pack', ResourceType.PERK, 15, 100, 5, True),
    ('Pizza voucher', ResourceType.PERK, 25, 60, 4, True),
]


class Command(BaseCommand):
    help = 'Seed the marketplace with an admin, teams, resources, compositions and a poll'

    def add_arguments(self, parser):
        parser.add_argument(
            '--teams',
            type=int,
            default=4,
            help='Number of teams to create (1-26)',
        )
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete existing marketplace data first',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        team_count = options['teams']
        if not 1 <= team_count <= 26:
            raise CommandError('--teams must be between 1 and 26')

        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Seeding marketplace...')
        self.create_admin()
        teams = self.create_teams(team_count)
        self.create_resources()
        self.create_compositions(teams)
        self.create_poll()

        self.stdout.write(self.style.SUCCESS('Marketplace seeded successfully!'))
        self.stdout.write('')
        self.stdout.write('Accounts:')
        self.stdout.write(f'  admin / {ADMIN_PASSWORD} (administrator)')
        for team in teams:
            self.stdout.write(f'  {team.name} / {TEAM_PASSWORD_PREFIX}{team.name[-1]}')

    def clear_data(self):
        Vote.objects.all().delete()
        Poll.objects.all().delete()
        CartItem.objects.all().delete()
        Purchase.objects.all().delete()
        Resource.objects.all().delete()
        TeamComposition.objects.all().delete()
        Account.objects.filter(is_superuser=False).delete()

    def create_admin(self):
        self.stdout.write('  Creating administrator...')
        admin = Account.objects.admins().filter(name='admin').first()
        if admin is None:
            admin = Account.objects.create_admin(
                name='admin',
                email='admin@example.com',
                password=ADMIN_PASSWORD,
            )
        return admin

    def create_teams(self, count):
        self.stdout.write(f'  Creating {count} teams...')
        teams = []
        for index in range(count):
            letter = chr(ord('A') + index)
            team = Account.objects.teams().filter(name=f'Team{letter}').first()
            if team is None:
                team = Account.objects.create_team(
                    name=f'Team{letter}',
                    email=f'team{letter.lower()}@example.com',
                    password=f'{TEAM_PASSWORD_PREFIX}{letter}',
                )
            teams.append(team)
        return teams

    def create_resources(self):
        self.stdout.write('  Creating resources...')
        for name, resource_type, cost, quantity, max_per_team, non_returnable in RESOURCES:
            Resource.objects.get_or_create(
                name=name,
                defaults={
                    'resource_type': resource_type,
                    'cost': cost,
                    'quantity': quantity,
                    'max_per_team': max_per_team,
                    'is_non_returnable': non_returnable,
                },
            )

    def create_compositions(self, teams):
        self.stdout.write('  Creating team compositions...')
        for team in teams:
            TeamComposition.objects.get_or_create(
                name=team.name,
                defaults={
                    'dev_total': 2,
                    'infra_total': 1,
                    'data_total': 1,
                    'iot_total': 1,
                    'sysemb_total': 1,
                },
            )

    def create_poll(self):
        self.stdout.write('  Creating poll...')
        now = timezone.now()
        Poll.objects.get_or_create(
            question='Which workshop should open day two?',
            defaults={
                'options': ['Embedded Rust', 'Edge AI', 'Kubernetes at the edge'],
                'start_date': now,
                'end_date': now + timedelta(days=2),
                'status': PollStatus.OPEN,
            },
        )
