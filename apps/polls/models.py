from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class PollStatus(models.TextChoices):
    OPEN = 'open', 'Open'
    CLOSED = 'closed', 'Closed'


class Poll(models.Model):
    """A question teams answer by staking credit on one of its options."""

    question = models.CharField(max_length=500)
    options = models.JSONField(default=list, help_text='List of option labels')
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    status = models.CharField(
        max_length=10,
        choices=PollStatus.choices,
        default=PollStatus.OPEN,
        db_index=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'polls'
        ordering = ['-start_date', '-id']

    def __str__(self):
        return self.question

    def is_running(self, now=None):
        now = now or timezone.now()
        return self.start_date <= now <= self.end_date


class Vote(models.Model):
    """One team's answer to a poll; the staked credit is spent."""

    team = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='votes',
    )
    poll = models.ForeignKey(
        Poll,
        on_delete=models.CASCADE,
        related_name='votes',
    )
    chosen_option = models.CharField(max_length=255)
    credit_staked = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    vote_date = models.DateTimeField(default=timezone.now)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'votes'
        ordering = ['-vote_date', '-id']
        constraints = [
            models.UniqueConstraint(fields=['team', 'poll'], name='unique_vote_per_team_poll'),
        ]

    def __str__(self):
        return f"{self.team} -> {self.chosen_option} ({self.credit_staked})"
