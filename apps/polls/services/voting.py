"""Casting credit-staked votes."""

import structlog
from django.db import transaction, IntegrityError
from django.utils import timezone

from apps.accounts.models import Account
from apps.polls.models import Poll, Vote, PollStatus
from .exceptions import (
    PollNotFoundError,
    PollClosedError,
    InvalidOptionError,
    DuplicateVoteError,
    InvalidStakeError,
)

logger = structlog.get_logger(__name__)


@transaction.atomic
def cast_vote(*, team: Account, poll_id: int, chosen_option: str, credit_staked: int) -> Vote:
    """
    Vote on a poll, spending the staked credit.

    Checks run in this order:
    1. Poll exists
    2. Poll status is open
    3. Now is within [start_date, end_date]
    4. Option belongs to the poll
    5. Team has not voted yet
    6. 1 <= credit_staked <= team credit

    Args:
        team: Voting team
        poll_id: Poll to vote on
        chosen_option: One of poll.options
        credit_staked: Credit to spend on the vote

    Returns:
        Created Vote

    Raises:
        PollNotFoundError: If poll doesn't exist
        PollClosedError: If poll is closed or not currently running
        InvalidOptionError: If option is not offered by the poll
        DuplicateVoteError: If the team already voted
        InvalidStakeError: If the stake is below 1 or exceeds the balance
    """
    try:
        poll = Poll.objects.get(id=poll_id)
    except Poll.DoesNotExist:
        raise PollNotFoundError("Poll not found")

    if poll.status != PollStatus.OPEN:
        raise PollClosedError("Poll is closed")

    if not poll.is_running():
        raise PollClosedError("Poll is not currently active")

    if chosen_option not in poll.options:
        raise InvalidOptionError("Invalid option")

    if Vote.objects.filter(team=team, poll=poll).exists():
        raise DuplicateVoteError("Team has already voted on this poll")

    team = Account.objects.select_for_update().get(id=team.id)

    if credit_staked < 1:
        raise InvalidStakeError("Credit staked must be at least 1")
    if credit_staked > team.credit:
        raise InvalidStakeError("Insufficient credit")

    team.credit -= credit_staked
    team.save(update_fields=['credit', 'updated_at'])

    try:
        with transaction.atomic():
            vote = Vote.objects.create(
                team=team,
                poll=poll,
                chosen_option=chosen_option,
                credit_staked=credit_staked,
                vote_date=timezone.now(),
            )
    except IntegrityError:
        raise DuplicateVoteError("Team has already voted on this poll")

    logger.info(
        'vote_cast',
        team_id=team.id,
        poll_id=poll.id,
        option=chosen_option,
        credit_staked=credit_staked,
        credit_left=team.credit,
    )
    return vote
