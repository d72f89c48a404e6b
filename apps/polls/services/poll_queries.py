"""Read side of polls: listing, lookup and tallies."""

from typing import Optional

from django.db.models import QuerySet, Count, Sum

from apps.polls.models import Poll, Vote
from .exceptions import PollNotFoundError, VoteNotFoundError


def list_polls(*, status: Optional[str] = None) -> QuerySet:
    queryset = Poll.objects.order_by('-start_date', '-id')
    if status:
        queryset = queryset.filter(status=status)
    return queryset


def get_poll(*, poll_id: int) -> Poll:
    try:
        return Poll.objects.get(id=poll_id)
    except Poll.DoesNotExist:
        raise PollNotFoundError("Poll not found")


def poll_results(*, poll_id: int) -> dict:
    """
    Tally the votes of a poll per option.

    Options nobody voted for are left out.

    Returns:
        {'poll': Poll, 'results': {option: {'count': int, 'total_credits': int}}}
    """
    poll = get_poll(poll_id=poll_id)

    rows = (
        Vote.objects.filter(poll=poll)
        .values('chosen_option')
        .annotate(count=Count('id'), total_credits=Sum('credit_staked'))
        .order_by('chosen_option')
    )
    results = {
        row['chosen_option']: {
            'count': row['count'],
            'total_credits': row['total_credits'] or 0,
        }
        for row in rows
    }
    return {'poll': poll, 'results': results}


def team_votes(*, team) -> QuerySet:
    return Vote.objects.filter(team=team).select_related('poll')


def team_vote_for_poll(*, team, poll_id: int) -> Vote:
    try:
        return Vote.objects.select_related('poll').get(team=team, poll_id=poll_id)
    except Vote.DoesNotExist:
        raise VoteNotFoundError("Vote not found")
