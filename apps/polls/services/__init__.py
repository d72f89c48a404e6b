"""
Polls app services layer.

Views call these functions; they never touch Vote or Poll rows directly.
"""

from .exceptions import (
    PollsServiceError,
    PollNotFoundError,
    VoteNotFoundError,
    PollClosedError,
    InvalidOptionError,
    DuplicateVoteError,
    InvalidStakeError,
)
from .poll_queries import (
    list_polls,
    get_poll,
    poll_results,
    team_votes,
    team_vote_for_poll,
)
from .voting import cast_vote

__all__ = [
    # Exceptions
    'PollsServiceError',
    'PollNotFoundError',
    'VoteNotFoundError',
    'PollClosedError',
    'InvalidOptionError',
    'DuplicateVoteError',
    'InvalidStakeError',
    # Queries
    'list_polls',
    'get_poll',
    'poll_results',
    'team_votes',
    'team_vote_for_poll',
    # Voting
    'cast_vote',
]
