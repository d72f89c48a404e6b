"""Domain exceptions for polls app."""


class PollsServiceError(Exception):
    """Base exception for all polls service errors."""
    pass


class PollNotFoundError(PollsServiceError):
    """Poll does not exist."""
    pass


class VoteNotFoundError(PollsServiceError):
    """Team has not voted on this poll."""
    pass


class PollClosedError(PollsServiceError):
    """Poll is closed or outside its date range."""
    pass


class InvalidOptionError(PollsServiceError):
    """Chosen option is not one of the poll's options."""
    pass


class DuplicateVoteError(PollsServiceError):
    """Team already voted on this poll."""
    pass


class InvalidStakeError(PollsServiceError):
    """Staked credit is below 1 or above the team's balance."""
    pass
