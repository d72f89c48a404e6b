"""Domain-specific exceptions for team compositions."""


class CompositionsServiceError(Exception):
    """Base exception for compositions services."""
    pass


class CompositionNotFoundError(CompositionsServiceError):
    """Raised when a team composition does not exist."""
    pass


class InvalidSlotError(CompositionsServiceError):
    """Raised for an unknown department or slot action."""
    pass
