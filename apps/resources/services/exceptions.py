"""Domain-specific exceptions for the resource catalog."""


class ResourcesServiceError(Exception):
    """Base exception for resources services."""
    pass


class ResourceNotFoundError(ResourcesServiceError):
    """Raised when a resource does not exist."""
    pass
