"""
Domain-specific exceptions for purchases app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class PurchasesServiceError(Exception):
    """Base exception for all purchases service errors."""
    pass


class PurchaseNotFoundError(PurchasesServiceError):
    """Raised when a purchase does not exist."""
    pass


class BatchNotFoundError(PurchasesServiceError):
    """Raised when no purchase carries the requested batch id."""
    pass


class InvalidQuantityError(PurchasesServiceError):
    """Raised when a requested quantity is not a positive integer."""
    pass


class InvalidBatchError(PurchasesServiceError):
    """Raised when a batch request is malformed (no items, bad comment)."""
    pass


class ResourceUnavailableError(PurchasesServiceError):
    """Raised when a purchase targets an inactive resource."""

    def __init__(self, message, resource=None):
        super().__init__(message)
        self.resource = resource


class InsufficientStockError(PurchasesServiceError):
    """Raised when stock cannot cover the requested or approved quantity."""

    def __init__(self, message, resource=None):
        super().__init__(message)
        self.resource = resource


class QuotaExceededError(PurchasesServiceError):
    """Raised when a team would exceed a resource's max_per_team."""

    def __init__(self, message, resource=None):
        super().__init__(message)
        self.resource = resource


class InsufficientCreditError(PurchasesServiceError):
    """Raised when a team's balance cannot cover the total cost."""
    pass


class PurchaseAlreadyProcessedError(PurchasesServiceError):
    """Raised when reviewing a purchase that is no longer pending."""
    pass


class InvalidApprovedQuantityError(PurchasesServiceError):
    """Raised when a partial approval is outside 1..requested_quantity."""
    pass


class NotPurchaseOwnerError(PurchasesServiceError):
    """Raised when a team acts on another team's purchase."""
    pass


class ReturnNotAllowedError(PurchasesServiceError):
    """Raised when a purchase cannot be (un)marked as returned."""
    pass


class InvalidReviewActionError(PurchasesServiceError):
    """Raised when a review action is neither confirm nor cancel."""
    pass
