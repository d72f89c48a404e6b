"""Domain-specific exceptions for the team cart."""


class CartServiceError(Exception):
    """Base exception for cart services."""
    pass


class CartValidationError(CartServiceError):
    """Raised when a quantity doesn't fit the quota or the stock."""

    def __init__(self, message, max_quantity_allowed=None):
        super().__init__(message)
        self.max_quantity_allowed = max_quantity_allowed


class CartItemNotFoundError(CartServiceError):
    """Raised when the resource isn't in the team's cart."""
    pass


class EmptyCartError(CartServiceError):
    """Raised when checking out an empty cart."""
    pass
