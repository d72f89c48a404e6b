"""
Cart app services layer.
"""

from .exceptions import (
    CartServiceError,
    CartValidationError,
    CartItemNotFoundError,
    EmptyCartError,
)
from .cart_management import (
    get_cart,
    add_item,
    update_quantity,
    remove_item,
    clear_cart,
    cart_total_cost,
    cart_items_count,
    checkout,
)

__all__ = [
    # Exceptions
    'CartServiceError',
    'CartValidationError',
    'CartItemNotFoundError',
    'EmptyCartError',
    # Cart management
    'get_cart',
    'add_item',
    'update_quantity',
    'remove_item',
    'clear_cart',
    'cart_total_cost',
    'cart_items_count',
    'checkout',
]
