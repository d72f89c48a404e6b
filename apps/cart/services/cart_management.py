"""
Cart management service.

The cart stages lines for a future batch purchase. Additions are checked
against the team's remaining quota and the resource's stock; checkout hands
the lines to the batch purchase service, which checks everything again.
"""

from typing import List, Optional

import structlog
from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import Account
from apps.cart.models import CartItem
from apps.purchases.models import Purchase
from apps.purchases.services import create_batch_purchase, validate_add_to_cart
from apps.resources.services import get_resource

from .exceptions import CartValidationError, CartItemNotFoundError, EmptyCartError

logger = structlog.get_logger(__name__)


def get_cart(*, team: Account) -> QuerySet:
    """The team's cart lines in the order they were added."""
    return CartItem.objects.filter(team=team).select_related('resource')


def _lock_team(team: Account) -> Account:
    return Account.objects.select_for_update().get(id=team.id)


def _ensure_fits(*, team: Account, resource, quantity: int) -> None:
    result = validate_add_to_cart(team=team, resource=resource, quantity=quantity)
    if not result['success']:
        raise CartValidationError(
            result['error'],
            max_quantity_allowed=result.get('max_quantity_allowed'),
        )


def _get_line(*, team: Account, resource_id: int) -> CartItem:
    try:
        return (
            CartItem.objects
            .select_for_update()
            .select_related('resource')
            .get(team=team, resource_id=resource_id)
        )
    except CartItem.DoesNotExist:
        raise CartItemNotFoundError("Item not in cart")


@transaction.atomic
def add_item(*, team: Account, resource_id: int, quantity: int) -> CartItem:
    """
    Add units of a resource to the cart, merging with an existing line.

    Raises:
        ResourceNotFoundError: If the resource doesn't exist
        CartValidationError: If the units don't fit quota or stock
    """
    resource = get_resource(resource_id=resource_id)
    # Concurrent adds for one team queue here until the quota check and merge commit
    _lock_team(team)
    _ensure_fits(team=team, resource=resource, quantity=quantity)

    item = CartItem.objects.select_for_update().filter(team=team, resource=resource).first()
    if item is None:
        item = CartItem.objects.create(team=team, resource=resource, quantity=quantity)
    else:
        item.quantity += quantity
        item.save(update_fields=['quantity', 'updated_at'])

    logger.info('cart_item_added', team_id=team.id, resource_id=resource.id, quantity=item.quantity)
    return item


@transaction.atomic
def update_quantity(*, team: Account, resource_id: int, quantity: int) -> Optional[CartItem]:
    """
    Set a cart line's quantity; zero or less removes the line.

    Only an increase is validated, and only for the added units.

    Returns:
        The updated CartItem, or None when the line was removed

    Raises:
        CartItemNotFoundError: If the resource isn't in the cart
        CartValidationError: If the increase doesn't fit quota or stock
    """
    _lock_team(team)
    item = _get_line(team=team, resource_id=resource_id)

    if quantity <= 0:
        item.delete()
        logger.info('cart_item_removed', team_id=team.id, resource_id=resource_id)
        return None

    increase = quantity - item.quantity
    if increase > 0:
        _ensure_fits(team=team, resource=item.resource, quantity=increase)

    item.quantity = quantity
    item.save(update_fields=['quantity', 'updated_at'])
    return item


def remove_item(*, team: Account, resource_id: int) -> None:
    """
    Raises:
        CartItemNotFoundError: If the resource isn't in the cart
    """
    deleted, _ = CartItem.objects.filter(team=team, resource_id=resource_id).delete()
    if not deleted:
        raise CartItemNotFoundError("Item not in cart")
    logger.info('cart_item_removed', team_id=team.id, resource_id=resource_id)


def clear_cart(*, team: Account) -> int:
    """Empty the cart; returns the number of lines removed."""
    deleted, _ = CartItem.objects.filter(team=team).delete()
    return deleted


def cart_total_cost(*, team: Account) -> int:
    return sum(item.line_cost for item in get_cart(team=team))


def cart_items_count(*, team: Account) -> int:
    return sum(item.quantity for item in get_cart(team=team))


@transaction.atomic
def checkout(*, team: Account, comment: str) -> List[Purchase]:
    """
    Submit the whole cart as one batch purchase and empty it.

    The cart is left untouched when the purchase is refused.

    Raises:
        EmptyCartError: If the cart has no lines
        PurchasesServiceError: Anything create_batch_purchase raises
        ResourceNotFoundError: If a resource vanished since it was added
    """
    items = [
        {'resource_id': item.resource_id, 'quantity': item.quantity}
        for item in get_cart(team=team)
    ]
    if not items:
        raise EmptyCartError("Cart is empty")

    purchases = create_batch_purchase(team=team, items=items, comment=comment)
    clear_cart(team=team)

    logger.info('cart_checked_out', team_id=team.id, batch_id=purchases[0].batch_id)
    return purchases
