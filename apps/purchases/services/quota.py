"""
Per-team quota arithmetic.

A team's holding of a resource is the sum of its pending and confirmed,
not-returned purchases. Cart contents count against the quota too, so the
amount a team may still add is bounded both by ``max_per_team`` and by the
stock left after its own cart.
"""

from django.db.models import Q, Sum
from django.db.models.functions import Coalesce

from apps.accounts.models import Account
from apps.cart.models import CartItem
from apps.purchases.models import Purchase, PurchaseStatus
from apps.resources.models import Resource


def committed_quantity(*, team: Account, resource: Resource) -> int:
    """Units of ``resource`` held or awaiting review for ``team``."""
    return (
        Purchase.objects
        .for_team(team)
        .committed()
        .filter(resource=resource)
        .aggregate(total=Coalesce(Sum('quantity'), 0))['total']
    )


def quantity_in_cart(*, team: Account, resource: Resource) -> int:
    quantity = (
        CartItem.objects
        .filter(team=team, resource=resource)
        .values_list('quantity', flat=True)
        .first()
    )
    return quantity or 0


def compute_max_quantity(
    *,
    max_per_team: int,
    stock: int,
    committed: int,
    in_cart: int,
    is_active: bool = True
) -> int:
    """
    Largest quantity that can still be added to the cart.

    Args:
        max_per_team: Resource quota per team
        stock: Units currently in stock
        committed: Units the team holds or awaits (pending + confirmed)
        in_cart: Units already in the team's cart
        is_active: Whether the resource is offered at all

    Returns:
        Non-negative integer
    """
    if not is_active:
        return 0

    remaining_by_quota = max_per_team - committed - in_cart
    remaining_by_stock = stock - in_cart
    return max(0, min(remaining_by_quota, remaining_by_stock))


def max_quantity_allowed(*, team: Account, resource: Resource) -> int:
    return compute_max_quantity(
        max_per_team=resource.max_per_team,
        stock=resource.quantity,
        committed=committed_quantity(team=team, resource=resource),
        in_cart=quantity_in_cart(team=team, resource=resource),
        is_active=resource.is_active,
    )


def validate_add_to_cart(*, team: Account, resource: Resource, quantity: int) -> dict:
    """
    Check whether ``quantity`` more units of ``resource`` fit in the cart.

    Checks run in order: resource active, quantity positive, stock covers the
    quantity, quota covers held + cart + quantity, stock left after the cart
    covers the quantity.

    Returns:
        Dict with ``success`` and, on failure, ``error`` and (where it can
        be computed) ``max_quantity_allowed``
    """
    if not resource.is_active:
        return {
            'success': False,
            'error': 'This resource is not available',
        }

    if quantity <= 0:
        return {
            'success': False,
            'error': 'Quantity must be greater than 0',
        }

    if resource.quantity < quantity:
        return {
            'success': False,
            'error': f'Only {resource.quantity} unit(s) available',
            'max_quantity_allowed': resource.quantity,
        }

    committed = committed_quantity(team=team, resource=resource)
    in_cart = quantity_in_cart(team=team, resource=resource)

    if committed + in_cart + quantity > resource.max_per_team:
        remaining = max(0, resource.max_per_team - committed - in_cart)
        return {
            'success': False,
            'error': (
                f'Maximum {resource.max_per_team} per team. You have {committed} '
                f'purchased or pending and {in_cart} in the cart. '
                f'Only {remaining} more allowed.'
            ),
            'max_quantity_allowed': remaining,
        }

    max_by_stock = resource.quantity - in_cart
    if quantity > max_by_stock:
        return {
            'success': False,
            'error': (
                f'Only {max_by_stock} more unit(s) can be added to the cart '
                f'({in_cart} already in the cart)'
            ),
            'max_quantity_allowed': max_by_stock,
        }

    return {'success': True}


def purchase_stats(*, team: Account, resource: Resource) -> dict:
    """
    Breakdown of a team's holding of one resource.

    Returns:
        Dict with purchased (confirmed), pending, in_cart and remaining_quota
    """
    totals = (
        Purchase.objects
        .for_team(team)
        .filter(resource=resource, is_returned=False)
        .aggregate(
            purchased=Coalesce(Sum('quantity', filter=Q(status=PurchaseStatus.CONFIRMED)), 0),
            pending=Coalesce(Sum('quantity', filter=Q(status=PurchaseStatus.PENDING)), 0),
        )
    )
    in_cart = quantity_in_cart(team=team, resource=resource)
    remaining = resource.max_per_team - totals['purchased'] - totals['pending'] - in_cart

    return {
        'purchased': totals['purchased'],
        'pending': totals['pending'],
        'in_cart': in_cart,
        'remaining_quota': max(0, remaining),
    }