"""
Physical return reconciliation.

Returning an item gives its units back to stock; it never refunds credit.
"""

import structlog
from django.db import transaction

from apps.accounts.models import Account
from apps.purchases.models import Purchase, PurchaseStatus
from apps.resources.models import Resource

from .exceptions import (
    PurchaseNotFoundError,
    NotPurchaseOwnerError,
    ReturnNotAllowedError,
    InsufficientStockError,
)
from .notifications import notify_purchase_returned

logger = structlog.get_logger(__name__)


def _lock_purchase(purchase_id: int) -> Purchase:
    try:
        return (
            Purchase.objects
            .select_for_update()
            .select_related('team', 'resource')
            .get(id=purchase_id)
        )
    except Purchase.DoesNotExist:
        raise PurchaseNotFoundError("Purchase not found")


def _adjust_stock(resource_id: int, delta: int) -> Resource:
    resource = Resource.objects.select_for_update().get(id=resource_id)
    if resource.quantity + delta < 0:
        raise InsufficientStockError("Insufficient stock", resource=resource)

    resource.quantity += delta
    resource.save(update_fields=['quantity', 'updated_at'])
    return resource


@transaction.atomic
def return_purchase(*, team: Account, purchase_id: int) -> Purchase:
    """
    A team hands back a confirmed, returnable item.

    Raises:
        PurchaseNotFoundError: If the purchase doesn't exist
        NotPurchaseOwnerError: If the purchase belongs to another team
        ReturnNotAllowedError: If already returned, not confirmed, or the
            resource is non-returnable
    """
    purchase = _lock_purchase(purchase_id)

    if purchase.team_id != team.id:
        raise NotPurchaseOwnerError("Not authorized")

    if purchase.is_returned:
        raise ReturnNotAllowedError("Purchase already returned")

    if purchase.status != PurchaseStatus.CONFIRMED:
        raise ReturnNotAllowedError("Can only return confirmed purchases")

    if purchase.resource.is_non_returnable:
        raise ReturnNotAllowedError("This resource is non-returnable")

    purchase.is_returned = True
    purchase.save(update_fields=['is_returned', 'updated_at'])
    purchase.resource = _adjust_stock(purchase.resource_id, purchase.quantity)

    logger.info('purchase_returned', purchase_id=purchase.id, team_id=team.id, by='team')
    return purchase


@transaction.atomic
def mark_returned(*, purchase_id: int) -> Purchase:
    """
    Admin records that a confirmed purchase was physically handed back.

    Raises:
        PurchaseNotFoundError: If the purchase doesn't exist
        ReturnNotAllowedError: If not confirmed or already returned
    """
    purchase = _lock_purchase(purchase_id)

    if purchase.status != PurchaseStatus.CONFIRMED:
        raise ReturnNotAllowedError("Only confirmed purchases can be marked as returned")

    if purchase.is_returned:
        raise ReturnNotAllowedError("Purchase already marked as returned")

    purchase.is_returned = True
    purchase.save(update_fields=['is_returned', 'updated_at'])
    purchase.resource = _adjust_stock(purchase.resource_id, purchase.quantity)

    logger.info('purchase_returned', purchase_id=purchase.id, team_id=purchase.team_id, by='admin')
    notify_purchase_returned(purchase)
    return purchase


@transaction.atomic
def unmark_returned(*, purchase_id: int) -> Purchase:
    """
    Admin reverts a return recorded by mistake; the units leave stock again.

    Raises:
        PurchaseNotFoundError: If the purchase doesn't exist
        ReturnNotAllowedError: If the purchase isn't marked as returned
        InsufficientStockError: If the units are no longer in stock
    """
    purchase = _lock_purchase(purchase_id)

    if not purchase.is_returned:
        raise ReturnNotAllowedError("Purchase is not marked as returned")

    purchase.resource = _adjust_stock(purchase.resource_id, -purchase.quantity)
    purchase.is_returned = False
    purchase.save(update_fields=['is_returned', 'updated_at'])

    logger.info('purchase_return_reverted', purchase_id=purchase.id, team_id=purchase.team_id)
    return purchase
