"""
Admin review of pending purchases.

Confirming takes stock; cancelling refunds the team. A partial approval
confirms fewer units than requested and refunds the difference.
"""

from typing import List, Optional

import structlog
from django.db import transaction

from apps.accounts.models import Account
from apps.purchases.models import Purchase, PurchaseStatus, ReviewAction
from apps.resources.models import Resource

from .exceptions import (
    PurchaseNotFoundError,
    PurchaseAlreadyProcessedError,
    InvalidApprovedQuantityError,
    InvalidReviewActionError,
    InsufficientStockError,
    PurchasesServiceError,
)
from .notifications import notify_purchase_reviewed, notify_batch_reviewed

logger = structlog.get_logger(__name__)


def _refund(team_id: int, amount: int) -> None:
    team = Account.objects.select_for_update().get(id=team_id)
    team.credit += amount
    team.save(update_fields=['credit', 'updated_at'])


def _apply_review(
    *,
    purchase_id: int,
    action: str,
    approved_quantity: Optional[int] = None
) -> Purchase:
    """Must run inside a transaction."""
    try:
        purchase = (
            Purchase.objects
            .select_for_update()
            .select_related('team', 'resource')
            .get(id=purchase_id)
        )
    except Purchase.DoesNotExist:
        raise PurchaseNotFoundError("Purchase not found")

    if purchase.status != PurchaseStatus.PENDING:
        raise PurchaseAlreadyProcessedError("Purchase already processed")

    if action == ReviewAction.CONFIRM:
        if approved_quantity is not None and approved_quantity != purchase.quantity:
            if approved_quantity < 1 or approved_quantity > purchase.requested_quantity:
                raise InvalidApprovedQuantityError("Invalid approved quantity")

            if approved_quantity < purchase.quantity:
                _refund(purchase.team_id, purchase.resource.price_for(purchase.quantity - approved_quantity))
            purchase.quantity = approved_quantity

        resource = Resource.objects.select_for_update().get(id=purchase.resource_id)
        if resource.quantity < purchase.quantity:
            raise InsufficientStockError("Insufficient stock", resource=resource)

        resource.quantity -= purchase.quantity
        resource.save(update_fields=['quantity', 'updated_at'])
        purchase.resource = resource
        purchase.status = PurchaseStatus.CONFIRMED

    elif action == ReviewAction.CANCEL:
        _refund(purchase.team_id, purchase.total_cost)
        purchase.status = PurchaseStatus.CANCELLED

    else:
        raise InvalidReviewActionError(f"Unknown action: {action}")

    purchase.save(update_fields=['quantity', 'status', 'updated_at'])
    logger.info(
        'purchase_reviewed',
        purchase_id=purchase.id,
        team_id=purchase.team_id,
        status=purchase.status,
        quantity=purchase.quantity,
        requested_quantity=purchase.requested_quantity,
    )
    return purchase


@transaction.atomic
def review_purchase(*, purchase_id: int, action: str) -> Purchase:
    """
    Confirm or cancel a single pending purchase.

    Args:
        purchase_id: Purchase to review
        action: 'confirm' or 'cancel'

    Returns:
        Updated Purchase

    Raises:
        PurchaseNotFoundError: If the purchase doesn't exist
        PurchaseAlreadyProcessedError: If it is no longer pending
        InsufficientStockError: If confirming and stock can't cover it
        InvalidReviewActionError: If action is unknown
    """
    purchase = _apply_review(purchase_id=purchase_id, action=action)
    notify_purchase_reviewed(purchase)
    return purchase


def review_batch(*, items: List[dict]) -> dict:
    """
    Review several purchases, each in its own transaction.

    A failing item doesn't stop the others. Afterwards every affected team
    receives one summary e-mail.

    Args:
        items: Dicts with purchase_id, action and optional approved_quantity

    Returns:
        Dict with message, total, success_count, failure_count and a
        per-item results list
    """
    results = []
    by_team = {}

    for item in items:
        purchase_id = item['purchase_id']
        approved_quantity = item.get('approved_quantity')

        try:
            with transaction.atomic():
                purchase = _apply_review(
                    purchase_id=purchase_id,
                    action=item['action'],
                    approved_quantity=approved_quantity,
                )
        except PurchasesServiceError as e:
            results.append({
                'purchase_id': purchase_id,
                'success': False,
                'error': str(e),
            })
            continue

        summary = by_team.setdefault(purchase.team_id, {
            'team': purchase.team,
            'confirmed': [],
            'adjusted': [],
            'cancelled': [],
        })
        if purchase.status == PurchaseStatus.CANCELLED:
            summary['cancelled'].append(purchase)
        elif approved_quantity is not None and purchase.is_adjusted:
            summary['adjusted'].append(purchase)
        else:
            summary['confirmed'].append(purchase)

        results.append({
            'purchase_id': purchase_id,
            'success': True,
            'status': purchase.status,
            'quantity': purchase.quantity,
        })

    for summary in by_team.values():
        notify_batch_reviewed(**summary)

    success_count = sum(1 for result in results if result['success'])
    logger.info(
        'batch_reviewed',
        total=len(results),
        success_count=success_count,
        failure_count=len(results) - success_count,
    )

    return {
        'message': 'Batch processed',
        'total': len(results),
        'success_count': success_count,
        'failure_count': len(results) - success_count,
        'results': results,
    }
