"""
Read-side helpers: purchase listings, batch grouping and summaries.
"""

from typing import Iterable, List, Optional, Tuple

from django.db.models import QuerySet

from apps.accounts.models import Account
from apps.purchases.models import Purchase, PurchaseStatus

from .exceptions import PurchaseNotFoundError, BatchNotFoundError

MIXED_STATUS = 'mixed'


def _base_queryset() -> QuerySet:
    return Purchase.objects.select_related('team', 'resource')


def list_team_purchases(*, team: Account, needs_return: bool = False) -> QuerySet:
    """
    A team's own purchases, newest first.

    Args:
        team: Owning team
        needs_return: Only confirmed items still to be handed back
    """
    queryset = _base_queryset().for_team(team)
    if needs_return:
        queryset = queryset.awaiting_return()
    return queryset


def list_purchases(
    *,
    status: Optional[str] = None,
    team_id: Optional[int] = None,
    needs_return: bool = False
) -> QuerySet:
    """All purchases for admins, with optional filters."""
    queryset = _base_queryset()
    if status:
        queryset = queryset.filter(status=status)
    if team_id:
        queryset = queryset.filter(team_id=team_id)
    if needs_return:
        queryset = queryset.awaiting_return()
    return queryset


def get_purchase(*, purchase_id: int) -> Purchase:
    """
    Raises:
        PurchaseNotFoundError: If the purchase doesn't exist
    """
    try:
        return _base_queryset().get(id=purchase_id)
    except Purchase.DoesNotExist:
        raise PurchaseNotFoundError("Purchase not found")


def _batch_entry(batch_id: str, purchases: List[Purchase]) -> dict:
    statuses = {purchase.status for purchase in purchases}
    first = purchases[0]
    return {
        'batch_id': batch_id,
        'purchases': purchases,
        'total_items': sum(purchase.quantity for purchase in purchases),
        'total_cost': sum(purchase.total_cost for purchase in purchases),
        'status': statuses.pop() if len(statuses) == 1 else MIXED_STATUS,
        'comment': first.comment,
        'team': first.team,
        'date': first.purchase_date,
        'has_pending_returns': any(
            purchase.needs_return
            and not purchase.is_returned
            and purchase.status == PurchaseStatus.CONFIRMED
            for purchase in purchases
        ),
    }


def group_into_batches(purchases: Iterable[Purchase]) -> Tuple[List[dict], List[Purchase]]:
    """
    Split purchases into batch entries and stand-alone purchases.

    Batches keep the order in which their first purchase appears.

    Returns:
        (batches, singles)
    """
    grouped = {}
    singles = []
    for purchase in purchases:
        if purchase.batch_id:
            grouped.setdefault(purchase.batch_id, []).append(purchase)
        else:
            singles.append(purchase)

    batches = [_batch_entry(batch_id, members) for batch_id, members in grouped.items()]
    return batches, singles


def get_batch(*, batch_id: str) -> dict:
    """
    Raises:
        BatchNotFoundError: If no purchase carries this batch id
    """
    purchases = list(_base_queryset().filter(batch_id=batch_id).order_by('id'))
    if not purchases:
        raise BatchNotFoundError("Batch not found")
    return _batch_entry(batch_id, purchases)


def purchase_summary(purchases: Iterable[Purchase]) -> dict:
    """Counts by status, open returns and credits spent on confirmed lines."""
    summary = {
        'total': 0,
        'pending': 0,
        'confirmed': 0,
        'cancelled': 0,
        'needs_return': 0,
        'credits_spent': 0,
    }
    for purchase in purchases:
        summary['total'] += 1
        summary[purchase.status] += 1
        if purchase.status == PurchaseStatus.CONFIRMED:
            summary['credits_spent'] += purchase.total_cost
            if purchase.needs_return and not purchase.is_returned:
                summary['needs_return'] += 1
    return summary
