"""
Purchase creation service.

Credit is debited at request time, so every check (availability, stock,
quota, balance) runs under row locks on the team and the resources involved.
"""

import secrets
from datetime import datetime
from typing import Iterable, List, Optional

import structlog
from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import Account
from apps.purchases.models import Purchase
from apps.resources.models import Resource
from apps.resources.services import ResourceNotFoundError

from .exceptions import (
    InvalidBatchError,
    InvalidQuantityError,
    ResourceUnavailableError,
    InsufficientStockError,
    QuotaExceededError,
    InsufficientCreditError,
)
from .notifications import notify_purchase_created, notify_batch_created
from .quota import committed_quantity

logger = structlog.get_logger(__name__)


def generate_batch_id(*, team_id: int, now: Optional[datetime] = None) -> str:
    """``YYYYMMDDHHMMSS-<team id>-<6 hex>``; the suffix keeps same-second batches apart."""
    now = now or timezone.now()
    return f"{now:%Y%m%d%H%M%S}-{team_id}-{secrets.token_hex(3)}"


def _lock_team(team: Account) -> Account:
    return Account.objects.select_for_update().get(id=team.id)


def _check_line(*, team: Account, resource: Resource, quantity: int) -> None:
    if not resource.is_active:
        raise ResourceUnavailableError("Resource is not available", resource=resource)

    if resource.quantity < quantity:
        raise InsufficientStockError("Insufficient quantity available", resource=resource)

    held = committed_quantity(team=team, resource=resource)
    if held + quantity > resource.max_per_team:
        raise QuotaExceededError(
            f"Resource {resource.name}: maximum quantity per team exceeded",
            resource=resource,
        )


def _debit(team: Account, amount: int) -> None:
    if amount > team.credit:
        raise InsufficientCreditError("Insufficient credit")

    team.credit -= amount
    team.save(update_fields=['credit', 'updated_at'])


@transaction.atomic
def create_purchase(
    *,
    team: Account,
    resource_id: int,
    quantity: int,
    comment: str = ''
) -> Purchase:
    """
    Create a single pending purchase and debit its cost.

    Args:
        team: Purchasing team
        resource_id: Resource to buy
        quantity: Units requested (>= 1)
        comment: Optional free text

    Returns:
        Created Purchase

    Raises:
        InvalidQuantityError: If quantity < 1
        ResourceNotFoundError: If the resource doesn't exist
        ResourceUnavailableError: If the resource is inactive
        InsufficientStockError: If stock is below quantity
        QuotaExceededError: If the team would exceed max_per_team
        InsufficientCreditError: If the team can't afford it
    """
    if quantity < 1:
        raise InvalidQuantityError("Quantity must be at least 1")

    team = _lock_team(team)

    try:
        resource = Resource.objects.select_for_update().get(id=resource_id)
    except Resource.DoesNotExist:
        raise ResourceNotFoundError("Resource not found")

    _check_line(team=team, resource=resource, quantity=quantity)
    _debit(team, resource.price_for(quantity))

    purchase = Purchase.objects.create(
        team=team,
        resource=resource,
        quantity=quantity,
        requested_quantity=quantity,
        comment=comment.strip(),
        needs_return=resource.is_returnable,
    )

    logger.info(
        'purchase_created',
        purchase_id=purchase.id,
        team_id=team.id,
        resource_id=resource.id,
        quantity=quantity,
        cost=purchase.total_cost,
    )
    notify_purchase_created(purchase)
    return purchase


def _merge_items(items: Iterable[dict]) -> dict:
    merged = {}
    for item in items:
        quantity = int(item['quantity'])
        if quantity < 1:
            raise InvalidQuantityError("Quantity must be at least 1")
        resource_id = int(item['resource_id'])
        merged[resource_id] = merged.get(resource_id, 0) + quantity
    return merged


def _clean_comment(comment: str) -> str:
    comment = (comment or '').strip()

    if len(comment) < settings.BATCH_COMMENT_MIN_LENGTH:
        raise InvalidBatchError(
            f"Comment must be at least {settings.BATCH_COMMENT_MIN_LENGTH} characters"
        )
    if len(comment) > settings.BATCH_COMMENT_MAX_LENGTH:
        raise InvalidBatchError("Comment is too long")

    return comment


@transaction.atomic
def create_batch_purchase(
    *,
    team: Account,
    items: List[dict],
    comment: str
) -> List[Purchase]:
    """
    Create one pending purchase per line under a shared batch id.

    All lines are validated before anything is written: either every line
    is created and the whole cost debited, or nothing changes. Lines naming
    the same resource are merged.

    Args:
        team: Purchasing team
        items: Dicts with resource_id and quantity
        comment: Justification shared by every line

    Returns:
        Created purchases, in request order

    Raises:
        InvalidBatchError: If items is empty or the comment length is off
        InvalidQuantityError: If a line has quantity < 1
        ResourceNotFoundError: If a line names an unknown resource
        ResourceUnavailableError: If a line names an inactive resource
        InsufficientStockError: If stock is below a line's quantity
        QuotaExceededError: If a line would exceed max_per_team
        InsufficientCreditError: If the team can't afford the total
    """
    if not items:
        raise InvalidBatchError("At least one item is required")

    comment = _clean_comment(comment)
    lines = _merge_items(items)

    team = _lock_team(team)
    resources = {
        resource.id: resource
        for resource in Resource.objects.select_for_update().filter(id__in=lines.keys()).order_by('id')
    }

    total_cost = 0
    for resource_id, quantity in lines.items():
        resource = resources.get(resource_id)
        if resource is None:
            raise ResourceNotFoundError(f"Resource {resource_id} not found")
        _check_line(team=team, resource=resource, quantity=quantity)
        total_cost += resource.price_for(quantity)

    _debit(team, total_cost)

    batch_id = generate_batch_id(team_id=team.id)
    now = timezone.now()
    purchases = [
        Purchase.objects.create(
            batch_id=batch_id,
            team=team,
            resource=resources[resource_id],
            quantity=quantity,
            requested_quantity=quantity,
            comment=comment,
            purchase_date=now,
            needs_return=resources[resource_id].is_returnable,
        )
        for resource_id, quantity in lines.items()
    ]

    logger.info(
        'batch_purchase_created',
        batch_id=batch_id,
        team_id=team.id,
        lines=len(purchases),
        cost=total_cost,
    )
    notify_batch_created(team, purchases)
    return purchases
