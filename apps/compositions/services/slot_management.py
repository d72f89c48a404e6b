"""Seat bookkeeping for team compositions."""

import structlog
from django.db import transaction
from django.db.models import QuerySet

from apps.compositions.models import TeamComposition, Department, SlotAction

from .exceptions import CompositionNotFoundError, InvalidSlotError

logger = structlog.get_logger(__name__)


def list_compositions() -> QuerySet:
    return TeamComposition.objects.order_by('name')


@transaction.atomic
def toggle_slot(*, composition_id: int, department: str, action: str) -> TeamComposition:
    """
    Fill or free one seat in a department.

    The filled count is clamped to [0, total], so filling a full department
    or emptying an empty one is a no-op rather than an error.

    Args:
        composition_id: Team composition to change
        department: One of Department values
        action: 'fill' or 'empty'

    Returns:
        Updated TeamComposition

    Raises:
        InvalidSlotError: If department or action is unknown
        CompositionNotFoundError: If the composition doesn't exist
    """
    if department not in Department.values:
        raise InvalidSlotError(f"Unknown department: {department}")
    if action not in SlotAction.values:
        raise InvalidSlotError(f"Unknown action: {action}")

    try:
        composition = TeamComposition.objects.select_for_update().get(id=composition_id)
    except TeamComposition.DoesNotExist:
        raise CompositionNotFoundError("Team composition not found")

    filled = composition.toggle(department, action)
    composition.save(update_fields=[f'{department}_filled', 'updated_at'])

    logger.info(
        'slot_toggled',
        composition_id=composition.id,
        department=department,
        action=action,
        filled=filled,
    )
    return composition
