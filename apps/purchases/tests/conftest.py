import pytest
from apps.purchases.models import Purchase, PurchaseStatus


@pytest.fixture
def make_purchase(db):
    """
    Build a purchase directly, bypassing debit and checks.

    Useful to put a team into a given state before exercising a service.
    """
    def _make(*, team, resource, quantity=1, status=PurchaseStatus.PENDING, batch_id=None, **extra):
        extra.setdefault('needs_return', resource.is_returnable)
        return Purchase.objects.create(
            team=team,
            resource=resource,
            quantity=quantity,
            requested_quantity=extra.pop('requested_quantity', quantity),
            status=status,
            batch_id=batch_id,
            **extra,
        )
    return _make


@pytest.fixture
def pending_purchase(make_purchase, team, resource):
    """Two units pending; 200 credit already debited from ``team``."""
    team.credit -= 200
    team.save(update_fields=['credit'])
    return make_purchase(team=team, resource=resource, quantity=2)


@pytest.fixture
def confirmed_purchase(make_purchase, team, resource):
    """Two units confirmed; stock already reduced to 8."""
    resource.quantity -= 2
    resource.save(update_fields=['quantity'])
    return make_purchase(team=team, resource=resource, quantity=2, status=PurchaseStatus.CONFIRMED)
