import pytest

from apps.accounts.models import Account
from apps.cart.models import CartItem
from apps.cart.services import (
    get_cart,
    add_item,
    update_quantity,
    remove_item,
    clear_cart,
    cart_total_cost,
    cart_items_count,
    checkout,
)
from apps.cart.services import cart_management
from apps.cart.services.exceptions import CartValidationError, CartItemNotFoundError, EmptyCartError
from apps.purchases.models import Purchase
from apps.purchases.services import InsufficientCreditError
from apps.resources.services import ResourceNotFoundError


@pytest.mark.django_db
class TestCartLines:

    def test_add_merges_with_existing_line(self, team, resource):
        add_item(team=team, resource_id=resource.id, quantity=1)
        item = add_item(team=team, resource_id=resource.id, quantity=2)

        assert item.quantity == 3
        assert CartItem.objects.filter(team=team).count() == 1

    def test_add_over_quota(self, team, resource):
        add_item(team=team, resource_id=resource.id, quantity=2)

        with pytest.raises(CartValidationError) as exc_info:
            add_item(team=team, resource_id=resource.id, quantity=2)

        assert exc_info.value.max_quantity_allowed == 1

    def test_team_row_locked_before_quota_check(self, team, resource, monkeypatch):
        calls = []
        real_lock, real_check = cart_management._lock_team, cart_management._ensure_fits
        monkeypatch.setattr(cart_management, '_lock_team', lambda t: calls.append('lock') or real_lock(t))
        monkeypatch.setattr(
            cart_management, '_ensure_fits', lambda **kw: calls.append('check') or real_check(**kw),
        )

        add_item(team=team, resource_id=resource.id, quantity=1)
        update_quantity(team=team, resource_id=resource.id, quantity=2)

        assert calls == ['lock', 'check', 'lock', 'check']

    def test_add_unknown_resource(self, team):
        with pytest.raises(ResourceNotFoundError):
            add_item(team=team, resource_id=777, quantity=1)

    def test_add_inactive(self, team, inactive_resource):
        with pytest.raises(CartValidationError, match="not available"):
            add_item(team=team, resource_id=inactive_resource.id, quantity=1)

    def test_update_increase_checks_only_difference(self, team, resource):
        add_item(team=team, resource_id=resource.id, quantity=2)

        assert update_quantity(team=team, resource_id=resource.id, quantity=3).quantity == 3

        with pytest.raises(CartValidationError):
            update_quantity(team=team, resource_id=resource.id, quantity=4)

    def test_update_decrease(self, team, resource):
        add_item(team=team, resource_id=resource.id, quantity=3)

        assert update_quantity(team=team, resource_id=resource.id, quantity=1).quantity == 1

    def test_update_to_zero_removes(self, team, resource):
        add_item(team=team, resource_id=resource.id, quantity=1)

        assert update_quantity(team=team, resource_id=resource.id, quantity=0) is None
        assert not CartItem.objects.exists()

    def test_update_missing_line(self, team, resource):
        with pytest.raises(CartItemNotFoundError):
            update_quantity(team=team, resource_id=resource.id, quantity=2)

    def test_remove(self, team, resource):
        add_item(team=team, resource_id=resource.id, quantity=1)
        remove_item(team=team, resource_id=resource.id)

        with pytest.raises(CartItemNotFoundError, match="Item not in cart"):
            remove_item(team=team, resource_id=resource.id)

    def test_totals(self, team, resource, consumable):
        add_item(team=team, resource_id=resource.id, quantity=2)
        add_item(team=team, resource_id=consumable.id, quantity=3)

        assert cart_total_cost(team=team) == 260
        assert cart_items_count(team=team) == 5
        assert clear_cart(team=team) == 2
        assert list(get_cart(team=team)) == []

    def test_carts_are_per_team(self, team, other_team, resource):
        add_item(team=team, resource_id=resource.id, quantity=3)

        assert add_item(team=other_team, resource_id=resource.id, quantity=3).quantity == 3


@pytest.mark.django_db
class TestCheckout:

    def test_checkout_creates_batch_and_empties_cart(self, team, resource, consumable):
        add_item(team=team, resource_id=resource.id, quantity=1)
        add_item(team=team, resource_id=consumable.id, quantity=2)

        purchases = checkout(team=team, comment='For the robotics demo')

        assert len(purchases) == 2
        assert len({p.batch_id for p in purchases}) == 1
        assert not CartItem.objects.filter(team=team).exists()
        assert Account.objects.get(id=team.id).credit == 1000 - 100 - 40

    def test_empty_cart(self, team):
        with pytest.raises(EmptyCartError, match="Cart is empty"):
            checkout(team=team, comment='For the robotics demo')

    def test_refused_checkout_keeps_cart(self, team, resource):
        add_item(team=team, resource_id=resource.id, quantity=2)
        Account.objects.filter(id=team.id).update(credit=10)
        team.refresh_from_db()

        with pytest.raises(InsufficientCreditError):
            checkout(team=team, comment='For the robotics demo')

        assert CartItem.objects.get(team=team).quantity == 2
        assert not Purchase.objects.exists()
