"""
Service layer tests for purchases app.

Tests cover:
- Quota arithmetic and cart pre-validation
- Single and batch purchase creation (credit debit, all-or-nothing)
- Admin review, partial approval and batch review
- Physical returns
- Batch grouping and summaries
- E-mail notifications
"""

import re
from datetime import datetime, timezone as dt_timezone

import pytest
from django.core import mail
from django.test import override_settings

from apps.accounts.models import Account
from apps.cart.models import CartItem
from apps.purchases.models import Purchase, PurchaseStatus
from apps.purchases.services import (
    compute_max_quantity,
    max_quantity_allowed,
    validate_add_to_cart,
    purchase_stats,
    generate_batch_id,
    create_purchase,
    create_batch_purchase,
    review_purchase,
    review_batch,
    return_purchase,
    mark_returned,
    unmark_returned,
    list_team_purchases,
    list_purchases,
    group_into_batches,
    get_batch,
    purchase_summary,
    MIXED_STATUS,
)
from apps.purchases.services.exceptions import (
    InvalidBatchError,
    InvalidQuantityError,
    ResourceUnavailableError,
    InsufficientStockError,
    QuotaExceededError,
    InsufficientCreditError,
    PurchaseNotFoundError,
    PurchaseAlreadyProcessedError,
    InvalidApprovedQuantityError,
    NotPurchaseOwnerError,
    ReturnNotAllowedError,
    BatchNotFoundError,
)
from apps.resources.models import Resource
from apps.resources.services import ResourceNotFoundError

COMMENT = 'Needed for the demo booth'


def credit_of(team):
    return Account.objects.get(id=team.id).credit


def stock_of(resource):
    return Resource.objects.get(id=resource.id).quantity


# =============================================================================
# Quota
# =============================================================================

class TestComputeMaxQuantity:

    def test_bounded_by_quota(self):
        assert compute_max_quantity(max_per_team=3, stock=10, committed=1, in_cart=1) == 1

    def test_bounded_by_stock_after_cart(self):
        assert compute_max_quantity(max_per_team=10, stock=4, committed=0, in_cart=3) == 1

    def test_never_negative(self):
        assert compute_max_quantity(max_per_team=2, stock=10, committed=5, in_cart=0) == 0

    def test_inactive(self):
        assert compute_max_quantity(max_per_team=5, stock=5, committed=0, in_cart=0, is_active=False) == 0


@pytest.mark.django_db
class TestQuota:

    def test_cancelled_and_returned_do_not_count(self, make_purchase, team, resource):
        make_purchase(team=team, resource=resource, quantity=3, status=PurchaseStatus.CANCELLED)
        make_purchase(team=team, resource=resource, quantity=3, status=PurchaseStatus.CONFIRMED, is_returned=True)

        assert max_quantity_allowed(team=team, resource=resource) == 3

    def test_pending_and_cart_count(self, make_purchase, team, resource):
        make_purchase(team=team, resource=resource, quantity=1)
        CartItem.objects.create(team=team, resource=resource, quantity=1)

        assert max_quantity_allowed(team=team, resource=resource) == 1

    def test_other_team_holdings_ignored(self, make_purchase, team, other_team, resource):
        make_purchase(team=other_team, resource=resource, quantity=3)

        assert max_quantity_allowed(team=team, resource=resource) == 3

    def test_validate_inactive(self, team, inactive_resource):
        result = validate_add_to_cart(team=team, resource=inactive_resource, quantity=1)

        assert result == {'success': False, 'error': 'This resource is not available'}

    def test_validate_non_positive(self, team, resource):
        result = validate_add_to_cart(team=team, resource=resource, quantity=0)

        assert result['success'] is False
        assert result['error'] == 'Quantity must be greater than 0'

    def test_validate_stock(self, team, resource):
        result = validate_add_to_cart(team=team, resource=resource, quantity=11)

        assert result['error'] == 'Only 10 unit(s) available'
        assert result['max_quantity_allowed'] == 10

    def test_validate_quota(self, make_purchase, team, resource):
        make_purchase(team=team, resource=resource, quantity=2)

        result = validate_add_to_cart(team=team, resource=resource, quantity=2)

        assert result['success'] is False
        assert result['error'] == (
            'Maximum 3 per team. You have 2 purchased or pending and 0 in the cart. '
            'Only 1 more allowed.'
        )
        assert result['max_quantity_allowed'] == 1

    def test_validate_stock_after_cart(self, team):
        resource = Resource.objects.create(name='Cable', cost=1, quantity=4, max_per_team=10)
        CartItem.objects.create(team=team, resource=resource, quantity=3)

        result = validate_add_to_cart(team=team, resource=resource, quantity=2)

        assert result['error'] == 'Only 1 more unit(s) can be added to the cart (3 already in the cart)'
        assert result['max_quantity_allowed'] == 1

    def test_validate_ok(self, team, resource):
        assert validate_add_to_cart(team=team, resource=resource, quantity=3) == {'success': True}

    def test_purchase_stats(self, make_purchase, team, resource):
        make_purchase(team=team, resource=resource, quantity=1, status=PurchaseStatus.CONFIRMED)
        make_purchase(team=team, resource=resource, quantity=1)

        stats = purchase_stats(team=team, resource=resource)

        assert stats == {'purchased': 1, 'pending': 1, 'in_cart': 0, 'remaining_quota': 1}


# =============================================================================
# Creation
# =============================================================================

class TestGenerateBatchId:

    def test_format(self):
        now = datetime(2024, 3, 9, 14, 5, 7, tzinfo=dt_timezone.utc)

        batch_id = generate_batch_id(team_id=42, now=now)

        assert re.fullmatch(r'20240309140507-42-[0-9a-f]{6}', batch_id)

    def test_same_second_differs(self):
        now = datetime(2024, 3, 9, 14, 5, 7, tzinfo=dt_timezone.utc)

        assert generate_batch_id(team_id=1, now=now) != generate_batch_id(team_id=1, now=now)


@pytest.mark.django_db
class TestCreatePurchase:

    def test_debits_credit_and_stays_pending(self, team, resource):
        purchase = create_purchase(team=team, resource_id=resource.id, quantity=2, comment='  hi  ')

        assert purchase.status == PurchaseStatus.PENDING
        assert purchase.batch_id is None
        assert purchase.requested_quantity == 2
        assert purchase.comment == 'hi'
        assert purchase.needs_return is True
        assert credit_of(team) == 800
        # Stock is only taken on confirmation
        assert stock_of(resource) == 10

    def test_non_returnable_needs_no_return(self, team, consumable):
        purchase = create_purchase(team=team, resource_id=consumable.id, quantity=1)

        assert purchase.needs_return is False

    def test_zero_quantity(self, team, resource):
        with pytest.raises(InvalidQuantityError):
            create_purchase(team=team, resource_id=resource.id, quantity=0)

    def test_unknown_resource(self, team):
        with pytest.raises(ResourceNotFoundError):
            create_purchase(team=team, resource_id=999, quantity=1)

    def test_inactive_resource(self, team, inactive_resource):
        with pytest.raises(ResourceUnavailableError, match="Resource is not available"):
            create_purchase(team=team, resource_id=inactive_resource.id, quantity=1)

    def test_insufficient_stock(self, team):
        resource = Resource.objects.create(name='Rare', cost=1, quantity=1, max_per_team=5)

        with pytest.raises(InsufficientStockError, match="Insufficient quantity available"):
            create_purchase(team=team, resource_id=resource.id, quantity=2)

    def test_quota_exceeded(self, make_purchase, team, resource):
        make_purchase(team=team, resource=resource, quantity=2)

        with pytest.raises(QuotaExceededError, match="maximum quantity per team exceeded"):
            create_purchase(team=team, resource_id=resource.id, quantity=2)

    def test_insufficient_credit(self, team, resource):
        team.credit = 150
        team.save(update_fields=['credit'])

        with pytest.raises(InsufficientCreditError):
            create_purchase(team=team, resource_id=resource.id, quantity=2)

        assert credit_of(team) == 150
        assert not Purchase.objects.exists()


@pytest.mark.django_db
class TestCreateBatchPurchase:

    def test_creates_lines_under_one_batch(self, team, resource, consumable):
        purchases = create_batch_purchase(
            team=team,
            items=[
                {'resource_id': resource.id, 'quantity': 2},
                {'resource_id': consumable.id, 'quantity': 3},
            ],
            comment=COMMENT,
        )

        assert len(purchases) == 2
        assert len({p.batch_id for p in purchases}) == 1
        assert purchases[0].batch_id.split('-')[1] == str(team.id)
        assert all(p.comment == COMMENT for p in purchases)
        assert credit_of(team) == 1000 - 200 - 60

    def test_duplicate_lines_are_merged(self, team, resource):
        purchases = create_batch_purchase(
            team=team,
            items=[
                {'resource_id': resource.id, 'quantity': 1},
                {'resource_id': resource.id, 'quantity': 1},
            ],
            comment=COMMENT,
        )

        assert len(purchases) == 1
        assert purchases[0].quantity == 2

    def test_merged_lines_respect_quota(self, team, resource):
        with pytest.raises(QuotaExceededError):
            create_batch_purchase(
                team=team,
                items=[
                    {'resource_id': resource.id, 'quantity': 2},
                    {'resource_id': resource.id, 'quantity': 2},
                ],
                comment=COMMENT,
            )

    def test_empty_items(self, team):
        with pytest.raises(InvalidBatchError, match="At least one item is required"):
            create_batch_purchase(team=team, items=[], comment=COMMENT)

    def test_comment_too_short(self, team, resource):
        with pytest.raises(InvalidBatchError, match="at least 10 characters"):
            create_batch_purchase(team=team, items=[{'resource_id': resource.id, 'quantity': 1}], comment='  short  ')

    @override_settings(BATCH_COMMENT_MAX_LENGTH=20)
    def test_comment_too_long(self, team, resource):
        with pytest.raises(InvalidBatchError, match="Comment is too long"):
            create_batch_purchase(team=team, items=[{'resource_id': resource.id, 'quantity': 1}], comment='x' * 21)

    def test_unknown_resource_names_it(self, team, resource):
        with pytest.raises(ResourceNotFoundError, match="Resource 4242 not found"):
            create_batch_purchase(
                team=team,
                items=[{'resource_id': resource.id, 'quantity': 1}, {'resource_id': 4242, 'quantity': 1}],
                comment=COMMENT,
            )

    def test_all_or_nothing(self, team, resource, consumable):
        team.credit = 150
        team.save(update_fields=['credit'])

        with pytest.raises(InsufficientCreditError):
            create_batch_purchase(
                team=team,
                items=[{'resource_id': resource.id, 'quantity': 1}, {'resource_id': consumable.id, 'quantity': 3}],
                comment=COMMENT,
            )

        assert credit_of(team) == 150
        assert not Purchase.objects.exists()


# =============================================================================
# Review
# =============================================================================

@pytest.mark.django_db
class TestReviewPurchase:

    def test_confirm_takes_stock(self, pending_purchase, resource, team):
        purchase = review_purchase(purchase_id=pending_purchase.id, action='confirm')

        assert purchase.status == PurchaseStatus.CONFIRMED
        assert stock_of(resource) == 8
        assert credit_of(team) == 800

    def test_cancel_refunds(self, pending_purchase, resource, team):
        purchase = review_purchase(purchase_id=pending_purchase.id, action='cancel')

        assert purchase.status == PurchaseStatus.CANCELLED
        assert credit_of(team) == 1000
        assert stock_of(resource) == 10

    def test_only_pending(self, confirmed_purchase):
        with pytest.raises(PurchaseAlreadyProcessedError):
            review_purchase(purchase_id=confirmed_purchase.id, action='cancel')

    def test_not_found(self, db):
        with pytest.raises(PurchaseNotFoundError):
            review_purchase(purchase_id=1, action='confirm')

    def test_confirm_without_stock(self, pending_purchase, resource):
        Resource.objects.filter(id=resource.id).update(quantity=1)

        with pytest.raises(InsufficientStockError):
            review_purchase(purchase_id=pending_purchase.id, action='confirm')

        assert Purchase.objects.get(id=pending_purchase.id).status == PurchaseStatus.PENDING


@pytest.mark.django_db
class TestReviewBatch:

    def test_mixed_results(self, make_purchase, team, resource, consumable):
        team.credit = 1000 - 300 - 40
        team.save(update_fields=['credit'])
        first = make_purchase(team=team, resource=resource, quantity=3, batch_id='b1')
        second = make_purchase(team=team, resource=consumable, quantity=2, batch_id='b1')

        result = review_batch(items=[
            {'purchase_id': first.id, 'action': 'confirm', 'approved_quantity': 1},
            {'purchase_id': second.id, 'action': 'cancel'},
            {'purchase_id': 9999, 'action': 'confirm'},
        ])

        assert result['message'] == 'Batch processed'
        assert result['total'] == 3
        assert result['success_count'] == 2
        assert result['failure_count'] == 1
        assert result['results'][2] == {'purchase_id': 9999, 'success': False, 'error': 'Purchase not found'}

        first.refresh_from_db()
        assert first.status == PurchaseStatus.CONFIRMED
        assert first.quantity == 1
        assert first.requested_quantity == 3
        assert stock_of(resource) == 9
        # 200 refunded for the trimmed units, 40 for the cancelled line
        assert credit_of(team) == 1000 - 100

    def test_invalid_approved_quantity(self, pending_purchase):
        result = review_batch(items=[
            {'purchase_id': pending_purchase.id, 'action': 'confirm', 'approved_quantity': 5},
        ])

        assert result['results'][0]['success'] is False
        assert result['results'][0]['error'] == 'Invalid approved quantity'
        assert Purchase.objects.get(id=pending_purchase.id).status == PurchaseStatus.PENDING

    def test_failure_rolls_back_only_its_item(self, pending_purchase, make_purchase, other_team, resource):
        other = make_purchase(team=other_team, resource=resource, quantity=1)
        Resource.objects.filter(id=resource.id).update(quantity=1)

        result = review_batch(items=[
            {'purchase_id': pending_purchase.id, 'action': 'confirm'},
            {'purchase_id': other.id, 'action': 'confirm'},
        ])

        assert [r['success'] for r in result['results']] == [False, True]
        assert stock_of(resource) == 0

    def test_one_summary_mail_per_team(self, make_purchase, team, other_team, resource):
        a = make_purchase(team=team, resource=resource, quantity=1)
        b = make_purchase(team=team, resource=resource, quantity=1)
        c = make_purchase(team=other_team, resource=resource, quantity=1)

        review_batch(items=[
            {'purchase_id': a.id, 'action': 'confirm'},
            {'purchase_id': b.id, 'action': 'cancel'},
            {'purchase_id': c.id, 'action': 'confirm'},
        ])

        assert sorted(m.to[0] for m in mail.outbox) == ['alpha@example.com', 'beta@example.com']
        assert all('Your order has been processed' in m.subject for m in mail.outbox)


# =============================================================================
# Returns
# =============================================================================

@pytest.mark.django_db
class TestReturns:

    def test_team_return_restores_stock_without_refund(self, confirmed_purchase, team, resource):
        purchase = return_purchase(team=team, purchase_id=confirmed_purchase.id)

        assert purchase.is_returned is True
        assert stock_of(resource) == 10
        assert credit_of(team) == 1000

    def test_return_by_other_team(self, confirmed_purchase, other_team):
        with pytest.raises(NotPurchaseOwnerError, match="Not authorized"):
            return_purchase(team=other_team, purchase_id=confirmed_purchase.id)

    def test_return_twice(self, confirmed_purchase, team):
        return_purchase(team=team, purchase_id=confirmed_purchase.id)

        with pytest.raises(ReturnNotAllowedError, match="already returned"):
            return_purchase(team=team, purchase_id=confirmed_purchase.id)

    def test_return_pending(self, pending_purchase, team):
        with pytest.raises(ReturnNotAllowedError, match="Can only return confirmed purchases"):
            return_purchase(team=team, purchase_id=pending_purchase.id)

    def test_return_non_returnable(self, make_purchase, team, consumable):
        purchase = make_purchase(team=team, resource=consumable, status=PurchaseStatus.CONFIRMED)

        with pytest.raises(ReturnNotAllowedError, match="non-returnable"):
            return_purchase(team=team, purchase_id=purchase.id)

    def test_mark_and_unmark(self, confirmed_purchase, resource):
        mark_returned(purchase_id=confirmed_purchase.id)
        assert stock_of(resource) == 10

        purchase = unmark_returned(purchase_id=confirmed_purchase.id)
        assert purchase.is_returned is False
        assert stock_of(resource) == 8

    def test_mark_requires_confirmed(self, pending_purchase):
        with pytest.raises(ReturnNotAllowedError, match="Only confirmed purchases"):
            mark_returned(purchase_id=pending_purchase.id)

    def test_mark_twice(self, confirmed_purchase):
        mark_returned(purchase_id=confirmed_purchase.id)

        with pytest.raises(ReturnNotAllowedError, match="already marked"):
            mark_returned(purchase_id=confirmed_purchase.id)

    def test_unmark_not_returned(self, confirmed_purchase):
        with pytest.raises(ReturnNotAllowedError, match="not marked as returned"):
            unmark_returned(purchase_id=confirmed_purchase.id)

    def test_unmark_without_stock(self, confirmed_purchase, resource):
        mark_returned(purchase_id=confirmed_purchase.id)
        Resource.objects.filter(id=resource.id).update(quantity=1)

        with pytest.raises(InsufficientStockError):
            unmark_returned(purchase_id=confirmed_purchase.id)

        assert Purchase.objects.get(id=confirmed_purchase.id).is_returned is True


# =============================================================================
# Queries
# =============================================================================

@pytest.mark.django_db
class TestQueries:

    def test_needs_return_filter(self, confirmed_purchase, pending_purchase, team):
        assert list(list_team_purchases(team=team, needs_return=True)) == [confirmed_purchase]

    def test_admin_filters(self, make_purchase, team, other_team, resource):
        make_purchase(team=team, resource=resource)
        theirs = make_purchase(team=other_team, resource=resource, status=PurchaseStatus.CONFIRMED)

        assert list(list_purchases(team_id=other_team.id)) == [theirs]
        assert list(list_purchases(status='confirmed')) == [theirs]

    def test_group_into_batches(self, make_purchase, team, resource, consumable):
        single = make_purchase(team=team, resource=resource)
        make_purchase(team=team, resource=resource, batch_id='b1')
        make_purchase(team=team, resource=consumable, batch_id='b1', status=PurchaseStatus.CONFIRMED)

        batches, singles = group_into_batches(Purchase.objects.order_by('id'))

        assert singles == [single]
        assert len(batches) == 1
        assert batches[0]['batch_id'] == 'b1'
        assert batches[0]['status'] == MIXED_STATUS
        assert batches[0]['total_items'] == 2
        assert batches[0]['total_cost'] == 120

    def test_batch_pending_returns(self, make_purchase, team, resource):
        make_purchase(team=team, resource=resource, batch_id='b2', status=PurchaseStatus.CONFIRMED)

        batch = get_batch(batch_id='b2')

        assert batch['status'] == PurchaseStatus.CONFIRMED
        assert batch['has_pending_returns'] is True

    def test_batch_not_found(self, db):
        with pytest.raises(BatchNotFoundError):
            get_batch(batch_id='nope')

    def test_summary(self, make_purchase, team, resource):
        make_purchase(team=team, resource=resource)
        make_purchase(team=team, resource=resource, quantity=2, status=PurchaseStatus.CONFIRMED)
        make_purchase(team=team, resource=resource, status=PurchaseStatus.CANCELLED)

        summary = purchase_summary(list_team_purchases(team=team))

        assert summary == {
            'total': 3,
            'pending': 1,
            'confirmed': 1,
            'cancelled': 1,
            'needs_return': 1,
            'credits_spent': 200,
        }


# =============================================================================
# Notifications
# =============================================================================

@pytest.mark.django_db
class TestNotifications:

    def test_purchase_created_mail_after_commit(self, team, resource, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            create_purchase(team=team, resource_id=resource.id, quantity=1)

        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ['alpha@example.com']
        assert 'Purchase request received' in mail.outbox[0].subject
        assert 'Raspberry Pi' in mail.outbox[0].body

    def test_no_mail_when_creation_fails(self, team, inactive_resource, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            with pytest.raises(ResourceUnavailableError):
                create_purchase(team=team, resource_id=inactive_resource.id, quantity=1)

        assert callbacks == []
        assert mail.outbox == []

    def test_cancel_mail_mentions_refund(self, pending_purchase, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            review_purchase(purchase_id=pending_purchase.id, action='cancel')

        assert 'Purchase cancelled' in mail.outbox[0].subject
        assert '200 credit(s) have been refunded' in mail.outbox[0].body

    def test_mark_returned_mail(self, confirmed_purchase, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            mark_returned(purchase_id=confirmed_purchase.id)

        assert 'Return recorded' in mail.outbox[0].subject

    @override_settings(EMAIL_NOTIFICATIONS_ENABLED=False)
    def test_disabled(self, team, resource, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            create_purchase(team=team, resource_id=resource.id, quantity=1)

        assert mail.outbox == []

    def test_smtp_failure_is_swallowed(self, team, resource, django_capture_on_commit_callbacks, monkeypatch):
        import smtplib

        def boom(**kwargs):
            raise smtplib.SMTPException('down')

        monkeypatch.setattr('apps.purchases.services.notifications.send_mail', boom)

        with django_capture_on_commit_callbacks(execute=True):
            purchase = create_purchase(team=team, resource_id=resource.id, quantity=1)

        assert Purchase.objects.filter(id=purchase.id).exists()
