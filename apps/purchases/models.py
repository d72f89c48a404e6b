from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class PurchaseStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    CONFIRMED = 'confirmed', 'Confirmed'
    CANCELLED = 'cancelled', 'Cancelled'


class ReviewAction(models.TextChoices):
    CONFIRM = 'confirm', 'Confirm'
    CANCEL = 'cancel', 'Cancel'


class PurchaseQuerySet(models.QuerySet):

    def for_team(self, team):
        return self.filter(team=team)

    def committed(self):
        """Purchases that count against a team's quota."""
        return self.filter(
            status__in=[PurchaseStatus.PENDING, PurchaseStatus.CONFIRMED],
            is_returned=False,
        )

    def awaiting_return(self):
        """Confirmed, returnable purchases not yet handed back."""
        return self.filter(
            needs_return=True,
            status=PurchaseStatus.CONFIRMED,
            is_returned=False,
        )


class Purchase(models.Model):
    """
    A team's request for a quantity of one resource.

    Credit is debited when the request is created. An admin then confirms
    (stock is taken) or cancels (credit is refunded) it. Lines created
    together from a cart share a batch_id.
    """

    batch_id = models.CharField(max_length=64, null=True, blank=True, db_index=True)

    team = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='purchases',
    )
    resource = models.ForeignKey(
        'resources.Resource',
        on_delete=models.PROTECT,
        related_name='purchases',
    )

    # Currently granted; lowered by partial approval
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    requested_quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    comment = models.TextField(blank=True)
    purchase_date = models.DateTimeField(default=timezone.now)

    # Return tracking
    is_returned = models.BooleanField(default=False)
    needs_return = models.BooleanField(default=False)

    status = models.CharField(
        max_length=20,
        choices=PurchaseStatus.choices,
        default=PurchaseStatus.PENDING,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PurchaseQuerySet.as_manager()

    class Meta:
        db_table = 'purchases'
        ordering = ['-purchase_date', '-id']
        indexes = [
            models.Index(fields=['team', 'resource', 'status'], name='purchases_team_res_st_idx'),
            models.Index(fields=['status', 'purchase_date'], name='purchases_status_date_idx'),
            models.Index(fields=['needs_return', 'is_returned'], name='purchases_returns_idx'),
        ]

    def __str__(self):
        return f"#{self.id} {self.team} - {self.resource} x{self.quantity} ({self.status})"

    @property
    def total_cost(self) -> int:
        return self.resource.price_for(self.quantity)

    @property
    def is_adjusted(self):
        """Confirmed with fewer units than requested."""
        return self.quantity != self.requested_quantity
