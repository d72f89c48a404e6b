from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class CartItem(models.Model):
    """
    One line of a team's cart.

    The cart only stages a future batch purchase; checkout validates
    everything again.
    """

    team = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='cart_items',
    )
    resource = models.ForeignKey(
        'resources.Resource',
        on_delete=models.CASCADE,
        related_name='cart_items',
    )
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    added_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'cart_items'
        ordering = ['added_at', 'id']
        constraints = [
            models.UniqueConstraint(fields=['team', 'resource'], name='unique_cart_line_per_resource'),
        ]

    def __str__(self):
        return f"{self.team} - {self.resource} x{self.quantity}"

    @property
    def line_cost(self) -> int:
        return self.resource.price_for(self.quantity)
