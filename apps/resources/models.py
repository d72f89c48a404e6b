from django.db import models


class ResourceType(models.TextChoices):
    SERVICE = 'service', 'Service'
    EQUIPMENT = 'equipment', 'Equipment'
    PERK = 'perk', 'Perk'


class Resource(models.Model):
    """An item of the catalog that teams can buy with credit."""

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    cost = models.PositiveIntegerField(help_text='Price in credits per unit')
    quantity = models.PositiveIntegerField(help_text='Units currently in stock')
    max_per_team = models.PositiveIntegerField(help_text='Cap on units a single team may hold')
    resource_type = models.CharField(
        max_length=20,
        choices=ResourceType.choices,
        default=ResourceType.EQUIPMENT,
    )
    image_url = models.URLField(max_length=500, blank=True)

    is_active = models.BooleanField(default=True)
    is_non_returnable = models.BooleanField(
        default=False,
        help_text='Consumables and services are never handed back',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'resources'
        ordering = ['name']
        indexes = [
            models.Index(fields=['is_active', 'resource_type'], name='resources_active_type_idx'),
        ]

    def __str__(self):
        return self.name

    @property
    def is_returnable(self):
        return not self.is_non_returnable

    def price_for(self, quantity: int) -> int:
        return self.cost * quantity
