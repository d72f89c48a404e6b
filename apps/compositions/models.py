from django.db import models


class Department(models.TextChoices):
    DEV = 'dev', 'Development'
    INFRA = 'infra', 'Infrastructure'
    DATA = 'data', 'Data'
    IOT = 'iot', 'IoT'
    SYSEMB = 'sysemb', 'Embedded systems'


class SlotAction(models.TextChoices):
    FILL = 'fill', 'Fill'
    EMPTY = 'empty', 'Empty'


class TeamComposition(models.Model):
    """
    Staffing of one team: a fixed number of seats per department and how
    many of them are currently taken.
    """

    name = models.CharField(max_length=150, unique=True)

    dev_total = models.PositiveIntegerField(default=0)
    infra_total = models.PositiveIntegerField(default=0)
    data_total = models.PositiveIntegerField(default=0)
    iot_total = models.PositiveIntegerField(default=0)
    sysemb_total = models.PositiveIntegerField(default=0)

    dev_filled = models.PositiveIntegerField(default=0)
    infra_filled = models.PositiveIntegerField(default=0)
    data_filled = models.PositiveIntegerField(default=0)
    iot_filled = models.PositiveIntegerField(default=0)
    sysemb_filled = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'team_compositions'
        ordering = ['name']

    def __str__(self):
        return self.name

    def total_for(self, department: str) -> int:
        return getattr(self, f'{department}_total')

    def filled_for(self, department: str) -> int:
        return getattr(self, f'{department}_filled')

    def toggle(self, department: str, action: str) -> int:
        """Move one seat of ``department``; the count stays within [0, total]."""
        change = 1 if action == SlotAction.FILL else -1
        filled = min(max(self.filled_for(department) + change, 0), self.total_for(department))
        setattr(self, f'{department}_filled', filled)
        return filled
