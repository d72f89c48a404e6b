from django.contrib import admin
from apps.compositions.models import TeamComposition


@admin.register(TeamComposition)
class TeamCompositionAdmin(admin.ModelAdmin):
    """Admin interface for team staffing."""

    list_display = [
        'name',
        'dev_filled',
        'dev_total',
        'infra_filled',
        'infra_total',
        'data_filled',
        'data_total',
        'iot_filled',
        'iot_total',
        'sysemb_filled',
        'sysemb_total',
    ]
    search_fields = ['name']
    readonly_fields = ['created_at', 'updated_at']
    fieldsets = (
        (None, {'fields': ('name',)}),
        ('Capacity', {
            'fields': ('dev_total', 'infra_total', 'data_total', 'iot_total', 'sysemb_total'),
        }),
        ('Filled seats', {
            'fields': ('dev_filled', 'infra_filled', 'data_filled', 'iot_filled', 'sysemb_filled'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )
