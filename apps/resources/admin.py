from django.contrib import admin
from apps.resources.models import Resource


@admin.register(Resource)
class ResourceAdmin(admin.ModelAdmin):
    """Admin interface for the catalog."""

    list_display = [
        'name',
        'resource_type',
        'cost',
        'quantity',
        'max_per_team',
        'is_active',
        'is_non_returnable',
    ]
    list_filter = [
        'resource_type',
        'is_active',
        'is_non_returnable',
    ]
    search_fields = [
        'name',
        'description',
    ]
    list_editable = ['quantity', 'is_active']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['name']

    actions = ['activate_resources', 'deactivate_resources']

    @admin.action(description='Activate selected resources')
    def activate_resources(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'Activated {count} resource(s).')

    @admin.action(description='Deactivate selected resources')
    def deactivate_resources(self, request, queryset):
        count = queryset.update(is_active=False)
        self.message_user(request, f'Deactivated {count} resource(s).')
