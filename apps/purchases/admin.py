from django.contrib import admin
from django.utils.html import format_html
from .models import Purchase, PurchaseStatus


@admin.register(Purchase)
class PurchaseAdmin(admin.ModelAdmin):
    """
    Admin interface for purchases.

    Status and credit changes go through the API so the credit ledger and
    stock stay consistent; here everything financial is read-only.
    """

    list_display = [
        'id',
        'team',
        'resource',
        'quantity',
        'requested_quantity',
        'status_badge',
        'batch_id',
        'needs_return',
        'is_returned',
        'purchase_date',
    ]
    list_filter = [
        'status',
        'needs_return',
        'is_returned',
        'purchase_date',
    ]
    search_fields = [
        'batch_id',
        'team__name',
        'resource__name',
        'comment',
    ]
    readonly_fields = [
        'batch_id',
        'team',
        'resource',
        'quantity',
        'requested_quantity',
        'status',
        'is_returned',
        'purchase_date',
        'created_at',
        'updated_at',
    ]
    list_select_related = ['team', 'resource']
    date_hierarchy = 'purchase_date'
    ordering = ['-purchase_date']

    def status_badge(self, obj):
        """Display purchase status as colored badge."""
        colors = {
            PurchaseStatus.PENDING: ('#E5C49A', '#2C1810'),
            PurchaseStatus.CONFIRMED: ('#6B8E5E', 'white'),
            PurchaseStatus.CANCELLED: ('#B85C5C', 'white'),
        }
        bg, fg = colors.get(obj.status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def has_add_permission(self, request):
        """Purchases are created through the API so credit is debited."""
        return False
