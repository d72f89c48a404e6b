from django.contrib import admin
from apps.cart.models import CartItem


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    """Read-mostly view of staged cart lines."""

    list_display = ['team', 'resource', 'quantity', 'added_at', 'updated_at']
    list_filter = ['team']
    search_fields = ['team__name', 'resource__name']
    list_select_related = ['team', 'resource']
    readonly_fields = ['added_at', 'updated_at']
