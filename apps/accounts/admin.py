from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import Account, AccountType


@admin.register(Account)
class AccountAdmin(BaseUserAdmin):
    """
    Admin interface for marketplace accounts.

    Teams and administrators share one table; the type badge and the
    account_type filter keep them apart.
    """

    list_display = [
        'name',
        'email',
        'account_type_badge',
        'credit',
        'is_active',
        'last_activity',
        'created_at',
    ]

    list_filter = [
        'account_type',
        'is_active',
        'is_staff',
    ]

    search_fields = [
        'name',
        'email',
    ]

    ordering = ['name']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'email', 'account_type', 'password')
        }),
        ('Credit', {
            'fields': ('credit', 'last_activity'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create Account', {
            'classes': ('wide',),
            'fields': ('name', 'email', 'account_type', 'password1', 'password2'),
        }),
    )

    readonly_fields = [
        'created_at',
        'updated_at',
        'last_login',
        'last_activity',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def account_type_badge(self, obj):
        """Display account type as colored badge."""
        if obj.account_type == AccountType.ADMIN:
            return format_html(
                '<span style="background: #A47449; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Admin</span>'
            )
        return format_html(
            '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Team</span>'
        )
    account_type_badge.short_description = 'Type'
    account_type_badge.admin_order_field = 'account_type'

    actions = ['activate_accounts', 'deactivate_accounts']

    @admin.action(description='Activate selected accounts')
    def activate_accounts(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'Activated {count} account(s).')

    @admin.action(description='Deactivate selected accounts')
    def deactivate_accounts(self, request, queryset):
        """Deactivate selected accounts (superusers are skipped)."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} account(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s).'
        self.message_user(request, msg)
