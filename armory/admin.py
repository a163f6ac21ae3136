"""
Armory Admin.

Provides views for setup and production debugging:
- Base, Membership: list + edit
- InventorySnapshot: read-only with "recalculate" action
- Purchase, Transfer, Assignment: read-only ledger
- AuditLog: read-only
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from armory.models import (
    Assignment,
    AuditLog,
    Base,
    InventorySnapshot,
    Membership,
    Purchase,
    Transfer,
)


class ReadOnlyAdmin(admin.ModelAdmin):
    """Rows only change through the asset service."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =========================================================================
# BASE / MEMBERSHIP
# =========================================================================

@admin.register(Base)
class BaseAdmin(admin.ModelAdmin):
    list_display = ['code', 'name']
    search_fields = ['code', 'name']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Membership)
class MembershipAdmin(admin.ModelAdmin):
    list_display = ['user', 'role', 'base']
    list_filter = ['role', 'base']
    search_fields = ['user__username']


# =========================================================================
# SNAPSHOT ADMIN (read-only with recalculate action)
# =========================================================================

@admin.register(InventorySnapshot)
class InventorySnapshotAdmin(ReadOnlyAdmin):
    """Read-only. Counters only change via ledger rows."""

    list_display = ['base', 'asset_type', 'opening_balance', 'purchases', 'transfer_in',
                    'transfer_out', 'assigned', 'expended', 'closing_balance',
                    'is_consistent_display']
    list_filter = ['base', 'asset_type']
    search_fields = ['asset_type']
    actions = ['recalculate_snapshots']

    @admin.display(description=_('Consistent?'), boolean=True)
    def is_consistent_display(self, obj):
        return obj.is_consistent

    @admin.action(description=_('Recalculate from ledger'))
    def recalculate_snapshots(self, request, queryset):
        fixed = 0
        for snapshot in queryset:
            if snapshot.recalculate():
                fixed += 1
        self.message_user(request, _('{count} snapshot(s) corrected.').format(count=fixed))


# =========================================================================
# LEDGER ADMIN (read-only audit trail)
# =========================================================================

@admin.register(Purchase)
class PurchaseAdmin(ReadOnlyAdmin):
    list_display = ['timestamp', 'base', 'asset_type', 'quantity', 'user']
    list_filter = ['base', 'asset_type']
    date_hierarchy = 'timestamp'


@admin.register(Transfer)
class TransferAdmin(ReadOnlyAdmin):
    list_display = ['timestamp', 'from_base', 'to_base', 'asset_type', 'quantity', 'user']
    list_filter = ['from_base', 'to_base', 'asset_type']
    date_hierarchy = 'timestamp'


@admin.register(Assignment)
class AssignmentAdmin(ReadOnlyAdmin):
    list_display = ['timestamp', 'base', 'asset_type', 'quantity', 'kind', 'assigned_to', 'user']
    list_filter = ['base', 'kind', 'asset_type']
    search_fields = ['assigned_to']
    date_hierarchy = 'timestamp'


@admin.register(AuditLog)
class AuditLogAdmin(ReadOnlyAdmin):
    list_display = ['timestamp', 'action', 'user']
    list_filter = ['action']
    date_hierarchy = 'timestamp'
