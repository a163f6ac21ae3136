"""
Django Armory — Asset tracking across bases.

Purchases, transfers and assignments go into an immutable ledger; a
snapshot per (base, asset type) caches the running totals, and the
dashboard reconstructs balances for any past date range.

Usage:
    from armory import assets, ArmoryError

    assets.purchase(100, 'Rifle', alpha)
    assets.transfer(20, 'Rifle', alpha, bravo)
    assets.dashboard(alpha, '2024-01-01', '2024-01-31')
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'assets':
        from armory.service import Assets
        return Assets
    elif name == 'ArmoryError':
        from armory.exceptions import ArmoryError
        return ArmoryError
    elif name == 'Base':
        from armory.models.base import Base
        return Base
    elif name == 'InventorySnapshot':
        from armory.models.snapshot import InventorySnapshot
        return InventorySnapshot
    elif name in ('Purchase', 'Transfer', 'Assignment', 'AuditLog'):
        from armory.models import ledger
        return getattr(ledger, name)
    elif name == 'Membership':
        from armory.models.membership import Membership
        return Membership
    elif name in ('Role', 'AssignmentKind', 'LedgerCategory', 'AuditAction'):
        from armory.models import enums
        return getattr(enums, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'assets',
    'ArmoryError',
    'Base',
    'InventorySnapshot',
    'Purchase',
    'Transfer',
    'Assignment',
    'AuditLog',
    'Membership',
    'Role',
    'AssignmentKind',
    'LedgerCategory',
    'AuditAction',
]

__version__ = '0.1.0'
