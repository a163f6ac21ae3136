"""
Armory Models.

Core models for asset tracking:
- Base: Where assets are held
- InventorySnapshot: Counter cache per (base, asset type)
- Purchase, Transfer, Assignment: Immutable ledger of movements
- AuditLog: Who did what
- Membership: Role and home base of a user
"""

from armory.models.base import Base
from armory.models.enums import AssignmentKind, AuditAction, LedgerCategory, Role
from armory.models.ledger import Assignment, AuditLog, Purchase, Transfer
from armory.models.membership import Membership
from armory.models.snapshot import InventorySnapshot

__all__ = [
    'Role',
    'AssignmentKind',
    'LedgerCategory',
    'AuditAction',
    'Base',
    'InventorySnapshot',
    'Purchase',
    'Transfer',
    'Assignment',
    'AuditLog',
    'Membership',
]
