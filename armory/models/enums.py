"""
Enums for Armory models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Role(models.TextChoices):
    """
    Role of a member, decides which operations are allowed.

    ADMIN:      Full access, every base.
    COMMANDER:  Read-only view of their base (dashboard, ledgers).
    LOGISTICS:  Records purchases, transfers and assignments for their base.
    """
    ADMIN = 'admin', _('Admin')
    COMMANDER = 'commander', _('Base Commander')
    LOGISTICS = 'logistics', _('Logistics Officer')


class AssignmentKind(models.TextChoices):
    """Discriminator for assignment rows. Both subtract from stock."""
    ASSIGNED = 'assigned', _('Assigned to personnel')
    EXPENDED = 'expended', _('Expended')


class LedgerCategory(models.TextChoices):
    """
    Transaction category as seen from one base.

    A single Transfer row is TRANSFER_OUT for its source base
    and TRANSFER_IN for its destination base.
    """
    PURCHASE = 'purchase', _('Purchase')
    TRANSFER_IN = 'transfer_in', _('Transfer in')
    TRANSFER_OUT = 'transfer_out', _('Transfer out')
    ASSIGNMENT = 'assignment', _('Assignment')


class AuditAction(models.TextChoices):
    """Audit log actions."""
    PURCHASE_CREATED = 'PURCHASE_CREATED', _('Purchase created')
    ASSET_TRANSFER = 'ASSET_TRANSFER', _('Asset transfer')
    ASSET_ASSIGNED = 'ASSET_ASSIGNED', _('Asset assigned')
    ASSET_EXPENDED = 'ASSET_EXPENDED', _('Asset expended')
