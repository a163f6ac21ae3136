"""
Armory configuration.

Usage in settings.py:
    ARMORY = {
        "DASHBOARD_ROLES": ("admin", "commander", "logistics"),
        "PURCHASE_ROLES": ("admin", "logistics"),
        "ASSET_TYPES": ("Rifle", "Ammo", "Vehicle"),
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class ArmorySettings:
    """Armory configuration settings."""

    # Roles allowed to read the balance dashboard
    DASHBOARD_ROLES: tuple = ("admin", "commander", "logistics")

    # Roles allowed to list purchases, transfers and assignments
    LEDGER_READ_ROLES: tuple = ("admin", "commander", "logistics")

    # Roles allowed to record movements
    PURCHASE_ROLES: tuple = ("admin", "logistics")
    TRANSFER_ROLES: tuple = ("admin", "logistics")
    ASSIGNMENT_ROLES: tuple = ("admin", "logistics")

    # Roles allowed to read the audit log
    AUDIT_LOG_ROLES: tuple = ("admin",)

    # Accepted asset types (empty = any non-blank name)
    ASSET_TYPES: tuple = ()


def get_armory_settings() -> ArmorySettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "ARMORY", {})
    return ArmorySettings(**{
        k: tuple(v) if isinstance(v, list) else v
        for k, v in user_settings.items()
        if k in ArmorySettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_armory_settings(), name)


armory_settings = _LazySettings()
