"""
Shared helpers for Armory tests.
"""

from datetime import datetime

from django.utils import timezone


def at(year, month, day, hour=12, minute=0, second=0, microsecond=0):
    """Aware datetime in the current timezone."""
    return timezone.make_aware(
        datetime(year, month, day, hour, minute, second, microsecond),
        timezone.get_current_timezone(),
    )
