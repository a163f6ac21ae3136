"""
Access context — who is asking, for which base, with which role.

Built once per request from the authenticated user's Membership and
passed explicitly to views and queries.

Usage:
    @require_role("DASHBOARD_ROLES")
    def dashboard(request, context):
        ...
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import wraps
from typing import Any

from django.http import JsonResponse

from armory.conf import armory_settings
from armory.models.base import Base
from armory.models.enums import Role
from armory.models.membership import Membership

logger = logging.getLogger('armory')


@dataclass(frozen=True)
class AccessContext:
    """Identity of the caller, decided by the external auth layer."""

    user: Any
    role: str
    base: Base | None

    @classmethod
    def from_request(cls, request) -> AccessContext | None:
        """Context for an authenticated request, None when there is none."""
        user = getattr(request, 'user', None)
        if user is None or not user.is_authenticated:
            return None

        try:
            membership = Membership.objects.select_related('base').get(user=user)
        except Membership.DoesNotExist:
            return None

        return cls(user=user, role=membership.role, base=membership.base)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def allows(self, roles) -> bool:
        return self.role in roles


def require_role(roles_setting: str):
    """
    View decorator: 401 without a context, 403 when the role is not allowed.

    Args:
        roles_setting: Name of the ARMORY setting listing allowed roles,
            read on every request.

    The wrapped view receives the AccessContext as `context`.
    """
    def decorator(view):
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            context = AccessContext.from_request(request)
            if context is None:
                return JsonResponse({'message': 'Authentication required'}, status=401)

            if not context.allows(getattr(armory_settings, roles_setting)):
                logger.info(
                    "armory.access.denied",
                    extra={"user": str(context.user), "role": context.role, "path": request.path},
                )
                return JsonResponse({'message': 'Access denied'}, status=403)

            return view(request, *args, context=context, **kwargs)
        return wrapper
    return decorator
