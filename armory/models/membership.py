"""
Membership model — which base and role a user acts for.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from armory.models.enums import Role


class Membership(models.Model):
    """
    Role and home base of a user.

    Filled by whatever authenticates users (SSO, token service, admin).
    Armory only reads it to build an AccessContext.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='armory_membership',
        verbose_name=_('User'),
    )
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        verbose_name=_('Role'),
    )
    base = models.ForeignKey(
        'armory.Base',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='members',
        verbose_name=_('Base'),
    )

    class Meta:
        verbose_name = _('Membership')
        verbose_name_plural = _('Memberships')

    def __str__(self) -> str:
        base = self.base.code if self.base else '-'
        return f"{self.user} ({self.role} @ {base})"
