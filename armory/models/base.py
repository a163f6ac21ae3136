"""
Base model — Where assets are held.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Base(models.Model):
    """
    Organizational unit holding assets.

    Bases are stable entities, created during system setup.

    Examples:
        Base.objects.create(code='alpha', name='Base Alpha')
        Base.objects.create(code='bravo', name='Base Bravo')
    """

    code = models.SlugField(
        unique=True,
        max_length=50,
        verbose_name=_('Code'),
        help_text=_('Unique identifier (e.g. alpha, bravo)'),
    )
    name = models.CharField(
        max_length=100,
        verbose_name=_('Name'),
    )
    metadata = models.JSONField(
        default=dict,
        blank=True,
        verbose_name=_('Metadata'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Base')
        verbose_name_plural = _('Bases')
        ordering = ['code']

    def __str__(self) -> str:
        return self.name
