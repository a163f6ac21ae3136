"""Django app configuration for Armory."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class ArmoryConfig(AppConfig):
    """Configuration for Armory app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "armory"
    verbose_name = _("Asset Management")
