"""Django app configuration for miniblog."""
from django.apps import AppConfig


class MiniblogConfig(AppConfig):
    """Configuration for the miniblog app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "miniblog"
    verbose_name = "Mini Blog"
