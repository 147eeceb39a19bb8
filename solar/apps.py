from __future__ import annotations

from django.apps import AppConfig


class SolarConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "solar"
    verbose_name = "Solar flux"
