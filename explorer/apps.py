"""App configuration for the explorer Django app."""

from __future__ import annotations

from django.apps import AppConfig
from django.conf import settings

from .config import load_explorer_config


class ExplorerAppConfig(AppConfig):
    """Configuration for the `explorer` app."""

    name = "explorer"

    def ready(self) -> None:
        """Validate PMT_EXPLORER settings so misconfiguration fails at startup."""

        load_explorer_config(settings)
