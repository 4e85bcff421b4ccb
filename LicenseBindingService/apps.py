"""
App configuration for License Binding Service.
"""

import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class LicenseBindingServiceConfig(AppConfig):
    """App configuration for LicenseBindingService."""

    name = "LicenseBindingService"
    verbose_name = "License Binding Service"

    def ready(self):
        """Called when Django starts."""
        if not getattr(settings, "OTEL_ENABLED", False):
            return

        # Only setup once (Django's reloader imports apps twice)
        if getattr(self, "_initialized", False):
            return

        from core.instrumentation import setup_opentelemetry

        logger.info("Setting up observability...")
        setup_opentelemetry()
        self._initialized = True
        logger.info("Observability setup complete")
