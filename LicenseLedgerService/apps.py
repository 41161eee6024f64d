"""
App configuration for License Ledger Service.
"""

import logging
import sys

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class LicenseLedgerServiceConfig(AppConfig):
    """App configuration for LicenseLedgerService."""

    name = "LicenseLedgerService"
    verbose_name = "License Ledger Service"

    def ready(self):
        """Called when Django starts."""
        self.register_event_handlers()

        # Skip tracing setup for management commands that don't serve requests
        if len(sys.argv) > 1 and sys.argv[1] in [
            "migrate",
            "makemigrations",
            "collectstatic",
            "shell",
            "test",
            "check",
            "createsuperuser",
            "issue_license_key",
        ]:
            return

        if getattr(settings, "OTEL_ENABLED", False):
            self.setup_observability()

    def setup_observability(self):
        """Setup observability after apps are ready."""
        from core.instrumentation import setup_opentelemetry

        logger.info("Setting up observability...")
        setup_opentelemetry()

    def register_event_handlers(self):
        """Register event handlers after apps are ready."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()
