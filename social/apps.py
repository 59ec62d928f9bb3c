"""Django application configuration for the social app."""

import atexit

from django.apps import AppConfig
from django.conf import settings

import structlog

logger = structlog.get_logger(__name__)


class SocialConfig(AppConfig):
    """Configuration class for the social application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "social"

    def ready(self) -> None:
        """Configure logging, connect receivers and wire the realtime layer."""
        if not getattr(settings, "TEST_MODE", False):
            from social.logging import setup_logging  # noqa: PLC0415

            setup_logging()

        import social.signals  # noqa: F401, PLC0415

        from social.realtime import (  # noqa: PLC0415
            PresenceRegistry,
            connection_manager,
            realtime_dispatcher,
        )
        from social.services.health_service import health_service  # noqa: PLC0415

        self.presence_registry = PresenceRegistry()
        realtime_dispatcher.set_presence_registry(self.presence_registry)
        connection_manager.set_presence_registry(self.presence_registry)
        health_service.set_presence_registry(self.presence_registry)
        atexit.register(self.presence_registry.close_all)

        logger.info("presence_registry_initialized")
