"""Services for the social app."""

from social.services.email_service import EmailService
from social.services.health_service import HealthService, health_service

# The graph and notification services are not exported here to avoid
# circular imports during app initialization. Import them from their modules.

__all__ = [
    "EmailService",
    "HealthService",
    "health_service",
]
