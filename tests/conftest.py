"""Pytest configuration and shared fixtures."""

import os

import django
from django.test import Client

import pytest

# Configure Django settings for tests
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "social_service.settings_test")
django.setup()

from social.realtime import (  # noqa: E402
    PresenceRegistry,
    connection_manager,
    realtime_dispatcher,
)
from social.services.health_service import health_service  # noqa: E402


@pytest.fixture(autouse=True)
def presence_registry():
    """Give every test an empty presence registry.

    The registry created at app start-up is process wide; tests register
    channels, so each one gets its own instance injected everywhere.
    """
    registry = PresenceRegistry()
    realtime_dispatcher.set_presence_registry(registry)
    connection_manager.set_presence_registry(registry)
    health_service.set_presence_registry(registry)
    yield registry
    registry.close_all()


@pytest.fixture
def api_client():
    """Provide Django test client."""
    return Client()
