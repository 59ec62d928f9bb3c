"""Django settings for the social graph service.

All deployment-specific values are read from environment variables with
development-friendly defaults.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "insecure-development-key-change-me")

DEBUG = _env_bool("DEBUG")

ALLOWED_HOSTS = _env_list("ALLOWED_HOSTS", "localhost,127.0.0.1")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "django_rq",
    "social",
]

MIDDLEWARE = [
    "social.middleware.RequestIDMiddleware",
    "social.middleware.ProcessTimeMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "social_service.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {"context_processors": []},
    },
]

WSGI_APPLICATION = "social_service.wsgi.application"
ASGI_APPLICATION = "social_service.asgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("POSTGRES_DB", "social"),
        "USER": os.getenv("POSTGRES_USER", "social"),
        "PASSWORD": os.getenv("POSTGRES_PASSWORD", ""),
        "HOST": os.getenv("POSTGRES_HOST", "localhost"),
        "PORT": os.getenv("POSTGRES_PORT", "5432"),
        "OPTIONS": {
            "options": f"-c search_path={os.getenv('POSTGRES_SCHEMA', 'public')}",
        },
        "CONN_MAX_AGE": int(os.getenv("POSTGRES_CONN_MAX_AGE", "60")),
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": os.getenv("REDIS_URL", "redis://localhost:6379/0"),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

# Django REST Framework
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": ["social.auth.oauth2.OAuth2Authentication"],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.IsAuthenticated"],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "EXCEPTION_HANDLER": "social.exceptions.handlers.custom_exception_handler",
    "UNAUTHENTICATED_USER": None,
}

# OAuth2 / identity
OAUTH2_SERVICE_ENABLED = _env_bool("OAUTH2_SERVICE_ENABLED", "true")
OAUTH2_INTROSPECTION_ENABLED = _env_bool("OAUTH2_INTROSPECTION_ENABLED", "false")
OAUTH2_INTROSPECT_URL = os.getenv(
    "OAUTH2_INTROSPECT_URL", "http://localhost:8080/api/v1/auth/oauth2/introspect"
)
OAUTH2_CLIENT_ID = os.getenv("OAUTH2_CLIENT_ID", "social-graph-service")
OAUTH2_CLIENT_SECRET = os.getenv("OAUTH2_CLIENT_SECRET", "")
JWT_SECRET = os.getenv("JWT_SECRET", "")
OAUTH2_TOKEN_CACHE_TTL = int(os.getenv("OAUTH2_TOKEN_CACHE_TTL", "60"))
OAUTH2_TOKEN_CACHE_PREFIX = "oauth2_token:"

# django-rq
RQ_QUEUES = {
    "default": {
        "URL": os.getenv("REDIS_URL", "redis://localhost:6379/0"),
        "DEFAULT_TIMEOUT": 360,
    },
}

# Email (SMTP sink)
EMAIL_HOST = os.getenv("EMAIL_HOST", "localhost")
EMAIL_PORT = int(os.getenv("EMAIL_PORT", "1025"))
EMAIL_HOST_USER = os.getenv("EMAIL_HOST_USER", "")
EMAIL_HOST_PASSWORD = os.getenv("EMAIL_HOST_PASSWORD", "")
EMAIL_USE_TLS = _env_bool("EMAIL_USE_TLS")
DEFAULT_FROM_EMAIL = os.getenv("DEFAULT_FROM_EMAIL", "no-reply@social.local")

FRONTEND_BASE_URL = os.getenv("FRONTEND_BASE_URL", "http://localhost:3000")

# Notification engine
SOCIAL_ALWAYS_DELIVER_TYPES = _env_list(
    "SOCIAL_ALWAYS_DELIVER_TYPES", "follow_request,follow_accepted"
)
NOTIFICATION_DEDUP_WINDOW_SECONDS = int(
    os.getenv("NOTIFICATION_DEDUP_WINDOW_SECONDS", "60")
)
NOTIFICATION_EMAIL_ENABLED = _env_bool("NOTIFICATION_EMAIL_ENABLED", "true")
NOTIFICATION_EMAIL_MAX_RETRIES = int(os.getenv("NOTIFICATION_EMAIL_MAX_RETRIES", "3"))

# Realtime stream
REALTIME_STREAM_HEARTBEAT_SECONDS = float(
    os.getenv("REALTIME_STREAM_HEARTBEAT_SECONDS", "15")
)

# Logging is configured by structlog in SocialConfig.ready().
LOGGING_CONFIG = None

TEST_MODE = False
