"""Middleware components for the social graph service."""

from social.middleware.process_time import ProcessTimeMiddleware
from social.middleware.request_id import RequestIDMiddleware

__all__ = [
    "ProcessTimeMiddleware",
    "RequestIDMiddleware",
]
