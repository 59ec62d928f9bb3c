"""Exception handling utilities for the social graph service."""

from social.exceptions.domain_exceptions import (
    ConflictError,
    DeliveryFailureError,
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
    SocialGraphError,
)
from social.exceptions.handlers import custom_exception_handler

__all__ = [
    "ConflictError",
    "DeliveryFailureError",
    "ForbiddenError",
    "InvalidOperationError",
    "NotFoundError",
    "SocialGraphError",
    "custom_exception_handler",
]
