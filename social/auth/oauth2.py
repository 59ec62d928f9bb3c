"""OAuth2 authentication backend for Django REST Framework.

Supports two validation modes:
1. Token Introspection: Validates tokens by calling the auth service
2. Local JWT Validation: Validates JWT signatures locally using shared secret

The live event stream cannot send an Authorization header from a browser
EventSource, so ``QueryTokenAuthentication`` also accepts the access token
as a query parameter during the stream handshake.
"""

from typing import Any, cast

from django.conf import settings
from django.core.cache import cache

import jwt
import requests
import structlog
from rest_framework import authentication, exceptions

from social.constants import STREAM_TOKEN_QUERY_PARAM

logger = structlog.get_logger(__name__)


class OAuth2User:
    """Identity established from a verified access token.

    This is not a Django User model, just a container for token claims.
    """

    def __init__(self, user_id: str, client_id: str, scopes: list[str]):
        """Initialize OAuth2 user.

        Args:
            user_id: User ID from the token subject
            client_id: OAuth2 client ID
            scopes: List of granted scopes
        """
        self.id = user_id
        self.user_id = user_id
        self.client_id = client_id
        self.scopes = scopes
        self.is_authenticated = True

    def has_scope(self, scope: str) -> bool:
        """Check if user has a specific scope."""
        return scope in self.scopes

    def has_any_scope(self, *scopes: str) -> bool:
        """Check if user has at least one of the given scopes."""
        return any(scope in self.scopes for scope in scopes)

    def __str__(self):
        """String representation."""
        return f"OAuth2User(user_id={self.user_id}, client_id={self.client_id})"


class OAuth2Authentication(authentication.BaseAuthentication):
    """OAuth2 Bearer token authentication.

    Extracts and validates Bearer tokens from Authorization header.
    Supports both introspection and local JWT validation.
    """

    def authenticate(self, request):
        """Authenticate the request using OAuth2 Bearer token.

        Args:
            request: Django request object

        Returns:
            Tuple of (user, auth) or None if authentication not attempted

        Raises:
            AuthenticationFailed: If authentication fails
        """
        if not settings.OAUTH2_SERVICE_ENABLED:
            return None

        token = self.get_token(request)
        if token is None:
            return None

        return (self.verify_token(token), token)

    def get_token(self, request) -> str | None:
        """Extract the bearer token from the Authorization header."""
        auth_header = request.headers.get("authorization")
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise exceptions.AuthenticationFailed("Invalid authorization header format")

        return parts[1]

    def verify_token(self, token: str) -> OAuth2User:
        """Validate a raw access token and build the authenticated identity.

        Raises:
            AuthenticationFailed: If the token is invalid or has no subject
        """
        if settings.OAUTH2_INTROSPECTION_ENABLED:
            token_data = self._validate_via_introspection(token)
        else:
            token_data = self._validate_via_jwt(token)

        user_id = token_data.get("user_id") or token_data.get("sub")
        if not user_id:
            logger.warning("Token has no subject")
            raise exceptions.AuthenticationFailed("Token is not bound to a user")

        return OAuth2User(
            user_id=str(user_id),
            client_id=token_data.get("client_id") or "unknown",
            scopes=token_data.get("scopes") or [],
        )

    def _validate_via_introspection(self, token: str) -> dict[str, Any]:
        """Validate token via the auth service introspection endpoint.

        Raises:
            AuthenticationFailed: If token is invalid
        """
        cache_key = f"{settings.OAUTH2_TOKEN_CACHE_PREFIX}{token[:16]}"
        cached_data = cache.get(cache_key)
        if cached_data:
            logger.debug("Using cached token introspection result")
            return cast("dict[str, Any]", cached_data)

        try:
            logger.debug("Calling token introspection endpoint")
            response = requests.post(
                settings.OAUTH2_INTROSPECT_URL,
                data={
                    "token": token,
                    "token_type_hint": "access_token",
                },
                auth=(settings.OAUTH2_CLIENT_ID, settings.OAUTH2_CLIENT_SECRET),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=5,
            )
        except requests.RequestException as e:
            logger.error("Token introspection request failed", error=str(e))
            raise exceptions.AuthenticationFailed(
                "Token validation service unavailable"
            ) from e

        if response.status_code != 200:
            logger.warning(
                "Token introspection failed",
                status_code=response.status_code,
            )
            raise exceptions.AuthenticationFailed("Token introspection failed")

        data = response.json()

        if not data.get("active", False):
            logger.info("Token is not active")
            raise exceptions.AuthenticationFailed("Token is not active")

        if isinstance(data.get("scope"), str) and "scopes" not in data:
            data["scopes"] = data["scope"].split()

        cache.set(cache_key, data, timeout=settings.OAUTH2_TOKEN_CACHE_TTL)

        return cast("dict[str, Any]", data)

    def _validate_via_jwt(self, token: str) -> dict[str, Any]:
        """Validate token locally by verifying the JWT signature.

        Raises:
            AuthenticationFailed: If token is invalid
        """
        if not settings.JWT_SECRET:
            logger.error("JWT_SECRET not configured but local validation is enabled")
            raise exceptions.AuthenticationFailed("JWT validation not configured")

        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=["HS256", "HS384", "HS512"],
                options={
                    "verify_signature": True,
                    "verify_exp": True,
                    "verify_iat": True,
                    "verify_nbf": True,
                },
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("JWT token has expired")
            raise exceptions.AuthenticationFailed("Token has expired") from e
        except jwt.InvalidTokenError as e:
            logger.warning("Invalid JWT token", error=str(e))
            raise exceptions.AuthenticationFailed("Invalid token") from e

        token_type = payload.get("type")
        if token_type != "access_token":
            logger.warning("Invalid token type", token_type=token_type)
            raise exceptions.AuthenticationFailed(f"Invalid token type: {token_type}")

        return {
            "active": True,
            "sub": payload.get("sub"),
            "client_id": payload.get("client_id"),
            "scopes": payload.get("scopes", []),
            "user_id": payload.get("user_id"),
            "exp": payload.get("exp"),
            "iat": payload.get("iat"),
        }

    def authenticate_header(self, _request):
        """Return WWW-Authenticate header value for 401 responses."""
        return "Bearer"


class QueryTokenAuthentication(OAuth2Authentication):
    """Bearer authentication that also reads ``?access_token=`` from the URL.

    Only used by the live stream handshake.
    """

    def get_token(self, request) -> str | None:
        """Prefer the Authorization header, fall back to the query parameter."""
        token = super().get_token(request)
        if token is not None:
            return token
        return request.query_params.get(STREAM_TOKEN_QUERY_PARAM) or None
