"""Constants used throughout the social graph service."""

# HTTP Headers
REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"

# Performance Thresholds
SLOW_REQUEST_THRESHOLD = 1.0  # seconds

# OAuth2 scopes
SCOPE_USER = "social:user"
SCOPE_ADMIN = "social:admin"

# Query parameter carrying the access token on the live stream handshake
STREAM_TOKEN_QUERY_PARAM = "access_token"

# Longest content snippet embedded in notification emails
EMAIL_SNIPPET_MAX_LENGTH = 150
