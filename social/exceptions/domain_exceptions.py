"""Domain exceptions raised by the social graph and notification services."""


class SocialGraphError(Exception):
    """Base exception for caller-visible domain errors.

    Subclasses set ``code`` and ``status_code`` so the DRF exception handler
    can turn them into a typed error response without knowing each class.
    """

    code = "error"
    status_code = 400

    def __init__(self, message: str, detail: str | None = None):
        """Initialize domain error.

        Args:
            message: Error message shown to the caller.
            detail: Additional details about the failure.
        """
        self.message = message
        self.detail = detail
        super().__init__(message)


class InvalidOperationError(SocialGraphError):
    """The requested operation can never succeed (e.g. following yourself)."""

    code = "invalid_operation"
    status_code = 400


class ConflictError(SocialGraphError):
    """A follow edge already exists for the pair (409).

    ``code`` is ``already_following`` or ``request_pending`` so a caller can
    branch on the state of the existing edge.
    """

    status_code = 409

    ALREADY_FOLLOWING = "already_following"
    REQUEST_PENDING = "request_pending"

    def __init__(self, message: str, code: str, detail: str | None = None):
        """Initialize conflict error.

        Args:
            message: Error message.
            code: Machine-readable conflict reason.
            detail: Additional details about the conflict.
        """
        self.code = code
        super().__init__(message, detail)


class NotFoundError(SocialGraphError):
    """Relationship or notification does not exist (404)."""

    code = "not_found"
    status_code = 404


class ForbiddenError(SocialGraphError):
    """Acting on a resource that belongs to another user (403)."""

    code = "forbidden"
    status_code = 403


class DeliveryFailureError(Exception):
    """Email or realtime delivery failed.

    Never surfaced to the caller of the triggering operation; raised only
    inside background jobs so the queue can retry them.
    """

    def __init__(self, channel: str, user_id: str, message: str):
        """Initialize delivery failure.

        Args:
            channel: Channel that failed (email, realtime).
            user_id: Intended recipient.
            message: Underlying error message.
        """
        self.channel = channel
        self.user_id = user_id
        super().__init__(f"{channel} delivery to {user_id} failed: {message}")
