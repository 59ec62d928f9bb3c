"""Connection lifecycle messages and their handler."""

from dataclasses import dataclass

import structlog

from social.realtime.channels import ChannelHandle
from social.realtime.dispatcher import RealtimeDispatcher, realtime_dispatcher
from social.realtime.presence import PresenceRegistry
from social.services.unread_counter import UnreadCounterService, unread_counter_service

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Connected:
    """A user finished the handshake and opened ``channel``."""

    user_id: str
    channel: ChannelHandle


@dataclass(frozen=True)
class Disconnected:
    """The connection behind ``channel`` ended.

    ``channel`` may be omitted to drop whatever the user has registered.
    """

    user_id: str
    channel: ChannelHandle | None = None


class ConnectionManager:
    """Applies Connected/Disconnected messages to the presence registry.

    On connect the user's current unread count is pushed right away so the
    client badge is correct before any new event arrives.
    """

    def __init__(
        self,
        dispatcher: RealtimeDispatcher,
        unread_counter: UnreadCounterService,
        presence_registry: PresenceRegistry | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._unread_counter = unread_counter
        self._presence_registry = presence_registry

    def set_presence_registry(self, registry: PresenceRegistry) -> None:
        """Inject the process-wide presence registry."""
        self._presence_registry = registry

    def handle(self, message: Connected | Disconnected) -> None:
        """Consume one lifecycle message synchronously."""
        if self._presence_registry is None:
            raise RuntimeError("Presence registry is not configured")

        if isinstance(message, Connected):
            self._on_connected(message)
        elif isinstance(message, Disconnected):
            self._on_disconnected(message)
        else:
            raise TypeError(f"Unsupported connection message: {message!r}")

    def _on_connected(self, message: Connected) -> None:
        self._presence_registry.register(message.user_id, message.channel)
        logger.info(
            "user_connected",
            user_id=message.user_id,
            channel=message.channel.channel_id,
            connected_users=self._presence_registry.count(),
        )
        self._dispatcher.push_unread_count(
            message.user_id, self._unread_counter.get(message.user_id)
        )

    def _on_disconnected(self, message: Disconnected) -> None:
        removed = self._presence_registry.unregister(message.user_id, message.channel)
        if message.channel is not None:
            message.channel.close()
        logger.info(
            "user_disconnected",
            user_id=message.user_id,
            removed=removed,
            connected_users=self._presence_registry.count(),
        )


connection_manager = ConnectionManager(realtime_dispatcher, unread_counter_service)
