"""Best-effort push of events to connected users."""

from typing import Any, NamedTuple
from uuid import UUID

import structlog

from social.enums import RealtimeEventType
from social.realtime.channels import ChannelClosedError
from social.realtime.presence import PresenceRegistry
from social.schemas import RealtimeMessage

logger = structlog.get_logger(__name__)


class BroadcastResult(NamedTuple):
    """Outcome of pushing one message to every connection."""

    delivered: int
    failed: int


class RealtimeDispatcher:
    """Pushes notification, unread-count and system events to live channels.

    Offline users are skipped silently: their notifications stay queryable
    through the notification list. A failing channel is logged, dropped
    from the registry when it is closed, and never raises to the caller.
    """

    def __init__(self, presence_registry: PresenceRegistry | None = None) -> None:
        self._presence_registry = presence_registry

    def set_presence_registry(self, registry: PresenceRegistry) -> None:
        """Inject the process-wide presence registry."""
        self._presence_registry = registry

    @property
    def presence_registry(self) -> PresenceRegistry | None:
        return self._presence_registry

    def send_notification(self, user_id: UUID | str, payload: dict[str, Any]) -> bool:
        """Push a ``new_notification`` event; returns whether it was delivered."""
        return self._push(user_id, RealtimeEventType.NEW_NOTIFICATION, payload)

    def push_unread_count(self, user_id: UUID | str, count: int) -> bool:
        """Push an ``unread_count`` event; returns whether it was delivered."""
        return self._push(user_id, RealtimeEventType.UNREAD_COUNT, {"count": count})

    def broadcast_system(self, message: str) -> BroadcastResult:
        """Push a ``system_notification`` to every connected user.

        A failing connection does not stop delivery to the others.
        """
        if self._presence_registry is None:
            return BroadcastResult(delivered=0, failed=0)

        envelope = RealtimeMessage(
            type=RealtimeEventType.SYSTEM_NOTIFICATION, data={"message": message}
        )
        delivered = 0
        failed = 0
        for user_id, channel in self._presence_registry.snapshot():
            if self._deliver(user_id, channel, envelope):
                delivered += 1
            else:
                failed += 1

        logger.info("system_broadcast_sent", delivered=delivered, failed=failed)
        return BroadcastResult(delivered=delivered, failed=failed)

    def _push(
        self, user_id: UUID | str, event_type: RealtimeEventType, data: dict[str, Any]
    ) -> bool:
        if self._presence_registry is None:
            return False

        channel = self._presence_registry.get_channel(user_id)
        if channel is None:
            logger.debug("realtime_recipient_offline", user_id=str(user_id))
            return False

        return self._deliver(
            str(user_id), channel, RealtimeMessage(type=event_type, data=data)
        )

    def _deliver(self, user_id: str, channel, envelope: RealtimeMessage) -> bool:
        try:
            channel.send(envelope)
        except ChannelClosedError as e:
            logger.info(
                "realtime_channel_closed",
                user_id=user_id,
                channel=channel.channel_id,
                error=str(e),
            )
            self._presence_registry.unregister(user_id, channel)
            channel.close()
            return False
        except Exception as e:
            logger.warning(
                "realtime_delivery_failed",
                user_id=user_id,
                event_type=envelope.type,
                error=str(e),
            )
            return False
        return True


realtime_dispatcher = RealtimeDispatcher()
