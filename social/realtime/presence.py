"""In-memory registry of users with a live connection."""

import threading
from uuid import UUID

import structlog

from social.realtime.channels import ChannelHandle

logger = structlog.get_logger(__name__)


class PresenceRegistry:
    """Maps each connected user id to exactly one channel handle.

    The registry is process-local and starts empty on every process start.
    A new registration for a user replaces the previous handle, so only the
    most recent connection receives pushes. Request threads and streaming
    responses touch it concurrently, hence the lock.
    """

    def __init__(self) -> None:
        self._channels: dict[str, ChannelHandle] = {}
        self._lock = threading.Lock()

    def register(self, user_id: UUID | str, channel: ChannelHandle) -> ChannelHandle | None:
        """Register ``channel`` for the user and return the handle it replaced."""
        key = str(user_id)
        with self._lock:
            previous = self._channels.get(key)
            self._channels[key] = channel

        if previous is not None and previous is not channel:
            logger.info(
                "presence_replaced",
                user_id=key,
                previous_channel=previous.channel_id,
                channel=channel.channel_id,
            )
        return previous

    def unregister(
        self, user_id: UUID | str, channel: ChannelHandle | None = None
    ) -> bool:
        """Remove the user's entry; safe to call when absent.

        When ``channel`` is given the entry is only removed if it still
        points at that channel, so a stale connection closing does not
        evict the one that replaced it.
        """
        key = str(user_id)
        with self._lock:
            current = self._channels.get(key)
            if current is None:
                return False
            if channel is not None and current is not channel:
                return False
            del self._channels[key]
        return True

    def get_channel(self, user_id: UUID | str) -> ChannelHandle | None:
        with self._lock:
            return self._channels.get(str(user_id))

    def is_online(self, user_id: UUID | str) -> bool:
        with self._lock:
            return str(user_id) in self._channels

    def count(self) -> int:
        """Number of distinct connected users."""
        with self._lock:
            return len(self._channels)

    def snapshot(self) -> list[tuple[str, ChannelHandle]]:
        """Copy of the current entries, safe to iterate without the lock."""
        with self._lock:
            return list(self._channels.items())

    def close_all(self) -> None:
        """Close every channel and empty the registry on shutdown."""
        with self._lock:
            channels = list(self._channels.values())
            self._channels.clear()
        for channel in channels:
            channel.close()
        if channels:
            logger.info("presence_registry_closed", closed_channels=len(channels))
