"""Live delivery layer: presence, channels and dispatch."""

from social.realtime.channels import (
    ChannelClosedError,
    ChannelHandle,
    QueueChannel,
    format_sse_frame,
)
from social.realtime.connections import (
    Connected,
    ConnectionManager,
    Disconnected,
    connection_manager,
)
from social.realtime.dispatcher import (
    BroadcastResult,
    RealtimeDispatcher,
    realtime_dispatcher,
)
from social.realtime.presence import PresenceRegistry

__all__ = [
    "BroadcastResult",
    "ChannelClosedError",
    "ChannelHandle",
    "Connected",
    "ConnectionManager",
    "Disconnected",
    "PresenceRegistry",
    "QueueChannel",
    "RealtimeDispatcher",
    "connection_manager",
    "format_sse_frame",
    "realtime_dispatcher",
]
