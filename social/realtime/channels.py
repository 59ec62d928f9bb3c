"""Channel handles: the transport end of one live connection."""

import json
import queue
import uuid
from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from social.schemas import RealtimeMessage

# Enqueued by close() to wake a blocked reader
_CLOSE = object()


class ChannelClosedError(Exception):
    """Raised when sending to a channel whose connection has gone away."""


@runtime_checkable
class ChannelHandle(Protocol):
    """What the presence registry stores for a connected user."""

    channel_id: str

    @property
    def closed(self) -> bool:
        """Whether the underlying connection has ended."""
        ...

    def send(self, message: RealtimeMessage) -> None:
        """Deliver one message or raise."""
        ...

    def close(self) -> None:
        """End the connection."""
        ...


class QueueChannel:
    """In-process channel backing one Server-Sent Events response.

    Producers call ``send`` from request threads; the streaming response
    drains the queue through ``iter_frames``.
    """

    def __init__(self, user_id: str, max_pending: int = 100):
        self.channel_id = uuid.uuid4().hex
        self.user_id = user_id
        self._queue: queue.Queue = queue.Queue(maxsize=max_pending)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, message: RealtimeMessage) -> None:
        """Queue a message for the stream.

        Raises:
            ChannelClosedError: If the stream has ended or the client stopped
                reading and the buffer is full.
        """
        if self._closed:
            raise ChannelClosedError(f"channel {self.channel_id} is closed")
        try:
            self._queue.put_nowait(message)
        except queue.Full as e:
            self.close()
            raise ChannelClosedError(f"channel {self.channel_id} is not draining") from e

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._queue.put_nowait(_CLOSE)
        except queue.Full:
            pass

    def iter_frames(self, heartbeat_seconds: float) -> Iterator[str]:
        """Yield SSE frames until the channel is closed.

        A comment frame is emitted whenever nothing was sent for
        ``heartbeat_seconds`` so proxies keep the connection open and a
        vanished client is detected on the next write.
        """
        while True:
            try:
                item = self._queue.get(timeout=heartbeat_seconds)
            except queue.Empty:
                if self._closed:
                    break
                yield ": keep-alive\n\n"
                continue
            if item is _CLOSE:
                break
            yield format_sse_frame(item)


def format_sse_frame(message: RealtimeMessage) -> str:
    """Encode a message as one ``text/event-stream`` frame."""
    payload = json.dumps(message.model_dump(mode="json"), separators=(",", ":"))
    return f"event: {message.type}\ndata: {payload}\n\n"
