"""Realtime wire envelope."""

from datetime import UTC, datetime
from typing import Any

from pydantic import Field

from social.enums import RealtimeEventType
from social.schemas.base_schema_model import BaseSchemaModel


class RealtimeMessage(BaseSchemaModel):
    """Envelope of every event pushed to a live channel."""

    type: RealtimeEventType
    data: dict[str, Any]
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
