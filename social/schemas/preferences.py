"""Delivery preference schema."""

from social.enums import DeliveryChannel
from social.schemas.base_schema_model import BaseSchemaModel


class DeliveryPreference(BaseSchemaModel):
    """Channel flags for one notification type; every channel defaults on."""

    email: bool = True
    push: bool = True
    in_app: bool = True

    def allows(self, channel: DeliveryChannel) -> bool:
        """Return True if the given channel is enabled."""
        return bool(getattr(self, DeliveryChannel(channel).value))
