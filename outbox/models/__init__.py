"""Database models for the outbox application."""

from outbox.models.channel_status import ChannelStatus
from outbox.models.notification_log import NotificationLog
from outbox.models.outbound_message import OutboundMessage, generate_message_id

__all__ = [
    "ChannelStatus",
    "NotificationLog",
    "OutboundMessage",
    "generate_message_id",
]
