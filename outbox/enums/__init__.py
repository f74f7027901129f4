"""Enumerations for the outbox app."""

from outbox.enums.delivery_outcome import DeliveryOutcome
from outbox.enums.health_status import HealthStatus
from outbox.enums.message_status import MessageStatus

__all__ = ["DeliveryOutcome", "HealthStatus", "MessageStatus"]
