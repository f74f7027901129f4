"""Exception handling utilities for the notifier service."""

from outbox.exceptions.handlers import custom_exception_handler
from outbox.exceptions.queue_exceptions import (
    ChannelError,
    ChannelNotReadyError,
    ChannelSendError,
    ChannelUnavailableError,
    ConflictError,
    MaintenanceError,
    MessageNotFoundError,
    MessageQueueError,
    MessageValidationError,
    PermanentDeliveryError,
    TransientDeliveryError,
)

__all__ = [
    "ChannelError",
    "ChannelNotReadyError",
    "ChannelSendError",
    "ChannelUnavailableError",
    "ConflictError",
    "MaintenanceError",
    "MessageNotFoundError",
    "MessageQueueError",
    "MessageValidationError",
    "PermanentDeliveryError",
    "TransientDeliveryError",
    "custom_exception_handler",
]
