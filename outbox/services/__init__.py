"""Services for the outbox app."""

from outbox.services.delivery_worker import DeliveryWorker, TickResult
from outbox.services.health_service import HealthService
from outbox.services.idempotent_notifier import IdempotentNotifier
from outbox.services.message_queue_service import (
    MessageQueueService,
    build_message_queue_service,
)
from outbox.services.notification_dedup import NotificationDedup
from outbox.services.retention_cleaner import RetentionCleaner
from outbox.services.retry_policy import RetryDecision, RetryPolicy
from outbox.services.status_tracker import StatusTracker

__all__ = [
    "DeliveryWorker",
    "HealthService",
    "IdempotentNotifier",
    "MessageQueueService",
    "NotificationDedup",
    "RetentionCleaner",
    "RetryDecision",
    "RetryPolicy",
    "StatusTracker",
    "TickResult",
    "build_message_queue_service",
]
