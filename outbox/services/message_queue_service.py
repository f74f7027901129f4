"""Producer-facing facade over the outbound message queue.

Producers only ever call ``enqueue`` and get an ID back; delivery happens
later on the delivery worker. Everything else here serves operators: status,
statistics, failed-message inspection, administrative retry, and cleanup.
"""

from datetime import datetime, timedelta

from django.conf import settings
from django.utils import timezone

import structlog

from outbox.constants import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_PRIORITY,
    DEFAULT_RETENTION_WINDOW,
)
from outbox.exceptions import MaintenanceError
from outbox.models import OutboundMessage
from outbox.repositories import MessageRepository
from outbox.schemas.message import (
    ChannelStatusSnapshot,
    FailedMessage,
    MessageStats,
    SweepResult,
)
from outbox.services.channel import ChannelClient, GatewayChannelClient
from outbox.services.delivery_worker import DeliveryWorker
from outbox.services.health_service import HealthService
from outbox.services.idempotent_notifier import IdempotentNotifier
from outbox.services.notification_dedup import NotificationDedup
from outbox.services.retention_cleaner import RetentionCleaner
from outbox.services.retry_policy import RetryPolicy
from outbox.services.status_tracker import StatusTracker

logger = structlog.get_logger(__name__)


class MessageQueueService:
    """Durable outbound message queue with background delivery."""

    def __init__(
        self,
        repository: MessageRepository,
        status_tracker: StatusTracker,
        channel: ChannelClient,
        worker: DeliveryWorker,
        cleaner: RetentionCleaner,
        notifier: IdempotentNotifier,
        health: HealthService,
        default_max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> None:
        """Initialize the service from its collaborators.

        Use ``build_message_queue_service()`` to wire it from settings.
        """
        self.repository = repository
        self.status_tracker = status_tracker
        self.channel = channel
        self.worker = worker
        self.cleaner = cleaner
        self.notifier = notifier
        self.health = health
        self.default_max_retries = default_max_retries

    def enqueue(
        self,
        recipient: str,
        body: str,
        priority: int = DEFAULT_PRIORITY,
        scheduled_at: datetime | None = None,
        max_retries: int | None = None,
    ) -> str:
        """Add a message to the queue.

        Never waits on the channel; delivery failures are not reported here.

        Args:
            recipient: Channel address of the recipient
            body: Message text
            priority: Higher values are delivered first
            scheduled_at: Earliest delivery time (defaults to now)
            max_retries: Retry budget (defaults to OUTBOX_DEFAULT_MAX_RETRIES)

        Returns:
            The new message ID

        Raises:
            MessageValidationError: If any argument is invalid
        """
        if max_retries is None:
            max_retries = self.default_max_retries

        message_id = self.repository.enqueue(
            recipient,
            body,
            priority=priority,
            scheduled_at=scheduled_at,
            max_retries=max_retries,
        )
        logger.info(
            "message_enqueued",
            message_id=message_id,
            priority=priority,
            scheduled_at=scheduled_at.isoformat() if scheduled_at else None,
        )
        return message_id

    def send_once(
        self,
        subject_id: str,
        notification_type: str,
        recipient: str,
        body: str,
        **options,
    ) -> str | None:
        """Enqueue a notification at most once per subject and type."""
        options.setdefault("max_retries", self.default_max_retries)
        return self.notifier.send_once(
            subject_id, notification_type, recipient, body, **options
        )

    def get_message(self, message_id: str) -> OutboundMessage:
        """Return a queued message.

        Raises:
            MessageNotFoundError: If no such message exists
        """
        return self.repository.get(message_id)

    def get_status(self) -> ChannelStatusSnapshot:
        """Return channel readiness, counters, and the live pending count."""
        return self.status_tracker.get_status()

    def get_message_stats(self) -> MessageStats:
        """Return the number of messages in each status."""
        return MessageStats(**self.repository.count_by_status())

    def list_failed(self) -> list[FailedMessage]:
        """Return permanently failed messages, oldest first."""
        return [
            FailedMessage.model_validate(message)
            for message in self.repository.list_failed()
        ]

    def retry(self, message_id: str) -> bool:
        """Requeue a failed message with a fresh retry budget.

        Args:
            message_id: ID of the failed message

        Returns:
            True if requeued, False if the message is not failed or the
            requeue could not be stored

        Raises:
            MessageNotFoundError: If no such message exists
        """
        message = self.repository.get(message_id)

        try:
            requeued = self.repository.requeue_failed(message.id, now=timezone.now())
        except Exception as e:
            error = MaintenanceError("retry", str(e), message_id=message_id)
            logger.error("message_retry_failed", message_id=message_id, error=str(error))
            return False

        if requeued:
            logger.info("message_requeued", message_id=message_id)
        else:
            logger.info(
                "message_retry_not_applicable",
                message_id=message_id,
                status=message.status,
            )
        return requeued

    def start_processing(self, tick_interval_ms: int | None = None) -> bool:
        """Start the delivery worker; does nothing if it is already running."""
        return self.worker.start(tick_interval_ms)

    def stop_processing(self, wait: bool = False) -> None:
        """Stop the delivery worker after its current tick."""
        self.worker.stop(wait=wait)

    @property
    def is_processing(self) -> bool:
        """Whether the delivery worker is running in this process."""
        return self.worker.is_running

    def cleanup(self, retention_window: timedelta = DEFAULT_RETENTION_WINDOW) -> SweepResult:
        """Delete terminal messages older than the retention window.

        Failures are logged and an empty result is returned.
        """
        try:
            return self.cleaner.sweep(retention_window)
        except Exception as e:
            error = MaintenanceError("cleanup", str(e))
            logger.error("cleanup_failed", error=str(error))
            return SweepResult()

    def shutdown(self) -> None:
        """Stop the worker, wait for its tick, and close the channel."""
        self.worker.stop(wait=True)
        self.channel.disconnect()


def build_message_queue_service(
    channel: ChannelClient | None = None,
) -> MessageQueueService:
    """Compose the message queue service from Django settings.

    Args:
        channel: Channel client to deliver through (defaults to the gateway client)

    Returns:
        A fully wired MessageQueueService
    """
    repository = MessageRepository()
    status_tracker = StatusTracker(repository)
    dedup = NotificationDedup()
    channel = channel or GatewayChannelClient()

    retry_policy = RetryPolicy(
        base_delay=timedelta(seconds=settings.OUTBOX_RETRY_BACKOFF_SECONDS),
        multiplier=settings.OUTBOX_RETRY_BACKOFF_MULTIPLIER,
    )
    worker = DeliveryWorker(
        repository=repository,
        status_tracker=status_tracker,
        channel=channel,
        retry_policy=retry_policy,
        batch_size=settings.OUTBOX_BATCH_SIZE,
        send_delay_ms=settings.OUTBOX_SEND_DELAY_MS,
        stuck_timeout=timedelta(seconds=settings.OUTBOX_STUCK_PROCESSING_SECONDS),
        tick_interval_ms=settings.OUTBOX_TICK_INTERVAL_MS,
    )
    cleaner = RetentionCleaner(
        repository,
        dedup=dedup,
        dedup_retention_window=timedelta(hours=settings.OUTBOX_DEDUP_RETENTION_HOURS),
    )

    return MessageQueueService(
        repository=repository,
        status_tracker=status_tracker,
        channel=channel,
        worker=worker,
        cleaner=cleaner,
        notifier=IdempotentNotifier(repository, dedup=dedup),
        health=HealthService(status_tracker),
        default_max_retries=settings.OUTBOX_DEFAULT_MAX_RETRIES,
    )
