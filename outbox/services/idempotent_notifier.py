"""Producer helper that sends a notification at most once per subject."""

from django.db import transaction

import structlog

from outbox.repositories import MessageRepository
from outbox.services.notification_dedup import NotificationDedup

logger = structlog.get_logger(__name__)


class IdempotentNotifier:
    """Enqueue a notification unless the same one was already sent.

    Used for condition-triggered notifications such as a hotspot user's
    low-time warning, which should go out once per user until the dedup
    entry expires.
    """

    def __init__(
        self,
        repository: MessageRepository,
        dedup: NotificationDedup | None = None,
    ) -> None:
        """Initialize the notifier.

        Args:
            repository: Message store to enqueue into
            dedup: Notification dedup log
        """
        self.repository = repository
        self.dedup = dedup or NotificationDedup()

    def send_once(
        self,
        subject_id: str,
        notification_type: str,
        recipient: str,
        body: str,
        **options,
    ) -> str | None:
        """Enqueue the notification if it has not been sent before.

        The check, the enqueue, and the dedup record share one transaction,
        so a failed enqueue leaves no dedup entry behind.

        Args:
            subject_id: Producer-defined subject key
            notification_type: Producer-defined condition name
            recipient: Channel address of the recipient
            body: Message text
            **options: Extra ``enqueue`` arguments (priority, scheduled_at, max_retries)

        Returns:
            The new message ID, or None if the notification was already sent
        """
        with transaction.atomic():
            if self.dedup.was_already_sent(subject_id, notification_type):
                logger.debug(
                    "notification_already_sent",
                    subject_id=subject_id,
                    notification_type=notification_type,
                )
                return None

            message_id = self.repository.enqueue(recipient, body, **options)

            if not self.dedup.record_sent(subject_id, notification_type):
                # A concurrent producer got there first
                transaction.set_rollback(True)
                return None

        logger.info(
            "notification_enqueued_once",
            subject_id=subject_id,
            notification_type=notification_type,
            message_id=message_id,
        )
        return message_id
