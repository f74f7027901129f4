"""Retention sweeps for terminal messages and expired dedup entries."""

from datetime import datetime, timedelta

import structlog

from outbox.constants import DEFAULT_DEDUP_RETENTION_WINDOW, DEFAULT_RETENTION_WINDOW
from outbox.logging import bind_correlation_id
from outbox.repositories import MessageRepository
from outbox.schemas.message import SweepResult
from outbox.services.notification_dedup import NotificationDedup

logger = structlog.get_logger(__name__)


class RetentionCleaner:
    """Deletes rows that no longer need to be kept.

    Only ``sent`` and ``failed`` messages are ever deleted. A message stuck
    in ``processing`` is left for the delivery worker to recover.
    """

    def __init__(
        self,
        repository: MessageRepository,
        dedup: NotificationDedup | None = None,
        dedup_retention_window: timedelta = DEFAULT_DEDUP_RETENTION_WINDOW,
    ) -> None:
        """Initialize the retention cleaner.

        Args:
            repository: Message store
            dedup: Notification dedup log
            dedup_retention_window: How long dedup entries are kept
        """
        self.repository = repository
        self.dedup = dedup or NotificationDedup()
        self.dedup_retention_window = dedup_retention_window

    def sweep(
        self,
        retention_window: timedelta = DEFAULT_RETENTION_WINDOW,
        now: datetime | None = None,
    ) -> SweepResult:
        """Run one retention sweep.

        Args:
            retention_window: Age after which terminal messages are deleted
            now: Reference time (defaults to the current time)

        Returns:
            SweepResult with the number of deleted rows
        """
        if retention_window < timedelta(0):
            raise ValueError("retention_window must not be negative")

        with bind_correlation_id("sweep"):
            deleted_messages = self.repository.delete_terminal_older_than(
                retention_window, now=now
            )
            deleted_dedup_entries = self.dedup.delete_older_than(
                self.dedup_retention_window, now=now
            )

            logger.info(
                "retention_sweep_completed",
                retention_days=retention_window.days,
                deleted_messages=deleted_messages,
                deleted_dedup_entries=deleted_dedup_entries,
            )

        return SweepResult(
            deleted_messages=deleted_messages,
            deleted_dedup_entries=deleted_dedup_entries,
        )
