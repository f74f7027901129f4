"""Record of one-off notifications that have already been sent."""

from datetime import datetime, timedelta

from django.db import IntegrityError, transaction
from django.utils import timezone

from outbox.models import NotificationLog


class NotificationDedup:
    """Answers "was this notification already sent?" per subject and type."""

    def was_already_sent(self, subject_id: str, notification_type: str) -> bool:
        """Return whether the notification has been recorded as sent."""
        return NotificationLog.objects.filter(
            subject_id=subject_id,
            notification_type=notification_type,
        ).exists()

    def record_sent(
        self,
        subject_id: str,
        notification_type: str,
        sent_at: datetime | None = None,
    ) -> bool:
        """Record the notification as sent.

        Returns:
            False if it had already been recorded
        """
        try:
            with transaction.atomic():
                NotificationLog.objects.create(
                    subject_id=subject_id,
                    notification_type=notification_type,
                    sent_at=sent_at or timezone.now(),
                )
        except IntegrityError:
            return False
        return True

    def delete_older_than(self, window: timedelta, now: datetime | None = None) -> int:
        """Forget notifications recorded before ``now - window``.

        Returns:
            Number of deleted entries
        """
        cutoff = (now or timezone.now()) - window
        deleted, _per_model = NotificationLog.objects.filter(sent_at__lt=cutoff).delete()
        return deleted
