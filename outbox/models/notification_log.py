"""NotificationLog model: records which one-off notifications were sent."""

from typing import ClassVar

from django.db import models
from django.utils import timezone


class NotificationLog(models.Model):
    """One row per (subject, notification type) that has already been sent.

    Producers consult this table before enqueueing notifications that must
    go out at most once per subject and condition, such as the low-time
    warning for a hotspot user.

    Attributes:
        subject_id: Producer-defined subject key, e.g. ``"<phone>:<username>"``.
        notification_type: Producer-defined condition name.
        sent_at: When the notification was recorded as sent.
    """

    subject_id = models.CharField(
        max_length=255,
        help_text="Subject the notification was about",
    )
    notification_type = models.CharField(
        max_length=64,
        help_text="Kind of notification (e.g. low_time_warning)",
    )
    sent_at = models.DateTimeField(
        default=timezone.now,
        help_text="When the notification was sent",
    )

    class Meta:
        """Django model metadata."""

        db_table = "notification_log"
        managed = False
        unique_together: ClassVar[list[list[str]]] = [
            ["subject_id", "notification_type"]
        ]
        indexes: ClassVar[list] = [
            models.Index(fields=["sent_at"], name="notification_log_sent_idx"),
        ]

    def __str__(self) -> str:
        """Return string representation of the log entry."""
        return f"{self.notification_type} for {self.subject_id}"
