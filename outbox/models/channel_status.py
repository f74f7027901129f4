"""ChannelStatus model: singleton row describing the messaging channel."""

from django.db import models
from django.utils import timezone

from outbox.constants import CHANNEL_STATUS_ID


class ChannelStatus(models.Model):
    """Readiness of the messaging channel plus cumulative delivery counters.

    Exactly one row (``id = 1``) exists; use ``ChannelStatus.load()`` rather
    than querying directly.

    Attributes:
        is_ready: Whether the channel is currently usable for sending.
        last_heartbeat: Last readiness transition or liveness signal.
        message_count: Messages that reached ``sent``.
        error_count: Messages that reached ``failed``.
        updated_at: Last modification time.
    """

    id = models.PositiveSmallIntegerField(primary_key=True, default=CHANNEL_STATUS_ID)
    is_ready = models.BooleanField(
        default=False,
        help_text="Whether the channel is usable for sending",
    )
    last_heartbeat = models.DateTimeField(
        default=timezone.now,
        help_text="Last readiness transition or liveness signal",
    )
    message_count = models.PositiveIntegerField(
        default=0,
        help_text="Cumulative count of sent messages",
    )
    error_count = models.PositiveIntegerField(
        default=0,
        help_text="Cumulative count of permanently failed messages",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the status was last updated",
    )

    class Meta:
        """Django model metadata."""

        db_table = "bot_status"
        managed = False
        verbose_name_plural = "channel status"

    def __str__(self) -> str:
        """Return string representation of channel status."""
        state = "ready" if self.is_ready else "not ready"
        return f"channel {state} (sent={self.message_count}, failed={self.error_count})"

    @classmethod
    def load(cls) -> "ChannelStatus":
        """Return the singleton row, creating it on first use."""
        status, _created = cls.objects.get_or_create(pk=CHANNEL_STATUS_ID)
        return status
