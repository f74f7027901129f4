"""OutboundMessage model: one durable row per queued channel message.

The table doubles as the queue itself. Rows are inserted by ``enqueue``,
moved through their lifecycle only by the conditional transitions in
``MessageRepository`` and deleted only by the retention sweep.
"""

import secrets
import string
import time
from typing import ClassVar

from django.db import models
from django.utils import timezone

from outbox.constants import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_PRIORITY,
    MAX_RECIPIENT_LENGTH,
    MESSAGE_ID_PREFIX,
)
from outbox.enums import MessageStatus

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_message_id() -> str:
    """Return a new ``msg_<epoch-ms>_<9 base36 chars>`` identifier."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{MESSAGE_ID_PREFIX}_{int(time.time() * 1000)}_{suffix}"


class OutboundMessage(models.Model):
    """A message waiting for, undergoing, or done with delivery.

    Attributes:
        id: Opaque unique identifier assigned at enqueue time.
        recipient: Channel address (phone number or chat id).
        body: Text payload.
        status: pending, processing, sent or failed.
        priority: Higher values are delivered first.
        scheduled_at: The message is not eligible before this instant.
        created_at: Creation time, FIFO tiebreaker within a priority.
        claimed_at: When a worker last moved the message to processing.
        processed_at: When the message reached sent or failed.
        retry_count: Failed attempts that were rescheduled.
        max_retries: Retry budget; the attempt after the last retry is final.
        error_message: Last failure reason.
        updated_at: Last modification time.
    """

    STATUS_CHOICES: ClassVar[list[tuple[str, str]]] = [
        (status.value, status.name.title()) for status in MessageStatus
    ]

    id = models.CharField(
        primary_key=True,
        max_length=40,
        default=generate_message_id,
        editable=False,
        help_text="Unique identifier for the message",
    )
    recipient = models.CharField(
        max_length=MAX_RECIPIENT_LENGTH,
        db_column="phone_number",
        help_text="Channel address of the recipient",
    )
    body = models.TextField(
        db_column="message",
        help_text="Message text",
    )
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=MessageStatus.PENDING.value,
        help_text="Delivery status (pending, processing, sent, failed)",
    )
    priority = models.IntegerField(
        default=DEFAULT_PRIORITY,
        help_text="Higher priority messages are delivered first",
    )
    scheduled_at = models.DateTimeField(
        default=timezone.now,
        help_text="Earliest time the message may be delivered",
    )
    created_at = models.DateTimeField(
        default=timezone.now,
        editable=False,
        help_text="When the message was enqueued",
    )
    claimed_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When a delivery worker last claimed the message",
    )
    processed_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the message reached a terminal state",
    )
    retry_count = models.PositiveIntegerField(
        default=0,
        help_text="Number of failed attempts that were rescheduled",
    )
    max_retries = models.PositiveIntegerField(
        default=DEFAULT_MAX_RETRIES,
        help_text="Maximum number of rescheduled attempts",
    )
    error_message = models.TextField(
        null=True,
        blank=True,
        help_text="Reason for the last failed attempt",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the message was last updated",
    )

    class Meta:
        """Django model metadata."""

        db_table = "message_queue"
        managed = False
        ordering: ClassVar[list[str]] = ["-priority", "created_at", "id"]
        indexes: ClassVar[list] = [
            models.Index(
                fields=["status", "scheduled_at"],
                name="message_queue_eligible_idx",
            ),
            models.Index(
                fields=["status", "-priority", "created_at"],
                name="message_queue_order_idx",
            ),
            models.Index(
                fields=["status", "processed_at"],
                name="message_queue_retention_idx",
            ),
        ]

    def __str__(self) -> str:
        """Return string representation of the message."""
        return f"{self.id} to {self.recipient} ({self.status})"

    def __repr__(self) -> str:
        """Return detailed representation of the message."""
        return (
            f"<OutboundMessage(id={self.id}, "
            f"recipient={self.recipient}, "
            f"status={self.status}, "
            f"priority={self.priority}, "
            f"retry_count={self.retry_count}/{self.max_retries})>"
        )

    @property
    def is_terminal(self) -> bool:
        """Whether the message is sent or failed."""
        return MessageStatus(self.status).is_terminal

    @property
    def retries_remaining(self) -> int:
        """Number of failed attempts that would still be rescheduled."""
        return max(self.max_retries - self.retry_count, 0)
