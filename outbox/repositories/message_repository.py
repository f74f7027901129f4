"""Repository for the durable outbound message queue.

Every state change goes through one of the conditional transitions below.
Each is a single ``UPDATE ... WHERE id = ? AND status = ?`` and reports
whether it applied, so two workers racing for the same row can never both
win: the loser's update matches zero rows and it simply moves on.
"""

from datetime import datetime, timedelta
from typing import Any

from django.db.models import Count, Q, QuerySet
from django.utils import timezone

from outbox.constants import DEFAULT_MAX_RETRIES, DEFAULT_PRIORITY, MAX_RECIPIENT_LENGTH
from outbox.enums import MessageStatus
from outbox.exceptions import MessageNotFoundError, MessageValidationError
from outbox.models import OutboundMessage

ELIGIBILITY_ORDERING = ("-priority", "created_at", "id")


class MessageRepository:
    """Message Store and Eligibility Selector for the outbound queue."""

    def enqueue(
        self,
        recipient: str,
        body: str,
        priority: int = DEFAULT_PRIORITY,
        scheduled_at: datetime | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> str:
        """Insert a new pending message and return its ID.

        Args:
            recipient: Channel address of the recipient
            body: Message text
            priority: Higher values are delivered first
            scheduled_at: Earliest delivery time (defaults to now)
            max_retries: Retry budget for failed attempts

        Returns:
            The new message ID

        Raises:
            MessageValidationError: If any argument is invalid
        """
        recipient = self._validate_text(recipient, "recipient")
        body = self._validate_text(body, "body")

        if len(recipient) > MAX_RECIPIENT_LENGTH:
            raise MessageValidationError(
                f"recipient must be at most {MAX_RECIPIENT_LENGTH} characters",
                field="recipient",
            )
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise MessageValidationError("priority must be an integer", field="priority")
        if (
            isinstance(max_retries, bool)
            or not isinstance(max_retries, int)
            or max_retries < 0
        ):
            raise MessageValidationError(
                "max_retries must be a non-negative integer", field="max_retries"
            )
        if scheduled_at is not None and timezone.is_naive(scheduled_at):
            raise MessageValidationError(
                "scheduled_at must be timezone-aware", field="scheduled_at"
            )

        now = timezone.now()
        message = OutboundMessage.objects.create(
            recipient=recipient,
            body=body,
            status=MessageStatus.PENDING.value,
            priority=priority,
            scheduled_at=scheduled_at or now,
            created_at=now,
            max_retries=max_retries,
        )
        return message.id

    @staticmethod
    def _validate_text(value: Any, field: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise MessageValidationError(f"{field} must not be empty", field=field)
        return value.strip() if field == "recipient" else value

    def get(self, message_id: str) -> OutboundMessage:
        """Return the message with the given ID.

        Raises:
            MessageNotFoundError: If no such message exists
        """
        try:
            return OutboundMessage.objects.get(pk=message_id)
        except OutboundMessage.DoesNotExist as e:
            raise MessageNotFoundError(message_id) from e

    def list_pending(self, limit: int | None = None) -> QuerySet[OutboundMessage]:
        """Return every pending message in delivery order, scheduled or not."""
        queryset = OutboundMessage.objects.filter(
            status=MessageStatus.PENDING.value
        ).order_by(*ELIGIBILITY_ORDERING)
        if limit is not None:
            queryset = queryset[:limit]
        return queryset

    def select_eligible(
        self, now: datetime | None = None, limit: int | None = None
    ) -> list[OutboundMessage]:
        """Return the next batch of deliverable messages.

        Eligible means ``pending`` with ``scheduled_at <= now``. The batch is
        ordered by priority (highest first), then creation time, then ID, so
        the order is total and stable across calls.

        Args:
            now: Reference time (defaults to the current time)
            limit: Maximum batch size

        Returns:
            List of eligible messages in delivery order
        """
        now = now or timezone.now()
        queryset = OutboundMessage.objects.filter(
            status=MessageStatus.PENDING.value,
            scheduled_at__lte=now,
        ).order_by(*ELIGIBILITY_ORDERING)
        if limit is not None:
            queryset = queryset[:limit]
        return list(queryset)

    def _transition(
        self,
        message_id: str,
        from_status: MessageStatus,
        to_status: MessageStatus,
        **fields: Any,
    ) -> bool:
        updated = OutboundMessage.objects.filter(
            pk=message_id, status=from_status.value
        ).update(status=to_status.value, updated_at=timezone.now(), **fields)
        return updated == 1

    def mark_processing(self, message_id: str, now: datetime | None = None) -> bool:
        """Claim a pending message for delivery (pending → processing)."""
        return self._transition(
            message_id,
            MessageStatus.PENDING,
            MessageStatus.PROCESSING,
            claimed_at=now or timezone.now(),
        )

    def mark_sent(self, message_id: str, processed_at: datetime | None = None) -> bool:
        """Record a successful delivery (processing → sent)."""
        return self._transition(
            message_id,
            MessageStatus.PROCESSING,
            MessageStatus.SENT,
            processed_at=processed_at or timezone.now(),
        )

    def reschedule(
        self,
        message_id: str,
        retry_count: int,
        scheduled_at: datetime,
        error_message: str,
    ) -> bool:
        """Return a failed attempt to the queue (processing → pending)."""
        return self._transition(
            message_id,
            MessageStatus.PROCESSING,
            MessageStatus.PENDING,
            retry_count=retry_count,
            scheduled_at=scheduled_at,
            error_message=error_message,
            claimed_at=None,
        )

    def mark_failed(
        self,
        message_id: str,
        error_message: str,
        processed_at: datetime | None = None,
    ) -> bool:
        """Record a permanent failure (processing → failed)."""
        return self._transition(
            message_id,
            MessageStatus.PROCESSING,
            MessageStatus.FAILED,
            error_message=error_message,
            processed_at=processed_at or timezone.now(),
        )

    def release_claim(self, message_id: str) -> bool:
        """Hand a claimed message back without consuming a retry."""
        return self._transition(
            message_id,
            MessageStatus.PROCESSING,
            MessageStatus.PENDING,
            claimed_at=None,
        )

    def requeue_failed(self, message_id: str, now: datetime | None = None) -> bool:
        """Reset a failed message to pending with a fresh retry budget."""
        return self._transition(
            message_id,
            MessageStatus.FAILED,
            MessageStatus.PENDING,
            retry_count=0,
            scheduled_at=now or timezone.now(),
            error_message=None,
            processed_at=None,
            claimed_at=None,
        )

    def delete_terminal_older_than(
        self, window: timedelta, now: datetime | None = None
    ) -> int:
        """Delete sent/failed messages processed before ``now - window``.

        Pending and processing messages are never deleted, whatever their age.

        Returns:
            Number of deleted messages
        """
        cutoff = (now or timezone.now()) - window
        deleted, _per_model = OutboundMessage.objects.filter(
            status__in=[status.value for status in MessageStatus.terminal()],
            processed_at__lt=cutoff,
        ).delete()
        return deleted

    def list_stuck_processing(
        self, older_than: timedelta, now: datetime | None = None
    ) -> list[OutboundMessage]:
        """Return processing messages claimed before ``now - older_than``."""
        cutoff = (now or timezone.now()) - older_than
        return list(
            OutboundMessage.objects.filter(
                status=MessageStatus.PROCESSING.value,
                claimed_at__lt=cutoff,
            ).order_by("claimed_at", "id")
        )

    def list_failed(self) -> QuerySet[OutboundMessage]:
        """Return permanently failed messages, oldest first."""
        return OutboundMessage.objects.filter(
            status=MessageStatus.FAILED.value
        ).order_by("created_at", "id")

    def count_pending(self) -> int:
        """Return the live number of pending messages."""
        return OutboundMessage.objects.filter(
            status=MessageStatus.PENDING.value
        ).count()

    def count_by_status(self) -> dict[str, int]:
        """Return message counts per status plus the overall total."""
        counts = OutboundMessage.objects.aggregate(
            total=Count("id"),
            **{
                status.value: Count("id", filter=Q(status=status.value))
                for status in MessageStatus
            },
        )
        return {key: value or 0 for key, value in counts.items()}
