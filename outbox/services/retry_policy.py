"""Retry policy: decides what happens to a message after a delivery attempt.

The policy is a pure function of the message's retry counters, the attempt
outcome and the current time. It performs no I/O; the delivery worker
persists whatever it decides through the repository transitions.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from django.utils import timezone

from outbox.constants import DEFAULT_RETRY_BACKOFF
from outbox.enums import DeliveryOutcome, MessageStatus
from outbox.models import OutboundMessage


@dataclass(frozen=True)
class RetryDecision:
    """Next state for a message after one delivery attempt."""

    next_status: MessageStatus
    next_retry_count: int
    next_scheduled_at: datetime | None = None
    processed_at: datetime | None = None
    error_message: str | None = None

    @property
    def is_terminal(self) -> bool:
        """Whether the decision ends the message's lifecycle."""
        return self.next_status.is_terminal


class RetryPolicy:
    """Bounded retry with a non-decreasing backoff.

    ``backoff(n) = base_delay * multiplier ** n``. With the default
    multiplier of 1 every retry waits the same fixed delay; a multiplier
    above 1 gives exponential backoff.
    """

    def __init__(
        self,
        base_delay: timedelta = DEFAULT_RETRY_BACKOFF,
        multiplier: float = 1.0,
        max_delay: timedelta | None = None,
    ) -> None:
        """Initialize the retry policy.

        Args:
            base_delay: Delay before the first retry
            multiplier: Growth factor per retry (must be >= 1)
            max_delay: Optional cap on the delay

        Raises:
            ValueError: If the configuration could make backoff decrease
        """
        if multiplier < 1:
            raise ValueError("multiplier must be >= 1 so backoff never decreases")
        if base_delay < timedelta(0):
            raise ValueError("base_delay must not be negative")
        self.base_delay = base_delay
        self.multiplier = multiplier
        self.max_delay = max_delay

    def backoff(self, retry_count: int) -> timedelta:
        """Return the delay applied after a failure at ``retry_count``."""
        delay = self.base_delay * (self.multiplier**retry_count)
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay

    def decide(
        self,
        message: OutboundMessage,
        outcome: DeliveryOutcome,
        error: str | None = None,
        now: datetime | None = None,
    ) -> RetryDecision:
        """Map an attempt outcome onto the message's next state.

        Args:
            message: The message that was attempted
            outcome: Whether the channel accepted the message
            error: Failure reason (failure outcomes only)
            now: Reference time (defaults to the current time)

        Returns:
            RetryDecision describing the next status and fields
        """
        now = now or timezone.now()

        if outcome == DeliveryOutcome.SUCCESS:
            return RetryDecision(
                next_status=MessageStatus.SENT,
                next_retry_count=message.retry_count,
                processed_at=now,
            )

        error_message = error or "Unknown error"

        if message.retry_count < message.max_retries:
            return RetryDecision(
                next_status=MessageStatus.PENDING,
                next_retry_count=message.retry_count + 1,
                next_scheduled_at=now + self.backoff(message.retry_count),
                error_message=error_message,
            )

        return RetryDecision(
            next_status=MessageStatus.FAILED,
            next_retry_count=message.retry_count,
            processed_at=now,
            error_message=error_message,
        )
