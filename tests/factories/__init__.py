"""Test data and fake collaborators for outbox tests."""

from datetime import timedelta

from django.utils import timezone

from faker import Faker

from outbox.enums import MessageStatus
from outbox.exceptions import ChannelSendError
from outbox.models import OutboundMessage, generate_message_id
from outbox.services.channel import ChannelClient

fake = Faker()


def create_message(**overrides) -> OutboundMessage:
    """Insert an outbound message directly, bypassing enqueue validation.

    Args:
        **overrides: Field values to use instead of the defaults

    Returns:
        The saved message
    """
    now = timezone.now()
    defaults = {
        "id": generate_message_id(),
        "recipient": fake.numerify("970599######"),
        "body": fake.sentence(),
        "status": MessageStatus.PENDING.value,
        "priority": 0,
        "scheduled_at": now,
        "created_at": now,
        "retry_count": 0,
        "max_retries": 3,
    }
    defaults.update(overrides)
    return OutboundMessage.objects.create(**defaults)


def days_ago(days: float):
    """Return an aware datetime ``days`` in the past."""
    return timezone.now() - timedelta(days=days)


class FakeChannelClient(ChannelClient):
    """In-memory channel that records sends and fails on request.

    Attributes:
        sent: (recipient, body) pairs accepted so far
        failures: Exceptions raised by the next sends, in order
    """

    def __init__(self, ready: bool = True) -> None:
        """Initialize the fake channel."""
        super().__init__()
        self._ready = ready
        self.sent: list[tuple[str, str]] = []
        self.failures: list[Exception] = []
        self.on_send = None
        self.connected = False

    def fail_next(self, times: int = 1, message: str = "Recipient unreachable") -> None:
        """Make the next ``times`` sends raise ChannelSendError."""
        self.failures.extend(ChannelSendError(message) for _ in range(times))

    def set_ready(self, is_ready: bool) -> None:
        """Simulate a readiness transition (sends the signals)."""
        self._set_ready(is_ready, reason=None if is_ready else "simulated")

    def send(self, recipient: str, body: str) -> None:
        """Record the message or raise the next queued failure."""
        if self.on_send is not None:
            self.on_send(recipient, body)
        if self.failures:
            raise self.failures.pop(0)
        self.sent.append((recipient, body))

    def connect(self) -> None:
        """Mark the fake as connected."""
        self.connected = True

    def disconnect(self) -> None:
        """Mark the fake as disconnected."""
        self.connected = False
