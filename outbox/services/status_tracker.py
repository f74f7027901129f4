"""Status tracker for the messaging channel singleton row."""

from django.db.models import F
from django.utils import timezone

import structlog

from outbox.constants import CHANNEL_STATUS_ID
from outbox.models import ChannelStatus
from outbox.repositories import MessageRepository
from outbox.schemas.message import ChannelStatusSnapshot

logger = structlog.get_logger(__name__)


class StatusTracker:
    """Reads and updates channel readiness and cumulative delivery counters.

    Counters are bumped with ``F()`` expressions so concurrent workers never
    lose an increment.
    """

    def __init__(self, repository: MessageRepository | None = None) -> None:
        """Initialize the status tracker.

        Args:
            repository: Message repository used for the live pending count
        """
        self.repository = repository or MessageRepository()

    def _update(self, **fields) -> None:
        ChannelStatus.load()
        ChannelStatus.objects.filter(pk=CHANNEL_STATUS_ID).update(
            updated_at=timezone.now(), **fields
        )

    def set_ready(self, is_ready: bool) -> None:
        """Record a readiness transition."""
        self._update(is_ready=is_ready, last_heartbeat=timezone.now())

    def heartbeat(self) -> None:
        """Record that the channel is alive without changing readiness."""
        self._update(last_heartbeat=timezone.now())

    def increment_sent(self) -> None:
        """Count one message that reached ``sent``."""
        self._update(message_count=F("message_count") + 1)

    def increment_errors(self) -> None:
        """Count one message that reached ``failed``."""
        self._update(error_count=F("error_count") + 1)

    def is_ready(self) -> bool:
        """Return the persisted readiness flag."""
        return ChannelStatus.load().is_ready

    def get_status(self) -> ChannelStatusSnapshot:
        """Return the channel status with a live pending count."""
        status = ChannelStatus.load()
        return ChannelStatusSnapshot(
            is_ready=status.is_ready,
            last_heartbeat=status.last_heartbeat,
            message_count=status.message_count,
            error_count=status.error_count,
            pending_count=self.repository.count_pending(),
        )
