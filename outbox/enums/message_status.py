"""Outbound message lifecycle states."""

from enum import Enum


class MessageStatus(str, Enum):
    """Lifecycle state of a queued outbound message.

    ``pending`` messages wait to be selected, ``processing`` messages have
    been claimed by a delivery worker, and ``sent``/``failed`` are terminal.
    """

    PENDING = "pending"
    PROCESSING = "processing"
    SENT = "sent"
    FAILED = "failed"

    @classmethod
    def terminal(cls) -> tuple["MessageStatus", ...]:
        """Return the states no delivery worker ever leaves."""
        return (cls.SENT, cls.FAILED)

    @property
    def is_terminal(self) -> bool:
        """Whether this state is terminal."""
        return self in self.terminal()
