"""Interface every messaging channel client implements."""

from abc import ABC, abstractmethod

from outbox.signals import channel_disconnected, channel_ready


class ChannelClient(ABC):
    """Adapter between the delivery worker and a concrete messaging channel.

    Implementations report readiness transitions through the
    ``channel_ready`` and ``channel_disconnected`` signals; use
    ``_set_ready()`` so a signal is only sent when the state actually changes.
    The first observed state always sends a signal, which overwrites whatever
    readiness a previous process left persisted.
    """

    def __init__(self) -> None:
        """Initialize the client with its readiness not yet observed."""
        self._ready: bool | None = None

    def is_ready(self) -> bool:
        """Return whether the channel can currently send messages."""
        return bool(self._ready)

    def poll_readiness(self) -> bool:
        """Refresh readiness from the channel and return it.

        Clients whose readiness is pushed to them need not override this.
        """
        return self.is_ready()

    @abstractmethod
    def send(self, recipient: str, body: str) -> None:
        """Deliver one message.

        Args:
            recipient: Channel address of the recipient
            body: Message text

        Raises:
            ChannelError: If the channel did not accept the message
        """

    @abstractmethod
    def connect(self) -> None:
        """Open the channel session."""

    @abstractmethod
    def disconnect(self) -> None:
        """Close the channel session."""

    def _set_ready(self, is_ready: bool, reason: str | None = None) -> None:
        if is_ready == self._ready:
            return
        self._ready = is_ready
        if is_ready:
            channel_ready.send(sender=type(self), client=self)
        else:
            channel_disconnected.send(sender=type(self), client=self, reason=reason)
