"""Django signals for messaging channel readiness."""

from outbox.signals.channel_signals import channel_disconnected, channel_ready

__all__ = ["channel_disconnected", "channel_ready"]
