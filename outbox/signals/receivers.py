"""Signal receivers that persist channel readiness transitions.

Imported from ``OutboxConfig.ready()`` so the receivers are connected once
the app registry is loaded.
"""

from django.dispatch import receiver

import structlog

from outbox.services.status_tracker import StatusTracker
from outbox.signals.channel_signals import channel_disconnected, channel_ready

logger = structlog.get_logger(__name__)


def _client_name(sender) -> str:
    return getattr(sender, "__name__", type(sender).__name__)


@receiver(channel_ready, dispatch_uid="outbox.record_channel_ready")
def record_channel_ready(sender, **kwargs) -> None:
    """Mark the channel ready when a client reports it can send.

    Args:
        sender: The channel client class
        **kwargs: Additional signal arguments
    """
    try:
        StatusTracker().set_ready(True)
        logger.info("channel_ready", client=_client_name(sender))
    except Exception as e:
        # Readiness is re-reported on the next poll
        logger.error("channel_ready_record_failed", error=str(e))


@receiver(channel_disconnected, dispatch_uid="outbox.record_channel_disconnected")
def record_channel_disconnected(sender, reason: str | None = None, **kwargs) -> None:
    """Mark the channel not ready when a client loses its session.

    Args:
        sender: The channel client class
        reason: Why the channel disconnected, if known
        **kwargs: Additional signal arguments
    """
    try:
        StatusTracker().set_ready(False)
        logger.warning(
            "channel_disconnected",
            client=_client_name(sender),
            reason=reason,
        )
    except Exception as e:
        logger.error("channel_disconnect_record_failed", error=str(e))
