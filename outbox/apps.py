"""Django application configuration for outbox."""

import logging

from django.apps import AppConfig, apps
from django.conf import settings

logger = logging.getLogger(__name__)


class OutboxConfig(AppConfig):
    """Configuration class for the outbox application.

    Holds the process-wide ``MessageQueueService``; views, jobs, and
    management commands reach it through ``get_message_queue_service()``.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "outbox"

    def __init__(self, app_name, app_module) -> None:
        """Initialize the app config without a service."""
        super().__init__(app_name, app_module)
        self.service = None

    def ready(self) -> None:
        """Connect signal receivers and build the message queue service."""
        from outbox.signals import receivers  # noqa: F401, PLC0415

        from outbox.services import build_message_queue_service  # noqa: PLC0415

        if not getattr(settings, "TEST_MODE", False):
            from outbox.logging import setup_logging  # noqa: PLC0415

            setup_logging()

        self.service = build_message_queue_service()
        logger.info("Message queue service initialized")

        if settings.OUTBOX_AUTOSTART:
            self.service.channel.connect()
            self.service.start_processing(settings.OUTBOX_TICK_INTERVAL_MS)


def get_message_queue_service():
    """Return the message queue service built when the app was loaded."""
    service = apps.get_app_config("outbox").service
    if service is None:
        raise RuntimeError("outbox app is not ready")
    return service
