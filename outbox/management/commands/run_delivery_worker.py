"""Run the outbound message delivery worker in the foreground."""

import signal
import threading

from django.conf import settings
from django.core.management.base import BaseCommand

import structlog

from outbox.apps import get_message_queue_service

logger = structlog.get_logger(__name__)


class Command(BaseCommand):
    """Connect the channel and deliver queued messages until signalled.

    SIGINT and SIGTERM stop the worker after its current tick and close the
    channel before the command exits.
    """

    help = "Deliver queued outbound messages until interrupted"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--interval-ms",
            type=int,
            default=settings.OUTBOX_TICK_INTERVAL_MS,
            help="Milliseconds between ticks",
        )
        parser.add_argument(
            "--once",
            action="store_true",
            help="Run a single tick and exit",
        )

    def handle(self, *args, **options):
        """Run the worker."""
        service = get_message_queue_service()
        service.channel.connect()

        if options["once"]:
            try:
                result = service.worker.tick()
            finally:
                service.channel.disconnect()
            self.stdout.write(
                f"Tick finished: sent={result.sent} "
                f"rescheduled={result.rescheduled} failed={result.failed} "
                f"released={result.released} recovered={result.recovered} "
                f"channel_ready={result.channel_ready}"
            )
            return

        shutdown = threading.Event()

        def request_shutdown(signum, _frame):
            logger.info("delivery_worker_shutdown_requested", signal=signum)
            shutdown.set()

        signal.signal(signal.SIGINT, request_shutdown)
        signal.signal(signal.SIGTERM, request_shutdown)

        service.start_processing(options["interval_ms"])
        self.stdout.write(
            self.style.SUCCESS(
                f"Delivery worker running every {options['interval_ms']} ms"
            )
        )

        try:
            while not shutdown.wait(timeout=1.0):
                pass
        finally:
            service.shutdown()
            self.stdout.write(self.style.SUCCESS("Delivery worker stopped"))
