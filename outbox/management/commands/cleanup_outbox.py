"""Delete old terminal messages from the outbound queue."""

from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from outbox.apps import get_message_queue_service
from outbox.constants import MAX_RETENTION_DAYS


class Command(BaseCommand):
    """Run one retention sweep."""

    help = "Delete sent and failed messages older than the retention window"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--days",
            type=int,
            default=settings.OUTBOX_RETENTION_DAYS,
            help="Retention window in days",
        )
        parser.add_argument(
            "--schedule",
            action="store_true",
            help="Register the repeating sweep with the RQ scheduler instead",
        )

    def handle(self, *args, **options):
        """Run the sweep."""
        if not 0 <= options["days"] <= MAX_RETENTION_DAYS:
            raise CommandError(f"--days must be between 0 and {MAX_RETENTION_DAYS}")

        if options["schedule"]:
            from outbox.jobs.maintenance_jobs import (  # noqa: PLC0415
                schedule_retention_sweeps,
            )

            job_id = schedule_retention_sweeps()
            self.stdout.write(self.style.SUCCESS(f"Scheduled retention sweep {job_id}"))
            return

        result = get_message_queue_service().cleanup(timedelta(days=options["days"]))
        self.stdout.write(
            self.style.SUCCESS(
                f"Deleted {result.deleted_messages} messages and "
                f"{result.deleted_dedup_entries} notification log entries"
            )
        )
