"""Custom runserver command that skips migration checks.

The outbox tables are provisioned from ``db/schema.sql`` rather than Django
migrations, so the migration check would only add a startup warning and
a database round trip.
"""

from django.core.management.commands.runserver import Command as RunServer


class Command(RunServer):
    """Runserver without migration checks."""

    help = "Start development server without migration checks"

    def check_migrations(self, *_args, **_kwargs):
        """Skip migration checks - the schema is not managed by Django."""
        self.stdout.write(
            self.style.WARNING(
                "Skipping migration checks (outbox schema is provisioned externally)"
            )
        )
