#!/usr/bin/env python
"""Script to run the Django development server."""

import os
import sys

from django.core.management import execute_from_command_line


def main():
    """Run the Django development server.

    Uses the custom 'runlocal' command that skips migration checks; the
    outbox tables are provisioned from db/schema.sql.
    """
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "notifier_service.settings")
    execute_from_command_line([sys.argv[0], "runlocal"])


if __name__ == "__main__":
    main()
