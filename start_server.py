"""Production server startup script for the notifier service.

This module provides the entry point for starting the Django application
with Gunicorn in production environments (Docker containers, Kubernetes).
The delivery worker runs separately (``manage.py run_delivery_worker``)
so scaling the web tier does not multiply senders.
"""

import os
import sys

from gunicorn.app.wsgiapp import run


def main():
    """Start the notifier service using Gunicorn.

    Binds to 0.0.0.0:$PORT (default 8000) with GUNICORN_WORKERS worker
    processes (default 2), 2 threads each, and logs to stdout/stderr for
    container log aggregation.
    """
    sys.argv = [
        "gunicorn",
        "notifier_service.wsgi:application",
        "--bind",
        f"0.0.0.0:{os.getenv('PORT', '8000')}",
        "--workers",
        os.getenv("GUNICORN_WORKERS", "2"),
        "--threads",
        "2",
        "--timeout",
        "60",
        "--access-logfile",
        "-",
        "--error-logfile",
        "-",
    ]
    run()


if __name__ == "__main__":
    main()
