"""Thread-local correlation context for HTTP requests and worker ticks.

HTTP requests carry the ``X-Request-ID`` value; delivery worker ticks and
retention sweeps get a generated ``tick-...`` / ``sweep-...`` identifier so
every log line emitted while handling one batch can be grouped together.
"""

import threading
import uuid
from collections.abc import Iterator
from contextlib import contextmanager

_correlation_context = threading.local()


def set_correlation_id(correlation_id: str) -> None:
    """Store the correlation ID in thread-local storage.

    Args:
        correlation_id: The request or tick identifier to store.
    """
    _correlation_context.correlation_id = correlation_id


def get_correlation_id() -> str | None:
    """Retrieve the correlation ID from thread-local storage.

    Returns:
        The current correlation ID, or None if not set.
    """
    return getattr(_correlation_context, "correlation_id", None)


def clear_correlation_id() -> None:
    """Clear the correlation ID from thread-local storage."""
    if hasattr(_correlation_context, "correlation_id"):
        delattr(_correlation_context, "correlation_id")


@contextmanager
def bind_correlation_id(prefix: str) -> Iterator[str]:
    """Bind a fresh ``<prefix>-<hex>`` correlation ID for the enclosed block.

    The previous value (if any) is restored on exit, so a manual tick run
    inside a request keeps the request's ID afterwards.

    Args:
        prefix: Short label for the unit of work, e.g. ``"tick"``.

    Yields:
        The generated correlation ID.
    """
    previous = get_correlation_id()
    correlation_id = f"{prefix}-{uuid.uuid4().hex[:12]}"
    set_correlation_id(correlation_id)
    try:
        yield correlation_id
    finally:
        if previous is None:
            clear_correlation_id()
        else:
            set_correlation_id(previous)
