"""Logging utilities for the notifier service."""

from outbox.logging.config import setup_logging
from outbox.logging.context import (
    bind_correlation_id,
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)

__all__ = [
    "bind_correlation_id",
    "clear_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
    "setup_logging",
]
