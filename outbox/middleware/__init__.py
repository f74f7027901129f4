"""Custom middleware for the notifier service."""

from outbox.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
