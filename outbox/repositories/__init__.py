"""Data access for the outbox application."""

from outbox.repositories.message_repository import MessageRepository

__all__ = ["MessageRepository"]
