"""Pydantic schemas for the outbox API."""

from outbox.schemas.base_schema_model import BaseSchemaModel

__all__ = ["BaseSchemaModel"]
