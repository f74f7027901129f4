"""Schema for queue-wide message counts."""

from pydantic import Field

from outbox.schemas.base_schema_model import BaseSchemaModel


class MessageStats(BaseSchemaModel):
    """Number of messages in each lifecycle state."""

    total: int = Field(0, ge=0)
    pending: int = Field(0, ge=0)
    processing: int = Field(0, ge=0)
    sent: int = Field(0, ge=0)
    failed: int = Field(0, ge=0)
