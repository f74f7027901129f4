"""Response schema for a newly queued message."""

from pydantic import Field

from outbox.schemas.base_schema_model import BaseSchemaModel


class EnqueueMessageResponse(BaseSchemaModel):
    """Identifier producers can poll for delivery status."""

    message_id: str = Field(..., description="ID of the queued message")
    message: str = Field(
        "Message added to queue successfully", description="Human-readable result"
    )
