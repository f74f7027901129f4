"""Schema for a single queued message."""

from datetime import datetime

from pydantic import Field

from outbox.schemas.base_schema_model import BaseSchemaModel


class MessageDetail(BaseSchemaModel):
    """Full delivery state of one message."""

    id: str = Field(..., description="Message ID")
    recipient: str = Field(..., description="Recipient address")
    body: str = Field(..., description="Message text")
    status: str = Field(..., description="pending, processing, sent or failed")
    priority: int = Field(..., description="Delivery priority")
    scheduled_at: datetime = Field(..., description="Earliest delivery time")
    created_at: datetime = Field(..., description="When the message was queued")
    processed_at: datetime | None = Field(
        None, description="When the message reached sent or failed"
    )
    retry_count: int = Field(..., description="Rescheduled attempts so far")
    max_retries: int = Field(..., description="Retry budget")
    error_message: str | None = Field(None, description="Last failure reason")
