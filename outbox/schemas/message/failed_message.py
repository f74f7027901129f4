"""Schema for a permanently failed message."""

from pydantic import Field

from outbox.schemas.base_schema_model import BaseSchemaModel


class FailedMessage(BaseSchemaModel):
    """Failed message as listed for operators deciding whether to retry."""

    id: str = Field(..., description="Message ID")
    recipient: str = Field(..., description="Recipient address")
    body: str = Field(..., description="Message text")
    error_message: str | None = Field(None, description="Last failure reason")
    retry_count: int = Field(..., description="Rescheduled attempts before failing")
