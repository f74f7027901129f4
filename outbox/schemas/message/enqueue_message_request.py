"""Request schema for adding a message to the queue."""

from datetime import datetime

from pydantic import Field

from outbox.constants import DEFAULT_MAX_RETRIES, DEFAULT_PRIORITY
from outbox.schemas.base_schema_model import BaseSchemaModel


class EnqueueMessageRequest(BaseSchemaModel):
    """Body of ``POST /queue/messages``.

    Emptiness of ``phone_number`` and ``message`` is checked by the queue
    itself so HTTP and in-process producers get the same error.
    """

    phone_number: str = Field(..., description="Recipient phone number")
    message: str = Field(..., description="Message text")
    priority: int = Field(DEFAULT_PRIORITY, description="Higher is delivered first")
    scheduled_at: datetime | None = Field(
        None, description="Earliest delivery time (ISO 8601, timezone-aware)"
    )
    max_retries: int = Field(
        DEFAULT_MAX_RETRIES, description="Retry budget", ge=0, le=20
    )
