"""Schema for the channel status returned by the status tracker."""

from datetime import datetime

from pydantic import Field

from outbox.schemas.base_schema_model import BaseSchemaModel


class ChannelStatusSnapshot(BaseSchemaModel):
    """Channel readiness, cumulative counters, and the live pending count."""

    is_ready: bool = Field(..., description="Whether the channel can send")
    last_heartbeat: datetime = Field(
        ..., description="Last readiness transition or liveness signal"
    )
    message_count: int = Field(..., description="Messages delivered", ge=0)
    error_count: int = Field(..., description="Messages permanently failed", ge=0)
    pending_count: int = Field(
        ..., description="Messages currently waiting for delivery", ge=0
    )
