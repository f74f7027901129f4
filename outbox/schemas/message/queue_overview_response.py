"""Response schema for the queue overview endpoint."""

from pydantic import Field

from outbox.schemas.base_schema_model import BaseSchemaModel
from outbox.schemas.message.channel_status_snapshot import ChannelStatusSnapshot
from outbox.schemas.message.message_stats import MessageStats


class QueueOverviewResponse(BaseSchemaModel):
    """Channel status and message counts, as shown on the dashboard."""

    channel: ChannelStatusSnapshot = Field(..., description="Channel status")
    messages: MessageStats = Field(..., description="Counts per message status")
    worker_running: bool = Field(..., description="Whether the worker is ticking")
