"""Message queue schemas."""

from outbox.schemas.message.channel_status_snapshot import ChannelStatusSnapshot
from outbox.schemas.message.cleanup_request import CleanupRequest
from outbox.schemas.message.enqueue_message_request import EnqueueMessageRequest
from outbox.schemas.message.enqueue_message_response import EnqueueMessageResponse
from outbox.schemas.message.failed_message import FailedMessage
from outbox.schemas.message.message_detail import MessageDetail
from outbox.schemas.message.message_stats import MessageStats
from outbox.schemas.message.processing_control_request import (
    ProcessingAction,
    ProcessingControlRequest,
)
from outbox.schemas.message.queue_overview_response import QueueOverviewResponse
from outbox.schemas.message.sweep_result import SweepResult

__all__ = [
    "ChannelStatusSnapshot",
    "CleanupRequest",
    "EnqueueMessageRequest",
    "EnqueueMessageResponse",
    "FailedMessage",
    "MessageDetail",
    "MessageStats",
    "ProcessingAction",
    "ProcessingControlRequest",
    "QueueOverviewResponse",
    "SweepResult",
]
