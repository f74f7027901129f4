"""Request schema for starting or stopping the delivery worker."""

from enum import Enum

from pydantic import Field

from outbox.schemas.base_schema_model import BaseSchemaModel


class ProcessingAction(str, Enum):
    """Worker control actions."""

    START = "start"
    STOP = "stop"


class ProcessingControlRequest(BaseSchemaModel):
    """Body of ``POST /queue/processing``."""

    action: ProcessingAction = Field(..., description="start or stop")
    tick_interval_ms: int | None = Field(
        None, description="Tick interval for start", ge=100, le=3_600_000
    )
