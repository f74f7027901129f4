"""Request schema for an on-demand retention sweep."""

from pydantic import Field

from outbox.constants import MAX_RETENTION_DAYS
from outbox.schemas.base_schema_model import BaseSchemaModel


class CleanupRequest(BaseSchemaModel):
    """Body of ``POST /queue/cleanup``."""

    retention_days: int | None = Field(
        None,
        description="Age in days after which terminal messages are deleted",
        ge=0,
        le=MAX_RETENTION_DAYS,
        strict=True,
    )
