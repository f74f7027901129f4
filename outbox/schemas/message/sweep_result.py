"""Schema for the result of a retention sweep."""

from pydantic import Field

from outbox.schemas.base_schema_model import BaseSchemaModel


class SweepResult(BaseSchemaModel):
    """Rows removed by one retention sweep."""

    deleted_messages: int = Field(0, description="Terminal messages deleted", ge=0)
    deleted_dedup_entries: int = Field(
        0, description="Expired notification log entries deleted", ge=0
    )
