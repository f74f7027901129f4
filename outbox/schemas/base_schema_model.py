"""Base pydantic model shared by all outbox API schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchemaModel(BaseModel):
    """Base pydantic model for request and response schemas.

    Request bodies may use camelCase (``phoneNumber``) as sent by the
    dashboard or snake_case; responses are dumped with field names.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
        str_strip_whitespace=True,
    )
