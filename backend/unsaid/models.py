from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel

class CustomModel(BaseModel):
    """
    Common base for every pydantic schema in the project.

    Fields are declared in snake_case and exchanged with clients in camelCase
    (`display_name` <-> `displayName`); both spellings are accepted on input.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,

        # build schemas straight from SQLAlchemy objects
        from_attributes=True,

        extra="forbid",
    )

    @field_serializer("created_at", "updated_at", check_fields=False)
    def serialize_datetime(self, value):
        """Timestamps are rendered as ISO 8601 in UTC; naive values are taken to be UTC already."""
        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            else:
                value = value.astimezone(timezone.utc)
            return value.isoformat()
        return value
