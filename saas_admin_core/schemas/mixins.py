"""
Common Pydantic schema bases.

The admin console speaks camelCase while the tables are snake_case.
CamelModel maps between the two with pydantic's alias generator, so
``Model.model_validate(view_dict)`` accepts camelCase and
``model_dump()`` yields column names.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every admin core schema."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
        str_strip_whitespace=True,
    )

    def to_view(self) -> dict:
        """camelCase dictionary for the console."""
        return self.model_dump(mode="json", by_alias=True)


class IdMixin(CamelModel):
    id: str = Field(..., description="Unique identifier for the record")


class TimestampMixin(CamelModel):
    created_at: Optional[datetime] = Field(None, description="When the record was created")
    updated_at: Optional[datetime] = Field(None, description="When the record was last updated")
