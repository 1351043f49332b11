"""
Schemas for provider-declared input fields.

A field schema is an ordered mapping ``{field_key: FieldSpec}``. Order is
significant: it is the order inputs are rendered in.
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import Field, field_validator

from ..enums import FieldType
from .mixins import CamelModel


class FieldOption(CamelModel):
    value: Any
    label: str


class FieldSpec(CamelModel):
    """
    One input declared by a provider.

    ``type`` keeps the declared string so unknown types survive for
    diagnostics; ``field_type`` is the member used for dispatch.
    """

    type: str = Field(default=FieldType.TEXT.value, description="Declared input type")
    label: str = Field(default="", description="Display label")
    required: bool = Field(default=False)
    default: Optional[Any] = Field(default=None)
    options: List[FieldOption] = Field(default_factory=list)
    help: Optional[str] = Field(default=None)

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, v):
        if v is None:
            return FieldType.TEXT.value
        return str(v).strip().lower()

    @field_validator("options", mode="before")
    @classmethod
    def normalize_options(cls, v):
        """Accept bare values as options, labelled with themselves."""
        if v is None:
            return []
        return [
            item if isinstance(item, (dict, FieldOption)) else {"value": item, "label": str(item)}
            for item in v
        ]

    @property
    def field_type(self) -> FieldType:
        return FieldType.parse(self.type)

    @property
    def is_known_type(self) -> bool:
        return self.type in {member.value for member in FieldType}


def parse_field_schema(raw: Optional[Mapping[str, Any]]) -> Dict[str, FieldSpec]:
    """
    Build an ordered ``{key: FieldSpec}`` from stored JSON.

    Missing labels default to the field key.
    """
    schema: Dict[str, FieldSpec] = {}
    for key, spec in (raw or {}).items():
        spec = FieldSpec.model_validate(spec or {})
        if not spec.label:
            spec = spec.model_copy(update={"label": key})
        schema[key] = spec
    return schema
