"""
Read models for the provider catalogs.
"""

from typing import Dict, List, Optional, Union

from pydantic import Field, field_validator

from .field_schemas import FieldSpec, parse_field_schema
from .mixins import CamelModel


class ProviderBase(CamelModel):
    code: str = Field(..., min_length=1, description="Unique provider code")
    name: str = Field(..., description="Display name")
    description: Optional[str] = None
    icon: Optional[str] = None
    help_url: Optional[str] = None
    is_active: bool = True


class CredentialProviderRead(ProviderBase):
    """Credential provider with its per-auth-type field schemas."""

    auth_types: List[str] = Field(default_factory=list)
    fields: Dict[str, Dict[str, FieldSpec]] = Field(default_factory=dict)

    @field_validator("auth_types", mode="before")
    @classmethod
    def validate_auth_types(cls, v):
        return list(v or [])

    @field_validator("fields", mode="before")
    @classmethod
    def validate_fields(cls, v):
        return {auth_type: parse_field_schema(schema) for auth_type, schema in (v or {}).items()}

    def fields_for(self, auth_type: Optional[str]) -> Optional[Dict[str, FieldSpec]]:
        """Field schema for ``auth_type``, or None when the provider does not configure it."""
        if not auth_type:
            return None
        return self.fields.get(auth_type)

    @property
    def has_single_auth_type(self) -> bool:
        return len(self.auth_types) == 1


class StorageProviderRead(ProviderBase):
    """
    Storage provider.

    ``credential_providers`` is None when the provider never declared which
    credential providers it accepts.
    """

    credential_providers: Optional[List[str]] = None
    settings_schema: Dict[str, FieldSpec] = Field(default_factory=dict)
    features: List[str] = Field(default_factory=list)

    @field_validator("settings_schema", mode="before")
    @classmethod
    def validate_settings_schema(cls, v):
        return parse_field_schema(v)

    @field_validator("features", mode="before")
    @classmethod
    def validate_features(cls, v):
        return list(v or [])


ProviderRead = Union[CredentialProviderRead, StorageProviderRead]
