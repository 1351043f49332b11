"""
Schemas for system and tenant credentials.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field, model_validator

from .mixins import CamelModel, IdMixin, TimestampMixin


class CredentialBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    provider: str = Field(..., min_length=1)
    auth_type: str = Field(..., min_length=1)
    credentials: Dict[str, Any] = Field(default_factory=dict)
    is_active: bool = True
    expires_at: Optional[datetime] = None


class SystemCredentialCreate(CredentialBase):
    pass


class SystemCredentialUpdate(CamelModel):
    """Partial update; unset fields are left untouched."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    provider: Optional[str] = None
    auth_type: Optional[str] = None
    credentials: Optional[Dict[str, Any]] = None
    is_active: Optional[bool] = None
    expires_at: Optional[datetime] = None


class SystemCredentialRead(IdMixin, TimestampMixin, CredentialBase):
    name: str
    auth_type: str


class TenantCredentialCreate(CredentialBase):
    tenant_id: str = Field(..., min_length=1)
    override_system: bool = False
    system_credential_id: Optional[str] = None

    @model_validator(mode="after")
    def check_override_target(self):
        if self.override_system and not self.system_credential_id:
            raise ValueError("system_credential_id is required when override_system is set")
        return self


class TenantCredentialUpdate(SystemCredentialUpdate):
    override_system: Optional[bool] = None
    system_credential_id: Optional[str] = None


class TenantCredentialRead(IdMixin, TimestampMixin, CredentialBase):
    name: str
    auth_type: str
    tenant_id: str
    override_system: bool = False
    system_credential_id: Optional[str] = None
