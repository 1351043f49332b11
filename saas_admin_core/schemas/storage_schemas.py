from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field, model_validator

from ..enums import ConfigType
from .mixins import CamelModel, IdMixin, TimestampMixin


class StorageConfigBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    provider: str = Field(..., min_length=1)
    config_type: ConfigType = ConfigType.SYSTEM
    tenant_id: Optional[str] = None
    credential_id: Optional[str] = None
    settings: Dict[str, Any] = Field(default_factory=dict)
    is_active: bool = True
    is_default: bool = False
    space_limit: Optional[int] = Field(None, ge=0)


class StorageConfigCreate(StorageConfigBase):
    @model_validator(mode="after")
    def check_tenant_scope(self):
        if self.config_type == ConfigType.TENANT.value and not self.tenant_id:
            raise ValueError("tenant_id is required for tenant configurations")
        return self


class StorageConfigUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    provider: Optional[str] = None
    config_type: Optional[ConfigType] = None
    tenant_id: Optional[str] = None
    credential_id: Optional[str] = None
    settings: Optional[Dict[str, Any]] = None
    is_active: Optional[bool] = None
    is_default: Optional[bool] = None
    space_limit: Optional[int] = Field(None, ge=0)


class StorageConfigRead(IdMixin, TimestampMixin, StorageConfigBase):
    name: str
    space_used: Optional[int] = None
    last_sync_at: Optional[datetime] = None
