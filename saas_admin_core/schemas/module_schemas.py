from typing import Optional

from pydantic import Field

from ..constants import MODULE_CODE_PATTERN
from .mixins import CamelModel, IdMixin, TimestampMixin


class SaaSModuleBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    code: str = Field(..., pattern=MODULE_CODE_PATTERN, max_length=100)
    description: Optional[str] = None
    icon: str = "package"
    is_core: bool = False
    price: float = Field(0, ge=0)
    is_active: bool = True


class SaaSModuleCreate(SaaSModuleBase):
    pass


class SaaSModuleUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    code: Optional[str] = Field(None, pattern=MODULE_CODE_PATTERN, max_length=100)
    description: Optional[str] = None
    icon: Optional[str] = None
    is_core: Optional[bool] = None
    price: Optional[float] = Field(None, ge=0)
    is_active: Optional[bool] = None


class SaaSModuleRead(IdMixin, TimestampMixin, SaaSModuleBase):
    code: str
