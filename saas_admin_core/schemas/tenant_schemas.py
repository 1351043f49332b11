from typing import Any, Dict, Optional

from .mixins import CamelModel, IdMixin, TimestampMixin


class TenantRead(IdMixin, TimestampMixin, CamelModel):
    """Tenant as shown in tenant pickers."""

    name: str
    slug: str
    is_active: bool = True
    config: Optional[Dict[str, Any]] = None

    def get_config_value(self, key: str, default: Any = None) -> Any:
        return (self.config or {}).get(key, default)
