from sqlalchemy import BigInteger, Boolean, Column, DateTime, String, Text

from .db_base import JSON, TimestampMixin, UUIDMixin
from .db_config import Base


class StorageConfig(Base, UUIDMixin, TimestampMixin):
    """A usable storage binding: provider + credential + settings."""

    __tablename__ = "storage_configs"

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    provider = Column(String(100), nullable=False, index=True)
    config_type = Column(String(20), nullable=False, default="system")
    tenant_id = Column(String(36), nullable=True, index=True)

    # System or tenant credential id, depending on config_type
    credential_id = Column(String(36), nullable=True)

    settings = Column(JSON, nullable=False, default=dict)
    is_active = Column(Boolean, nullable=False, default=True)
    is_default = Column(Boolean, nullable=False, default=False)
    space_limit = Column(BigInteger, nullable=True)
    space_used = Column(BigInteger, nullable=True)
    last_sync_at = Column(DateTime(timezone=True), nullable=True)
    created_by = Column(String(36), nullable=True)
    updated_by = Column(String(36), nullable=True)
