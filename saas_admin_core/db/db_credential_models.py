"""
Credential models, system-wide and tenant-scoped.

Secret values live in the ``credentials`` JSON map keyed by the provider's
field keys.
"""

from sqlalchemy import Boolean, Column, DateTime, Index, String, Text

from .db_base import JSON, TimestampMixin, UUIDMixin
from .db_config import Base


class SystemCredential(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "system_credentials"

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    provider = Column(String(100), nullable=False)
    auth_type = Column(String(50), nullable=False)
    credentials = Column(JSON, nullable=False, default=dict)
    is_active = Column(Boolean, nullable=False, default=True)
    expires_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (Index("ix_system_credential_provider", "provider", "is_active"),)


class TenantCredential(Base, UUIDMixin, TimestampMixin):
    """
    Credential owned by one tenant.

    ``system_credential_id`` points at the system credential this one
    overrides. It is a plain column, not a foreign key: the system
    credential may be removed without touching tenant data.
    """

    __tablename__ = "tenant_credentials"

    tenant_id = Column(String(36), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    provider = Column(String(100), nullable=False)
    auth_type = Column(String(50), nullable=False)
    credentials = Column(JSON, nullable=False, default=dict)
    is_active = Column(Boolean, nullable=False, default=True)
    expires_at = Column(DateTime(timezone=True), nullable=True)
    override_system = Column(Boolean, nullable=False, default=False)
    system_credential_id = Column(String(36), nullable=True)

    __table_args__ = (
        Index("ix_tenant_credential_provider", "tenant_id", "provider", "is_active"),
    )
