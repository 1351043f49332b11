from sqlalchemy import Boolean, Column, String

from .db_base import JSON, TimestampMixin, UUIDMixin
from .db_config import Base


class Tenant(Base, UUIDMixin, TimestampMixin):
    """Customer organization. Read-only here, managed by the tenant screens."""

    __tablename__ = "tenants"

    name = Column(String(200), nullable=False)
    slug = Column(String(100), nullable=False, unique=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    config = Column(JSON, nullable=True)
