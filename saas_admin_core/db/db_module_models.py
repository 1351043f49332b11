from sqlalchemy import Boolean, Column, Numeric, String, Text

from .db_base import TimestampMixin, UUIDMixin
from .db_config import Base


class SaaSModule(Base, UUIDMixin, TimestampMixin):
    """A feature module tenants can subscribe to."""

    __tablename__ = "saas_modules"

    name = Column(String(200), nullable=False)
    code = Column(String(100), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    icon = Column(String(100), nullable=False, default="package")
    is_core = Column(Boolean, nullable=False, default=False)
    price = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
