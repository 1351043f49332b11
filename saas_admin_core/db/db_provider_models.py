"""
Provider catalog models.

Rows are seeded by platform operators; the admin core only reads them.
"""

from sqlalchemy import Boolean, Column, String, Text

from .db_base import JSON, OrderedJSON, TimestampMixin
from .db_config import Base


class CredentialProvider(Base, TimestampMixin):
    """An identity/API provider credentials can be issued for."""

    __tablename__ = "credential_providers"

    code = Column(String(100), primary_key=True)
    name = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=True)
    icon = Column(String(100), nullable=True)
    auth_types = Column(JSON, nullable=False, default=list)

    # {auth_type: {field_key: field_spec}}, key order is render order
    fields = Column(OrderedJSON, nullable=False, default=dict)

    help_url = Column(String(500), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)


class StorageProvider(Base, TimestampMixin):
    """A storage vendor a configuration can target."""

    __tablename__ = "storage_providers"

    code = Column(String(100), primary_key=True)
    name = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=True)
    icon = Column(String(100), nullable=True)

    # Credential provider codes usable with this storage provider; NULL means undeclared
    credential_providers = Column(JSON, nullable=True)

    settings_schema = Column(OrderedJSON, nullable=False, default=dict)
    features = Column(JSON, nullable=False, default=list)
    help_url = Column(String(500), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
