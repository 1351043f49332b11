"""
SQLAlchemy models and database setup for the admin core.
"""

from .db_base import JSON, OrderedJSON, TimestampMixin, UUIDMixin, utc_now
from .db_config import (
    Base,
    DatabaseConfig,
    DatabaseManager,
    close_db,
    get_db_manager,
    get_development_config,
    get_production_config,
    import_all_models,
    initialize_db,
    set_db_manager,
)
from .db_credential_models import SystemCredential, TenantCredential
from .db_module_models import SaaSModule
from .db_provider_models import CredentialProvider, StorageProvider
from .db_storage_models import StorageConfig
from .db_tenant_models import Tenant

__all__ = [
    # Base definitions
    "Base",
    "JSON",
    "OrderedJSON",
    "TimestampMixin",
    "UUIDMixin",
    "utc_now",
    # Configuration
    "DatabaseConfig",
    "DatabaseManager",
    "close_db",
    "get_db_manager",
    "get_development_config",
    "get_production_config",
    "import_all_models",
    "initialize_db",
    "set_db_manager",
    # Models
    "CredentialProvider",
    "StorageProvider",
    "SystemCredential",
    "TenantCredential",
    "StorageConfig",
    "SaaSModule",
    "Tenant",
]
