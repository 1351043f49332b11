"""
Test fixtures for the admin core.

Provides the SQLite in-memory database shared by every test and resets
the global configuration between tests.
"""

import pytest
from sqlalchemy.orm import Session

from saas_admin_core.config import reset_config
from saas_admin_core.context.tenant_context import TenantContext
from saas_admin_core.db import (
    DatabaseConfig,
    DatabaseManager,
    import_all_models,
)
from saas_admin_core.db.db_config import Base, initialize_db, set_db_manager
from saas_admin_core.exceptions import clear_correlation_id


@pytest.fixture(scope="session")
def db_config() -> DatabaseConfig:
    """SQLite in-memory database configuration."""
    return DatabaseConfig(
        db_type="sqlite",
        database=":memory:",
        echo=False,
        development_mode=True,
    )


@pytest.fixture(scope="session")
def db_manager(db_config: DatabaseConfig) -> DatabaseManager:
    """Global database manager with every model registered."""
    import_all_models()
    manager = initialize_db(db_config)
    yield manager
    set_db_manager(None)
    manager.close()


@pytest.fixture(scope="function")
def db_session(db_manager: DatabaseManager) -> Session:
    """
    Fresh session and schema for each test.

    Tables are created before and dropped after every test so rows never
    leak between tests.
    """
    session = db_manager.get_session()
    Base.metadata.create_all(db_manager.engine)

    yield session

    session.rollback()
    session.close()
    db_manager.close_session()
    Base.metadata.drop_all(db_manager.engine)


@pytest.fixture(autouse=True)
def clean_globals():
    """Forget cached configuration, tenant and correlation id between tests."""
    reset_config()
    TenantContext.clear_current_tenant()
    clear_correlation_id()
    yield
    reset_config()
    TenantContext.clear_current_tenant()
    clear_correlation_id()


@pytest.fixture
def sample_tenant_id() -> str:
    return "tenant-acme"
