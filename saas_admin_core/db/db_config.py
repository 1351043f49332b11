import os
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, scoped_session, sessionmaker

from ..config import get_config
from ..exceptions import ErrorCode, ServiceError, ValidationError
from ..utils.logger import get_logger

# Base class for all SQLAlchemy models
Base: Any = declarative_base()


class DatabaseConfig(BaseModel):
    """Connection settings for one database. ``url`` wins over the discrete fields."""

    db_type: str = "postgres"
    database: str = ""
    host: Optional[str] = None
    port: str = "5432"
    username: Optional[str] = None
    password: Optional[str] = None
    url: Optional[str] = None
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: int = 30
    echo: bool = False
    development_mode: bool = False

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def get_connection_string(self) -> str:
        if self.url:
            return self.url
        if self.db_type.lower() == "postgres":
            if not all([self.host, self.database, self.username, self.password]):
                raise ValidationError(
                    "Missing required Postgres configuration parameters",
                    error_code=ErrorCode.MISSING_REQUIRED,
                    field="database_config",
                    value={"host": self.host, "database": self.database, "username": self.username},
                )
            return (
                f"postgresql+psycopg://{self.username}:{self.password}@"
                f"{self.host}:{self.port}/{self.database}"
            )
        elif self.db_type.lower() == "sqlite":
            return f"sqlite:///{self.database or ':memory:'}"
        raise ValidationError(
            f"Unsupported database type: {self.db_type}",
            error_code=ErrorCode.INVALID_FORMAT,
            field="db_type",
            value=self.db_type,
        )

    @property
    def is_sqlite(self) -> bool:
        return self.get_connection_string().startswith("sqlite")

    def __repr__(self) -> str:
        """Representation with the password masked."""
        return (
            f"DatabaseConfig("
            f"db_type='{self.db_type}', "
            f"host='{self.host}', "
            f"port='{self.port}', "
            f"database='{self.database}', "
            f"username='{self.username}', "
            f"password='***')"
        )


class DatabaseManager:
    """Owns the engine and session factories for one DatabaseConfig."""

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self.engine = self._create_engine()
        self.session_factory = sessionmaker(bind=self.engine)
        self.scoped_session = scoped_session(self.session_factory)

    def _create_engine(self):
        connection_string = self.config.get_connection_string()
        if self.config.is_sqlite:
            return create_engine(
                connection_string,
                echo=self.config.echo,
                connect_args={"check_same_thread": False},
            )
        return create_engine(
            connection_string,
            echo=self.config.echo,
            pool_size=self.config.pool_size,
            max_overflow=self.config.max_overflow,
            pool_timeout=self.config.pool_timeout,
        )

    def create_tables(self) -> None:
        Base.metadata.create_all(self.engine)

    def drop_tables(self) -> None:
        if not self.config.development_mode:
            raise ServiceError(
                "Cannot drop tables: not in development mode",
                error_code=ErrorCode.CONFIGURATION_ERROR,
                operation="drop_tables",
                development_mode=self.config.development_mode,
            )
        Base.metadata.drop_all(self.engine)

    def get_session(self) -> Session:
        return self.scoped_session()

    def close_session(self, session: Optional[Session] = None) -> None:
        if session:
            session.close()
        else:
            self.scoped_session.remove()

    def close(self) -> None:
        self.scoped_session.remove()
        self.engine.dispose()


def get_development_config() -> DatabaseConfig:
    """SQLite configuration for development and tests."""
    return DatabaseConfig(
        db_type="sqlite",
        database=os.environ.get("DEV_DB_PATH", ":memory:"),
        echo=os.environ.get("DB_ECHO", "False").lower() == "true",
        development_mode=True,
    )


def get_production_config() -> DatabaseConfig:
    """PostgreSQL configuration from DB_* environment variables."""
    return DatabaseConfig(
        db_type="postgres",
        host=os.environ.get("DB_HOST", "localhost"),
        port=os.environ.get("DB_PORT", "5432"),
        database=os.environ.get("DB_NAME", "saas_admin"),
        username=os.environ.get("DB_USER", "postgres"),
        password=os.environ.get("DB_PASSWORD", ""),
        pool_size=int(os.environ.get("DB_POOL_SIZE", "5")),
        max_overflow=int(os.environ.get("DB_MAX_OVERFLOW", "10")),
        pool_timeout=int(os.environ.get("DB_POOL_TIMEOUT", "30")),
        echo=os.environ.get("DB_ECHO", "False").lower() == "true",
        development_mode=False,
    )


def get_app_database_config() -> DatabaseConfig:
    """DatabaseConfig built from the application config (DATABASE_URL)."""
    app_db = get_config().database
    return DatabaseConfig(
        url=app_db.connection_string,
        pool_size=app_db.pool_size,
        max_overflow=app_db.max_overflow,
        pool_timeout=app_db.pool_timeout,
        echo=app_db.echo,
    )


def import_all_models():
    """Import all models so they are registered on Base.metadata."""
    from sqlalchemy.orm import configure_mappers

    from .db_credential_models import SystemCredential, TenantCredential  # noqa
    from .db_module_models import SaaSModule  # noqa
    from .db_provider_models import CredentialProvider, StorageProvider  # noqa
    from .db_storage_models import StorageConfig  # noqa
    from .db_tenant_models import Tenant  # noqa

    configure_mappers()


_db_manager: Optional[DatabaseManager] = None


def get_db_manager() -> DatabaseManager:
    """
    Get the global database manager.

    Raises:
        ServiceError: If initialize_db() has not been called
    """
    if _db_manager is None:
        raise ServiceError(
            "Database manager not initialized. Call initialize_db() first.",
            error_code=ErrorCode.CONFIGURATION_ERROR,
            operation="get_db_manager",
        )
    return _db_manager


def set_db_manager(manager: Optional[DatabaseManager]) -> None:
    """Replace the global database manager (used by tests)."""
    global _db_manager
    _db_manager = manager


def initialize_db(config: Optional[DatabaseConfig] = None) -> DatabaseManager:
    """
    Create the global database manager and the tables.

    Args:
        config: Connection settings. Defaults to DATABASE_URL from AppConfig.
    """
    global _db_manager

    if config is None:
        config = get_app_database_config()

    get_logger().info("Initializing database", extra={"db_type": config.db_type})
    _db_manager = DatabaseManager(config)
    import_all_models()
    _db_manager.create_tables()
    return _db_manager


def close_db() -> None:
    """Dispose of the global database manager."""
    global _db_manager
    if _db_manager:
        _db_manager.close()
        _db_manager = None
