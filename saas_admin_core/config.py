"""
Centralized configuration for the SaaS admin core.

Values come from environment variables and are validated with Pydantic.
A single global instance is exposed through get_config/set_config.
"""

import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from .constants import EnvironmentVariable, Limits, LogLevel, QueueName


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


class DatabaseConfig(BaseModel):
    """Database connection settings."""

    connection_string: str = Field(
        default_factory=lambda: os.getenv(
            EnvironmentVariable.DATABASE_URL.value, "sqlite:///./saas_admin.db"
        ),
        description="Database connection string",
    )
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    echo: bool = Field(default=False, description="Echo SQL statements")


class QueueConfig(BaseModel):
    """Azure Storage Queue settings used by the log shipping handler."""

    connection_string: str = Field(
        default_factory=lambda: os.getenv(EnvironmentVariable.AZURE_STORAGE_CONNECTION.value, ""),
        description="Azure Storage connection string",
    )
    logs_queue_name: str = Field(default=QueueName.LOGS.value, description="Logs queue name")
    batch_size: int = Field(default=10, description="Log entries sent per flush")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default_factory=lambda: os.getenv(EnvironmentVariable.LOG_LEVEL.value, LogLevel.INFO.value),
        description="Logging level",
    )
    format: str = Field(default="%(message)s", description="Console log format")

    @field_validator("level")
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {level.value for level in LogLevel}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()


class FeatureFlags(BaseModel):
    """Feature flags for runtime behavior."""

    enable_logs_queue: bool = Field(
        default_factory=lambda: _env_flag(EnvironmentVariable.ENABLE_LOGS_QUEUE.value),
        description="Ship logs to an Azure Storage Queue",
    )
    enable_tenant_isolation: bool = Field(
        default=True,
        description="Refuse tenant credential writes outside the current tenant context",
    )
    enable_provider_fallback: bool = Field(
        default=True,
        description="Use the fallback credential provider table for unresolved storage providers",
    )


class ConsoleConfig(BaseModel):
    """Behavior of the admin console forms and listings."""

    default_page_size: int = Field(default=Limits.DEFAULT_PAGE_SIZE, description="Page size")

    @field_validator("default_page_size")
    def validate_page_size(cls, v: int) -> int:
        if v < 1 or v > Limits.MAX_PAGE_SIZE:
            raise ValueError(f"Page size must be between 1 and {Limits.MAX_PAGE_SIZE}")
        return v


class AppConfig(BaseModel):
    """Main application configuration."""

    environment: str = Field(
        default_factory=lambda: os.getenv(EnvironmentVariable.APP_ENV.value, "development"),
        description="Application environment",
    )
    debug: bool = Field(
        default_factory=lambda: _env_flag(EnvironmentVariable.DEBUG.value),
        description="Debug mode",
    )

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    queue: QueueConfig = Field(default_factory=QueueConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    features: FeatureFlags = Field(default_factory=FeatureFlags)
    console: ConsoleConfig = Field(default_factory=ConsoleConfig)

    custom: Dict[str, Any] = Field(default_factory=dict, description="Custom configuration values")

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create configuration from environment variables."""
        return cls()

    def get_custom(self, key: str, default: Any = None) -> Any:
        return self.custom.get(key, default)

    def set_custom(self, key: str, value: Any) -> None:
        self.custom[key] = value


_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def set_config(config: AppConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global configuration instance."""
    global _config
    _config = None
