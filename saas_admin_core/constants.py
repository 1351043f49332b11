"""
Constants for the SaaS admin core.

Centralizes the magic strings shared by services, forms and logging.
"""

from enum import Enum


class QueueName(str, Enum):
    """Queue names used for shipping logs."""

    LOGS = "logs-queue"
    ERROR = "error-queue"


class LogLevel(str, Enum):
    """Standard logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class EnvironmentVariable(str, Enum):
    """Environment variable names read by the configuration layer."""

    AZURE_STORAGE_CONNECTION = "AzureWebJobsStorage"
    DATABASE_URL = "DATABASE_URL"
    APP_ENV = "APP_ENV"
    LOG_LEVEL = "LOG_LEVEL"
    DEBUG = "DEBUG"
    ENABLE_LOGS_QUEUE = "ENABLE_LOGS_QUEUE"


class OperationStatus(str, Enum):
    """Status values recorded on operation exit."""

    SUCCESS = "success"
    ERROR = "error"


class Limits:
    """Query limits."""

    DEFAULT_PAGE_SIZE = 50
    MAX_PAGE_SIZE = 500


# Credential providers offered for storage providers that declare none.
# google_drive is the only known special case.
FALLBACK_CREDENTIAL_PROVIDERS = {
    "google_drive": ("google", "google_oauth2"),
}

# PostgreSQL SQLSTATE codes inspected when translating store errors
PG_UNIQUE_VIOLATION = "23505"
PG_INSUFFICIENT_PRIVILEGE = "42501"

MODULE_CODE_PATTERN = r"^[a-z0-9_]+$"
EMAIL_PATTERN = r"\S+@\S+\.\S+"

# Display labels for auth types; unknown types are shown verbatim
AUTH_TYPE_LABELS = {
    "oauth2": "OAuth 2.0",
    "api_key": "API Key",
    "password": "Usuário/Senha",
    "service_account": "Conta de Serviço",
}
