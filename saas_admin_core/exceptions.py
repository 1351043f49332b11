"""
Exception hierarchy for the admin core.

Every error carries a standardized code, an HTTP-like status, free-form
context and an optional cause. Errors log themselves when constructed, so
callers only need to raise them.
"""

import threading
import traceback
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

_thread_local = threading.local()


class ErrorCode(str, Enum):
    """Standardized error codes."""

    # System errors (1xxx)
    INTERNAL_ERROR = "1000"
    DATABASE_ERROR = "1001"
    CONNECTION_ERROR = "1002"
    CONFIGURATION_ERROR = "1003"

    # Validation errors (2xxx)
    VALIDATION_FAILED = "2000"
    INVALID_FORMAT = "2001"
    MISSING_REQUIRED = "2002"

    # Resource errors (3xxx)
    NOT_FOUND = "3000"
    DUPLICATE = "3001"

    # Business logic errors (4xxx)
    PERMISSION_DENIED = "4003"

    # Integration errors (5xxx)
    PROVIDER_UNRESOLVED = "5003"


class BaseError(Exception):
    """Base exception with error code, context, logging and cause chaining."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        cause: Optional[Exception] = None,
        **context: Any,
    ):
        """
        Build the error and log it.

        Args:
            message: Human-readable error message
            error_code: Standardized error code
            status_code: HTTP-like status used to pick the log level
            cause: Exception that triggered this one, if any
            **context: Additional diagnostic context
        """
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()
        self.error_id = str(uuid.uuid4())
        self.context = context

        correlation_id = get_correlation_id()
        if correlation_id:
            self.context["correlation_id"] = correlation_id
        self.context["error_id"] = self.error_id

        if cause:
            self.context["cause"] = {
                "type": type(cause).__name__,
                "message": str(cause),
                "traceback": traceback.format_exception(type(cause), cause, cause.__traceback__),
            }

        self._log_error()
        super().__init__(message)

    def _log_error(self) -> None:
        """Log at a level derived from the status code."""
        # Lazy import: the utils package imports modules that import this one
        from .utils.logger import get_logger

        logger = get_logger()
        log_data = {
            "error_id": self.error_id,
            "error_code": self.error_code.value,
            "status_code": self.status_code,
            "error_message": self.message,
            "context": {
                k: v for k, v in self.context.items() if k not in ("cause", "payload", "error_id")
            },
        }
        if "correlation_id" in self.context:
            log_data["correlation_id"] = self.context["correlation_id"]

        if self.status_code >= 500:
            logger.error(f"Error {self.error_code.value}: {self.message}", extra=log_data)
        elif self.status_code >= 400:
            logger.warning(f"Client error {self.error_code.value}: {self.message}", extra=log_data)
        else:
            logger.info(f"Error {self.error_code.value}: {self.message}", extra=log_data)

    def to_dict(
        self, include_cause: bool = False, include_traceback: bool = False
    ) -> Dict[str, Any]:
        """
        Serialize the error for callers and diagnostics.

        Args:
            include_cause: Include the cause type and message
            include_traceback: Include the cause traceback as well

        Returns:
            JSON-friendly dictionary
        """
        result: Dict[str, Any] = {
            "error": {
                "id": self.error_id,
                "code": self.error_code.value,
                "message": self.message,
                "timestamp": self.timestamp,
                "context": {
                    k: v
                    for k, v in self.context.items()
                    if k not in ("cause", "error_id", "correlation_id")
                },
            }
        }

        if "correlation_id" in self.context:
            result["error"]["correlation_id"] = self.context["correlation_id"]

        if include_cause and "cause" in self.context:
            result["error"]["cause"] = {
                "type": self.context["cause"]["type"],
                "message": self.context["cause"]["message"],
            }
            if include_traceback:
                result["error"]["cause"]["traceback"] = self.context["cause"]["traceback"]

        return result

    def add_context(self, **kwargs: Any) -> "BaseError":
        """Attach more context and return self."""
        self.context.update(kwargs)
        return self


# Layer-specific base exceptions
class RepositoryError(BaseError):
    """Persistence layer errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
        status_code: int = 500,
        cause: Optional[Exception] = None,
        **context,
    ):
        super().__init__(message, error_code, status_code, cause, **context)


class ServiceError(BaseError):
    """Service layer errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        operation: Optional[str] = None,
        cause: Optional[Exception] = None,
        **context,
    ):
        if operation:
            context["operation"] = operation
        super().__init__(message, error_code, 500, cause, **context)


class ValidationError(BaseError):
    """Input validation errors."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_FAILED,
        cause: Optional[Exception] = None,
        **context,
    ):
        if field:
            context["field"] = field
        super().__init__(message, error_code, 400, cause, **context)


class NotFoundError(RepositoryError):
    """A referenced record does not exist."""

    def __init__(self, message: str, cause: Optional[Exception] = None, **context):
        super().__init__(message, ErrorCode.NOT_FOUND, 404, cause, **context)


class ProviderNotFoundError(NotFoundError):
    """No provider with the given code in the registry."""

    def __init__(self, kind: str, code: str, cause: Optional[Exception] = None, **context):
        self.kind = kind
        self.code = code
        super().__init__(
            f"{kind} provider not found: code={code}",
            cause=cause,
            provider_kind=kind,
            provider_code=code,
            **context,
        )


class ConflictError(RepositoryError):
    """
    A write violated a uniqueness constraint.

    ``field`` names the conflicting column when the store reported it.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        cause: Optional[Exception] = None,
        **context,
    ):
        self.field = field
        if field:
            context["field"] = field
        super().__init__(message, ErrorCode.DUPLICATE, 409, cause, **context)


class PermissionDeniedError(RepositoryError):
    """
    The store refused the write.

    Raised both for explicit refusals and for updates that silently changed
    nothing, which is how row-level security policies usually surface.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None, **context):
        super().__init__(message, ErrorCode.PERMISSION_DENIED, 403, cause, **context)


class DataUnavailableError(RepositoryError):
    """The store could not be reached. Callers may retry."""

    retryable = True

    def __init__(self, message: str, cause: Optional[Exception] = None, **context):
        super().__init__(message, ErrorCode.CONNECTION_ERROR, 503, cause, **context)


class ProviderUnresolvedError(BaseError):
    """
    A provider code referenced by stored data has no registry entry.

    Resolution continues with fallback codes; this error is reported, not raised.
    """

    def __init__(self, provider_code: str, fallback_codes: Optional[List[str]] = None, **context):
        self.provider_code = provider_code
        self.fallback_codes = list(fallback_codes or [])
        super().__init__(
            f"Provider could not be resolved: code={provider_code}",
            error_code=ErrorCode.PROVIDER_UNRESOLVED,
            status_code=404,
            provider_code=provider_code,
            fallback_codes=self.fallback_codes,
            **context,
        )


class CredentialLookupFailedError(ServiceError):
    """Querying compatible credentials failed."""

    def __init__(self, message: str, cause: Optional[Exception] = None, **context):
        super().__init__(
            message,
            error_code=ErrorCode.DATABASE_ERROR,
            operation="resolve_compatible_credentials",
            cause=cause,
            **context,
        )


# Factory functions for common error patterns
def not_found(resource_type: str, cause: Optional[Exception] = None, **identifiers) -> NotFoundError:
    """
    Build a not found error.

    Args:
        resource_type: Kind of record, e.g. 'StorageConfig'
        cause: Original exception if any
        **identifiers: Record identifiers, e.g. record_id='123'
    """
    id_parts = [f"{k}={v}" for k, v in identifiers.items()]
    message = f"{resource_type} not found"
    if id_parts:
        message += f": {', '.join(id_parts)}"
    return NotFoundError(message, cause=cause, resource_type=resource_type, **identifiers)


# Correlation ID management
def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current thread."""
    _thread_local.correlation_id = correlation_id


def get_correlation_id() -> Optional[str]:
    """Get the current thread's correlation ID."""
    return getattr(_thread_local, "correlation_id", None)


def clear_correlation_id() -> None:
    """Clear the current thread's correlation ID."""
    if hasattr(_thread_local, "correlation_id"):
        delattr(_thread_local, "correlation_id")
