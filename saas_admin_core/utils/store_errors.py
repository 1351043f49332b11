"""
Translation of database failures into admin core errors.

Everything the store can throw at a write ends up here so forms only ever
see ConflictError, PermissionDeniedError, DataUnavailableError,
NotFoundError or a generic RepositoryError.

The "empty error means permission denied" rule mirrors how row-level
security behaves on the hosted PostgreSQL backend: a blocked UPDATE
matches zero rows and the client receives an error with no details.
Confirm this against the backend before relying on it elsewhere.
"""

import re
from typing import Any, Iterable, Mapping, Optional

from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm.exc import StaleDataError

from ..constants import PG_INSUFFICIENT_PRIVILEGE, PG_UNIQUE_VIOLATION
from ..exceptions import (
    BaseError,
    ConflictError,
    DataUnavailableError,
    ErrorCode,
    PermissionDeniedError,
    RepositoryError,
)

_PG_KEY_DETAIL = re.compile(r"Key \((?P<field>[\w]+)\)=")
_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: \w+\.(?P<field>\w+)")
_UNIQUE_MARKERS = ("unique constraint", "duplicate key", "unique violation")

SENSITIVE_PAYLOAD_KEYS = ("credentials", "password", "client_secret", "api_key")
REDACTED = "***"

UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, DisconnectionError, PoolTimeoutError)


def redact_payload(payload: Optional[Mapping[str, Any]]) -> Optional[dict]:
    """Copy of ``payload`` with secret values masked, safe to keep on an error."""
    if payload is None:
        return None
    redacted = {}
    for key, value in payload.items():
        if key in SENSITIVE_PAYLOAD_KEYS:
            if isinstance(value, Mapping):
                redacted[key] = {k: REDACTED for k in value}
            else:
                redacted[key] = REDACTED
        else:
            redacted[key] = value
    return redacted


def get_sqlstate(error: BaseException) -> Optional[str]:
    """SQLSTATE of a DBAPI error (psycopg 3 ``sqlstate`` or psycopg2 ``pgcode``)."""
    orig = getattr(error, "orig", None) or error
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def is_unique_violation(error: BaseException) -> bool:
    if get_sqlstate(error) == PG_UNIQUE_VIOLATION:
        return True
    text = str(error).lower()
    return any(marker in text for marker in _UNIQUE_MARKERS)


def extract_conflict_field(
    error_text: str, known_fields: Optional[Iterable[str]] = None
) -> Optional[str]:
    """
    Name of the column a uniqueness violation was reported on.

    Understands PostgreSQL's ``Key (code)=(...)`` detail, SQLite's
    ``UNIQUE constraint failed: table.code`` and, when ``known_fields`` is
    given, constraint names of the form ``<table>_<field>_key``.
    """
    for pattern in (_PG_KEY_DETAIL, _SQLITE_UNIQUE):
        match = pattern.search(error_text)
        if match:
            return match.group("field")

    for field in known_fields or ():
        if f"_{field}_key" in error_text:
            return field
    return None


def translate_store_error(
    error: Any,
    resource: str,
    operation: str,
    payload: Optional[Mapping[str, Any]] = None,
    record_id: Optional[str] = None,
    known_fields: Optional[Iterable[str]] = None,
) -> BaseError:
    """
    Classify a store failure.

    Args:
        error: Exception raised by SQLAlchemy, or an error mapping returned by
            a REST-style client. An empty mapping or None counts as a silent
            refusal.
        resource: Table or model the write targeted
        operation: 'create' or 'update'
        payload: Data that was being written; kept on the error, redacted
        record_id: Target id for updates
        known_fields: Column names used to recognise constraint names

    Returns:
        The error to raise. It is not raised here.
    """
    context = {
        "resource": resource,
        "store_operation": operation,
        "payload": redact_payload(payload),
    }
    if record_id:
        context["record_id"] = record_id

    if isinstance(error, BaseError):
        return error.add_context(**context)

    if error is None or (isinstance(error, Mapping) and not error):
        return PermissionDeniedError(
            f"{operation} on {resource} was rejected without details; "
            "likely blocked by row-level security",
            **context,
        )

    if isinstance(error, Mapping):
        return _translate_error_mapping(error, resource, operation, known_fields, context)

    if isinstance(error, StaleDataError):
        return PermissionDeniedError(
            f"{operation} on {resource} matched no rows; likely blocked by row-level security",
            cause=error,
            **context,
        )

    if isinstance(error, IntegrityError) and is_unique_violation(error):
        field = extract_conflict_field(str(error), known_fields)
        return ConflictError(
            f"Duplicate {resource}" + (f": {field} already in use" if field else ""),
            field=field,
            cause=error,
            **context,
        )

    if isinstance(error, DBAPIError) and get_sqlstate(error) == PG_INSUFFICIENT_PRIVILEGE:
        return PermissionDeniedError(
            f"Permission denied: {operation} on {resource}", cause=error, **context
        )

    if isinstance(error, UNAVAILABLE_ERRORS):
        return DataUnavailableError(
            f"Database unavailable during {operation} on {resource}", cause=error, **context
        )

    if isinstance(error, IntegrityError):
        return RepositoryError(
            f"Constraint violated during {operation} on {resource}",
            error_code=ErrorCode.VALIDATION_FAILED,
            status_code=400,
            cause=error,
            **context,
        )

    return RepositoryError(
        f"Failed to {operation} {resource}: {str(error)}",
        cause=error if isinstance(error, Exception) else None,
        **context,
    )


def _translate_error_mapping(error, resource, operation, known_fields, context) -> BaseError:
    code = str(error.get("code") or "")
    text = " ".join(str(error.get(key) or "") for key in ("message", "details", "hint"))

    if code == PG_UNIQUE_VIOLATION or any(marker in text.lower() for marker in _UNIQUE_MARKERS):
        field = extract_conflict_field(text, known_fields)
        return ConflictError(
            f"Duplicate {resource}" + (f": {field} already in use" if field else ""),
            field=field,
            store_error=dict(error),
            **context,
        )
    if code == PG_INSUFFICIENT_PRIVILEGE:
        return PermissionDeniedError(
            f"Permission denied: {operation} on {resource}", store_error=dict(error), **context
        )
    return RepositoryError(
        f"Failed to {operation} {resource}: {error.get('message') or code}",
        store_error=dict(error),
        **context,
    )
