"""Utility modules for the SaaS admin core."""

# Logging utilities
from .logger import (
    AzureQueueHandler,
    ContextAwareLogger,
    TenantContextFilter,
    configure_logging,
    get_logger,
)

# Store error translation
from .store_errors import extract_conflict_field, redact_payload, translate_store_error

# Generic CRUD helpers
from .crud_helpers import create_record, get_record_by_id, list_records, update_record

# Icon registry
from .icon_registry import DEFAULT_ICON, ICON_REGISTRY, IconHandle, resolve_icon, search_icons

__all__ = [
    # Logging
    "AzureQueueHandler",
    "ContextAwareLogger",
    "TenantContextFilter",
    "configure_logging",
    "get_logger",
    # Store errors
    "extract_conflict_field",
    "redact_payload",
    "translate_store_error",
    # CRUD
    "create_record",
    "get_record_by_id",
    "list_records",
    "update_record",
    # Icons
    "DEFAULT_ICON",
    "ICON_REGISTRY",
    "IconHandle",
    "resolve_icon",
    "search_icons",
]
