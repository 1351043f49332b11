"""Context management for operations and tenant scoping."""

from .operation_context import OperationContext, operation
from .tenant_context import TenantContext, tenant_aware, tenant_context

__all__ = [
    "operation",
    "OperationContext",
    "TenantContext",
    "tenant_aware",
    "tenant_context",
]
