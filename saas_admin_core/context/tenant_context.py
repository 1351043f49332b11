"""
Tenant context for the admin core.

Tenant-scoped workflows run inside ``tenant_context(tenant_id)`` so that
log records and service calls can pick up the tenant without threading it
through every signature.
"""

import threading
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, Optional, Union

from ..exceptions import ErrorCode, ValidationError
from ..utils.logger import get_logger


class TenantContext:
    """Thread-local holder of the current tenant id."""

    _thread_local = threading.local()

    @classmethod
    def set_current_tenant(cls, tenant_id: str) -> None:
        """
        Set the current tenant id.

        Raises:
            ValidationError: If tenant_id is empty or not a string
        """
        if not tenant_id or not isinstance(tenant_id, str) or not tenant_id.strip():
            raise ValidationError(
                "tenant_id must be a non-empty string",
                error_code=ErrorCode.MISSING_REQUIRED,
                field="tenant_id",
                value=tenant_id,
            )

        cls._thread_local.tenant_id = tenant_id.strip()
        get_logger().debug(f"Current tenant set to: {tenant_id}")

    @classmethod
    def get_current_tenant_id(cls) -> Optional[str]:
        return getattr(cls._thread_local, "tenant_id", None)

    @classmethod
    def clear_current_tenant(cls) -> None:
        if hasattr(cls._thread_local, "tenant_id"):
            delattr(cls._thread_local, "tenant_id")


@contextmanager
def tenant_context(tenant_id: str) -> Generator[None, None, None]:
    """
    Set the current tenant for the duration of the block.

    The previous tenant, if any, is restored on exit.
    """
    previous_tenant = TenantContext.get_current_tenant_id()
    TenantContext.set_current_tenant(tenant_id)
    try:
        yield
    finally:
        if previous_tenant:
            TenantContext.set_current_tenant(previous_tenant)
        else:
            TenantContext.clear_current_tenant()


def tenant_aware(tenant_id: Union[Optional[str], Callable] = None):
    """
    Decorator that runs the wrapped function inside a tenant context.

    The tenant comes from the decorator argument or from the current context.
    Usable as ``@tenant_aware``, ``@tenant_aware()`` or ``@tenant_aware("t1")``.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            effective_tenant_id = tenant_id or TenantContext.get_current_tenant_id()

            if effective_tenant_id and isinstance(effective_tenant_id, str):
                with tenant_context(effective_tenant_id):
                    return func(*args, **kwargs)

            raise ValidationError(
                "No tenant ID provided for tenant-aware function",
                error_code=ErrorCode.MISSING_REQUIRED,
                field="tenant_id",
            )

        return wrapper

    if callable(tenant_id):
        func = tenant_id
        tenant_id = None
        return decorator(func)

    return decorator
