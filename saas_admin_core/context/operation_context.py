"""
Operation context for logging service calls.

``@operation()`` wraps a function with ENTER/EXIT/ERROR log lines carrying
operation and correlation ids, the current tenant and the duration.
"""

import time
import uuid
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Dict, Optional, TypeVar, Union, cast

from ..constants import OperationStatus
from ..exceptions import BaseError, clear_correlation_id, get_correlation_id, set_correlation_id
from ..utils.logger import ContextAwareLogger, get_logger
from .tenant_context import TenantContext


class OperationContext:
    """State of one running operation."""

    def __init__(self, operation_name: str, correlation_id: Optional[str] = None, **context):
        self.operation_name = operation_name
        self.operation_id = str(uuid.uuid4())

        # Child operations inherit the correlation id through the thread-local
        self.correlation_id = correlation_id or get_correlation_id() or str(uuid.uuid4())
        set_correlation_id(self.correlation_id)

        self.context = context
        self.context["operation_id"] = self.operation_id
        self.context["correlation_id"] = self.correlation_id

        self.start_time = time.time()
        self.metrics: Dict[str, Union[int, float]] = {}

    @property
    def duration_ms(self) -> float:
        return (time.time() - self.start_time) * 1000

    def add_context(self, **kwargs) -> None:
        self.context.update(kwargs)

    def add_metric(self, name: str, value: Union[int, float]) -> None:
        """Record a number that is logged with the EXIT line."""
        self.metrics[name] = value


class OperationHandler:
    """Logs operation entry, exit and failure."""

    def __init__(self, logger: Optional[ContextAwareLogger] = None):
        self.logger = logger if logger is not None else get_logger()

    @contextmanager
    def operation(self, name: str, **context):
        tenant_id = TenantContext.get_current_tenant_id()
        if tenant_id and "tenant_id" not in context:
            context["tenant_id"] = tenant_id

        previous_correlation_id = get_correlation_id()
        op_ctx = OperationContext(name, **context)
        ids = {"operation_id": op_ctx.operation_id, "correlation_id": op_ctx.correlation_id}

        self.logger.info(f"ENTER: {name}", extra={**context, **ids})

        try:
            yield op_ctx
        except BaseError as e:
            e.add_context(
                operation_name=name,
                operation_id=op_ctx.operation_id,
                operation_duration_ms=op_ctx.duration_ms,
            )
            # BaseError already logged itself; this line ties it to the operation
            self.logger.error(
                f"ERROR: {name} -> {e.error_code.value}: {e.message}",
                extra={
                    **context,
                    **ids,
                    "duration_ms": op_ctx.duration_ms,
                    "error_id": e.error_id,
                    "error_code": e.error_code.value,
                    "status": OperationStatus.ERROR.value,
                },
            )
            raise
        except Exception as e:
            self.logger.exception(
                f"ERROR: {name} -> {type(e).__name__}: {str(e)}",
                extra={
                    **context,
                    **ids,
                    "duration_ms": op_ctx.duration_ms,
                    "error_type": type(e).__name__,
                    "status": OperationStatus.ERROR.value,
                },
            )
            raise
        else:
            self.logger.info(
                f"EXIT: {name}",
                extra={
                    **context,
                    **ids,
                    "duration_ms": op_ctx.duration_ms,
                    "status": OperationStatus.SUCCESS.value,
                    **op_ctx.metrics,
                },
            )
        finally:
            if previous_correlation_id:
                set_correlation_id(previous_correlation_id)
            else:
                clear_correlation_id()


F = TypeVar("F", bound=Callable[..., Any])


def operation(name: Union[Optional[str], Callable] = None):
    """
    Decorator that runs a function inside an OperationHandler.

    Args:
        name: Operation name. Defaults to ``module.Class.function``.
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            is_method = bool(args) and hasattr(args[0], func.__name__)
            if name is not None:
                op_name = name
            else:
                op_name = func.__name__
                if is_method:
                    op_name = f"{args[0].__class__.__name__}.{op_name}"
                op_name = f"{func.__module__.split('.')[-1]}.{op_name}"

            context: Dict[str, Any] = {"source_module": func.__module__}
            if is_method:
                context["class"] = args[0].__class__.__name__

            with OperationHandler().operation(op_name, **context):
                return func(*args, **kwargs)

        return cast(F, wrapper)

    if callable(name):
        func, name = name, None
        return decorator(func)

    return decorator
