"""
Logging for the admin core.

Console output goes through ContextAwareLogger, which renders ``extra``
values into the message as pipe-delimited pairs. Structured entries can
optionally be shipped to an Azure Storage Queue with AzureQueueHandler.
"""

import logging
import os
import sys
import traceback
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from azure.storage.queue import QueueClient, QueueServiceClient

from ..config import get_config
from ..constants import EnvironmentVariable, QueueName
from .json_utils import dumps

_console_logger = None

# LogRecord attributes that are never copied into the queued context
_RECORD_ATTRIBUTES = frozenset(
    [
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
        "tenant_id",
    ]
)


class ContextAwareLogger:
    """
    Logger wrapper that appends ``extra`` to the message text.

    The extras are still passed to the underlying logger so handlers that
    read record attributes keep working.
    """

    def __init__(self, logger):
        self.logger = logger

    def _log_with_formatted_extra(self, level, msg, **kwargs):
        extra = kwargs.pop("extra", None) or {}

        if extra:
            extra_str = " | ".join(f"{k}={v}" for k, v in extra.items())
            full_msg = f"{msg} | {extra_str}"
        else:
            full_msg = msg

        getattr(self.logger, level)(full_msg, extra=extra, **kwargs)

    def set_level(self, level):
        """Set the level of the wrapped logger."""
        self.logger.setLevel(level)

    def info(self, msg, **kwargs):
        self._log_with_formatted_extra("info", msg, **kwargs)

    def error(self, msg, **kwargs):
        self._log_with_formatted_extra("error", msg, **kwargs)

    def warning(self, msg, **kwargs):
        self._log_with_formatted_extra("warning", msg, **kwargs)

    def debug(self, msg, **kwargs):
        self._log_with_formatted_extra("debug", msg, **kwargs)

    def exception(self, msg, **kwargs):
        self._log_with_formatted_extra("exception", msg, **kwargs)


class TenantContextFilter(logging.Filter):
    """Adds the current tenant id to log records."""

    def filter(self, record):
        # Lazy import, tenant_context imports this module
        from ..context.tenant_context import TenantContext

        tenant_id = TenantContext.get_current_tenant_id()
        if tenant_id:
            record.tenant_id = tenant_id
        return True


class AzureQueueHandler(logging.Handler):
    """
    Logging handler that buffers structured entries and sends them to an
    Azure Storage Queue.

    Delivery problems are reported on stderr and never raised into the
    code that logged.
    """

    def __init__(
        self,
        queue_name: str = QueueName.LOGS.value,
        connection_string: Optional[str] = None,
        batch_size: int = 10,
    ):
        super().__init__()
        self.queue_name = queue_name
        self.connection_string = connection_string or os.getenv(
            EnvironmentVariable.AZURE_STORAGE_CONNECTION.value
        )
        self.batch_size = batch_size
        self.log_buffer: List[Dict[str, Any]] = []

        if not self.connection_string:
            sys.stderr.write("Azure Storage connection string not provided\n")
        else:
            self._ensure_queue_exists()

    def _ensure_queue_exists(self) -> bool:
        """Create the queue when it is missing. Returns True when it exists afterwards."""
        try:
            queue_service = QueueServiceClient.from_connection_string(self.connection_string)
            if not any(queue.name == self.queue_name for queue in queue_service.list_queues()):
                sys.stderr.write(f"Queue '{self.queue_name}' does not exist. Creating...\n")
                queue_service.create_queue(self.queue_name)
            return True
        except Exception as e:
            sys.stderr.write(f"Failed to ensure queue exists: {str(e)}\n")
            return False

    def build_entry(self, record: logging.LogRecord) -> Dict[str, Any]:
        """Convert a record into the dictionary shipped to the queue."""
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if hasattr(record, "tenant_id"):
            entry["tenant_id"] = record.tenant_id

        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRIBUTES and not key.startswith("_") and not callable(value)
        }
        if context:
            entry["context"] = context

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": [
                    line.rstrip() for line in traceback.format_exception(*record.exc_info)
                ],
            }
        return entry

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.log_buffer.append(self.build_entry(record))
            if len(self.log_buffer) >= self.batch_size:
                self.flush()
        except Exception:
            self.handleError(record)

    def flush(self) -> None:
        """Send buffered entries, one message per entry."""
        if not self.log_buffer or not self.connection_string:
            return

        try:
            queue_client = QueueClient.from_connection_string(
                conn_str=self.connection_string, queue_name=self.queue_name
            )
            for entry in self.log_buffer:
                try:
                    queue_client.send_message(dumps(entry))
                except Exception as send_error:
                    sys.stderr.write(f"Error sending log entry: {str(send_error)}\n")
            self.log_buffer.clear()
        except Exception as e:
            sys.stderr.write(f"Error sending logs to Azure Queue: {str(e)}\n")

    def close(self) -> None:
        self.flush()
        super().close()


def configure_logging(
    app_name: str = "saas_admin",
    log_level: Optional[Union[int, str]] = None,
    enable_queue: Optional[bool] = None,
    queue_name: Optional[str] = None,
    queue_batch_size: Optional[int] = None,
    connection_string: Optional[str] = None,
) -> ContextAwareLogger:
    """
    Configure console logging and, optionally, queue shipping.

    Unset arguments fall back to the global AppConfig.

    Returns:
        The configured logger, also returned by get_logger() afterwards
    """
    global _console_logger

    app_config = get_config()
    if log_level is None:
        log_level = app_config.logging.level
    if enable_queue is None:
        enable_queue = app_config.features.enable_logs_queue
    if connection_string is None:
        connection_string = app_config.queue.connection_string
    if queue_batch_size is None:
        queue_batch_size = app_config.queue.batch_size
    queue_name = queue_name or app_config.queue.logs_queue_name

    if isinstance(log_level, str):
        log_level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(f"saas_admin.{app_name}")
    logger.setLevel(log_level)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    tenant_filter = TenantContextFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(app_config.logging.format))
    console_handler.addFilter(tenant_filter)
    logger.addHandler(console_handler)

    if enable_queue:
        queue_handler = AzureQueueHandler(
            queue_name=queue_name, connection_string=connection_string, batch_size=queue_batch_size
        )
        queue_handler.setLevel(log_level)
        queue_handler.addFilter(tenant_filter)
        logger.addHandler(queue_handler)

    wrapped_logger = ContextAwareLogger(logger)
    wrapped_logger.info(
        "Logger configured",
        extra={
            "app_name": app_name,
            "queue_logging": enable_queue,
            "queue_name": queue_name if enable_queue else None,
        },
    )
    _console_logger = wrapped_logger
    return wrapped_logger


def get_logger(log_level: Optional[Union[int, str]] = None) -> ContextAwareLogger:
    """
    Get the configured logger, or a wrapped root logger when
    configure_logging() has not run.
    """
    if _console_logger is not None:
        return _console_logger

    logger = logging.getLogger()
    if log_level is None:
        log_level = get_config().logging.level
    if isinstance(log_level, str):
        log_level = getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(log_level)
    return ContextAwareLogger(logger)


def reset_logging() -> None:
    """Forget the configured logger."""
    global _console_logger
    _console_logger = None
