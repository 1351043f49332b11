"""
Unit tests for the logging utilities.

Tests the ContextAwareLogger, TenantContextFilter, AzureQueueHandler
and configure_logging/get_logger.
"""

import logging
import os
import sys
from io import StringIO
from unittest.mock import patch

import pytest

from saas_admin_core.context.tenant_context import tenant_context
from saas_admin_core.utils import logger as utils_logger
from saas_admin_core.utils.logger import (
    AzureQueueHandler,
    ContextAwareLogger,
    TenantContextFilter,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def disable_queue_logging():
    """No Azure connection during tests; forget any configured logger afterwards."""
    with patch.dict(os.environ, {"AzureWebJobsStorage": "", "ENABLE_LOGS_QUEUE": "false"}):
        yield
    reset_logging()


def _capture(logger_name):
    base_logger = logging.getLogger(logger_name)
    base_logger.setLevel(logging.DEBUG)
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    base_logger.addHandler(handler)
    return base_logger, stream


def _record(msg="hello", **extra):
    record = logging.LogRecord("saas_admin.test", logging.INFO, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestContextAwareLogger:
    def test_message_without_extra(self):
        base_logger, stream = _capture("test.plain")
        ContextAwareLogger(base_logger).info("Provider loaded")
        assert stream.getvalue().strip() == "Provider loaded"

    def test_extra_is_appended_pipe_delimited(self):
        base_logger, stream = _capture("test.extra")
        ContextAwareLogger(base_logger).warning(
            "Resolved", extra={"provider_code": "s3", "system_count": 2}
        )
        assert stream.getvalue().strip() == "Resolved | provider_code=s3 | system_count=2"

    def test_extra_stays_on_record(self):
        base_logger, _ = _capture("test.record")
        records = []
        base_logger.addFilter(lambda record: records.append(record) or True)

        ContextAwareLogger(base_logger).info("Saved", extra={"record_id": "r1"})

        assert records[0].record_id == "r1"

    def test_exc_info_passes_through(self):
        base_logger, stream = _capture("test.exc")
        try:
            raise ValueError("broken")
        except ValueError:
            ContextAwareLogger(base_logger).error("Failed", exc_info=True)

        assert "ValueError: broken" in stream.getvalue()


class TestTenantContextFilter:
    def test_adds_current_tenant(self):
        record = _record()
        with tenant_context("tenant-acme"):
            assert TenantContextFilter().filter(record) is True
        assert record.tenant_id == "tenant-acme"

    def test_no_tenant(self):
        record = _record()
        TenantContextFilter().filter(record)
        assert not hasattr(record, "tenant_id")


class TestAzureQueueHandler:
    def test_without_connection_string(self):
        with patch.object(sys, "stderr", new=StringIO()) as stderr:
            handler = AzureQueueHandler(connection_string="")
        assert "connection string not provided" in stderr.getvalue()
        assert handler.log_buffer == []

    def test_build_entry_separates_context(self):
        handler = AzureQueueHandler(connection_string="")
        entry = handler.build_entry(_record("Saved", record_id="r1", tenant_id="tenant-acme"))

        assert entry["message"] == "Saved"
        assert entry["level"] == "INFO"
        assert entry["tenant_id"] == "tenant-acme"
        assert entry["context"] == {"record_id": "r1"}

    def test_emit_buffers_until_batch_size(self):
        handler = AzureQueueHandler(connection_string="", batch_size=2)
        with patch.object(handler, "flush") as flush:
            handler.emit(_record("one"))
            flush.assert_not_called()
            handler.emit(_record("two"))
            flush.assert_called_once()
        assert len(handler.log_buffer) == 2

    @patch("saas_admin_core.utils.logger.QueueClient")
    @patch("saas_admin_core.utils.logger.QueueServiceClient")
    def test_flush_sends_one_message_per_entry(self, service_client, queue_client):
        service_client.from_connection_string.return_value.list_queues.return_value = []
        handler = AzureQueueHandler(connection_string="UseDevelopmentStorage=true", batch_size=10)
        service_client.from_connection_string.return_value.create_queue.assert_called_once_with(
            "logs-queue"
        )

        handler.emit(_record("one"))
        handler.emit(_record("two"))
        handler.flush()

        client = queue_client.from_connection_string.return_value
        assert client.send_message.call_count == 2
        assert handler.log_buffer == []


class TestConfigureLogging:
    def test_configure_console_only(self):
        logger = configure_logging(app_name="forms", log_level="DEBUG", enable_queue=False)

        assert isinstance(logger, ContextAwareLogger)
        assert logger.logger.name == "saas_admin.forms"
        assert logger.logger.level == logging.DEBUG
        assert not any(isinstance(h, AzureQueueHandler) for h in logger.logger.handlers)
        assert get_logger() is logger

    def test_configure_with_queue(self):
        with patch.object(utils_logger, "AzureQueueHandler", wraps=AzureQueueHandler) as handler:
            logger = configure_logging(app_name="queued", enable_queue=True, connection_string="")
        handler.assert_called_once()
        assert any(isinstance(h, AzureQueueHandler) for h in logger.logger.handlers)

    def test_get_logger_without_configuration(self):
        reset_logging()
        logger = get_logger()
        assert isinstance(logger, ContextAwareLogger)
        assert logger.logger is logging.getLogger()
