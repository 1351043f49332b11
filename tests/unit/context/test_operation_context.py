"""
Tests for operation logging.
"""

from unittest.mock import Mock

import pytest

from saas_admin_core.context.operation_context import OperationContext, OperationHandler, operation
from saas_admin_core.context.tenant_context import tenant_context
from saas_admin_core.exceptions import NotFoundError, get_correlation_id, set_correlation_id


class TestOperationContext:
    def test_ids_and_metrics(self):
        ctx = OperationContext("resolve", provider_code="s3")

        assert ctx.context["provider_code"] == "s3"
        assert ctx.context["operation_id"] == ctx.operation_id
        assert ctx.correlation_id == get_correlation_id()

        ctx.add_metric("system_count", 2)
        assert ctx.metrics == {"system_count": 2}

    def test_inherits_correlation_id(self):
        set_correlation_id("corr-parent")
        assert OperationContext("child").correlation_id == "corr-parent"


class TestOperationHandler:
    def test_enter_and_exit(self):
        logger = Mock()
        with OperationHandler(logger=logger).operation("load_providers", kind="storage"):
            pass

        messages = [call.args[0] for call in logger.info.call_args_list]
        assert messages == ["ENTER: load_providers", "EXIT: load_providers"]
        assert logger.info.call_args.kwargs["extra"]["status"] == "success"

    def test_base_error_gets_operation_context(self):
        logger = Mock()
        with pytest.raises(NotFoundError) as exc_info:
            with OperationHandler(logger=logger).operation("get_module"):
                raise NotFoundError("missing")

        assert exc_info.value.context["operation_name"] == "get_module"
        assert "ERROR: get_module" in logger.error.call_args.args[0]

    def test_unexpected_error_logged_with_traceback(self):
        logger = Mock()
        with pytest.raises(KeyError):
            with OperationHandler(logger=logger).operation("resolve"):
                raise KeyError("code")

        logger.exception.assert_called_once()

    def test_tenant_added_to_context(self):
        logger = Mock()
        with tenant_context("tenant-acme"):
            with OperationHandler(logger=logger).operation("create_tenant_credential"):
                pass

        assert logger.info.call_args_list[0].kwargs["extra"]["tenant_id"] == "tenant-acme"

    def test_correlation_id_restored(self):
        with OperationHandler(logger=Mock()).operation("outer"):
            assert get_correlation_id() is not None
        assert get_correlation_id() is None


class _Service:
    @operation()
    def save(self, value):
        return value * 2

    @operation("custom.name")
    def fail(self):
        raise NotFoundError("gone")


class TestOperationDecorator:
    def test_returns_result(self):
        assert _Service().save(21) == 42

    def test_propagates_errors(self):
        with pytest.raises(NotFoundError) as exc_info:
            _Service().fail()
        assert exc_info.value.context["operation_name"] == "custom.name"

    def test_default_name_includes_class(self):
        with pytest.raises(NotFoundError) as exc_info:

            class Named:
                @operation()
                def lookup(self):
                    raise NotFoundError("gone")

            Named().lookup()

        assert exc_info.value.context["operation_name"] == "test_operation_context.Named.lookup"
