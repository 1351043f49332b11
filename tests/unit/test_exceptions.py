"""
Unit tests for the exception system.

Tests exception classes, factory functions and correlation ids.
"""

from unittest.mock import patch

import pytest

from saas_admin_core.exceptions import (
    BaseError,
    ConflictError,
    CredentialLookupFailedError,
    DataUnavailableError,
    ErrorCode,
    NotFoundError,
    PermissionDeniedError,
    ProviderNotFoundError,
    ProviderUnresolvedError,
    RepositoryError,
    ServiceError,
    ValidationError,
    clear_correlation_id,
    get_correlation_id,
    not_found,
    set_correlation_id,
)


class TestBaseError:
    """Test BaseError class."""

    def test_basic_error_creation(self):
        error = BaseError("Test error message")

        assert error.message == "Test error message"
        assert error.error_code == ErrorCode.INTERNAL_ERROR
        assert error.status_code == 500
        assert error.cause is None
        assert error.error_id is not None
        assert error.context["error_id"] == error.error_id

    def test_error_with_cause(self):
        original_error = ValueError("Original error")
        error = BaseError("Wrapped error", cause=original_error)

        assert error.cause is original_error
        assert error.context["cause"]["type"] == "ValueError"
        assert error.context["cause"]["message"] == "Original error"

    def test_to_dict_hides_cause_unless_asked(self):
        error = BaseError("Wrapped", cause=RuntimeError("boom"), resource="saas_modules")

        plain = error.to_dict()
        detailed = error.to_dict(include_cause=True)

        assert "cause" not in plain["error"]
        assert plain["error"]["context"]["resource"] == "saas_modules"
        assert detailed["error"]["cause"] == {"type": "RuntimeError", "message": "boom"}
        assert "traceback" not in detailed["error"]["cause"]

    def test_add_context_returns_self(self):
        error = BaseError("Test")
        assert error.add_context(record_id="r1") is error
        assert error.context["record_id"] == "r1"

    @patch("saas_admin_core.utils.logger.get_logger")
    def test_client_errors_log_as_warning(self, mock_get_logger):
        NotFoundError("missing")

        logger = mock_get_logger.return_value
        logger.warning.assert_called_once()
        logger.error.assert_not_called()

    @patch("saas_admin_core.utils.logger.get_logger")
    def test_logged_context_excludes_payload(self, mock_get_logger):
        BaseError("Failed", payload={"credentials": "***"}, resource="system_credentials")

        extra = mock_get_logger.return_value.error.call_args.kwargs["extra"]
        assert "payload" not in extra["context"]
        assert extra["context"]["resource"] == "system_credentials"


class TestErrorTaxonomy:
    """Status codes and codes of the concrete errors."""

    @pytest.mark.parametrize(
        "error, code, status",
        [
            (NotFoundError("x"), ErrorCode.NOT_FOUND, 404),
            (ConflictError("x", field="code"), ErrorCode.DUPLICATE, 409),
            (PermissionDeniedError("x"), ErrorCode.PERMISSION_DENIED, 403),
            (DataUnavailableError("x"), ErrorCode.CONNECTION_ERROR, 503),
            (ProviderUnresolvedError("dropbox"), ErrorCode.PROVIDER_UNRESOLVED, 404),
            (CredentialLookupFailedError("x"), ErrorCode.DATABASE_ERROR, 500),
            (ValidationError("x"), ErrorCode.VALIDATION_FAILED, 400),
        ],
    )
    def test_codes(self, error, code, status):
        assert error.error_code == code
        assert error.status_code == status

    def test_layer_bases(self):
        assert isinstance(ConflictError("x"), RepositoryError)
        assert isinstance(PermissionDeniedError("x"), RepositoryError)
        assert isinstance(ProviderNotFoundError("storage", "s3"), NotFoundError)
        assert isinstance(CredentialLookupFailedError("x"), ServiceError)

    def test_conflict_keeps_field(self):
        error = ConflictError("Duplicate", field="code")
        assert error.field == "code"
        assert error.context["field"] == "code"

    def test_data_unavailable_is_retryable(self):
        assert DataUnavailableError("down").retryable is True

    def test_provider_unresolved_carries_fallback(self):
        error = ProviderUnresolvedError("google_drive", fallback_codes=["google", "google_oauth2"])
        assert error.provider_code == "google_drive"
        assert error.fallback_codes == ["google", "google_oauth2"]

    def test_credential_lookup_records_operation(self):
        error = CredentialLookupFailedError("failed", cause=RuntimeError("db"))
        assert error.context["operation"] == "resolve_compatible_credentials"


class TestFactoryFunctions:
    def test_not_found(self):
        error = not_found("SaaSModule", record_id="m1")
        assert isinstance(error, NotFoundError)
        assert error.message == "SaaSModule not found: record_id=m1"
        assert error.context["resource_type"] == "SaaSModule"


class TestCorrelationId:
    def teardown_method(self):
        clear_correlation_id()

    def test_set_get_clear(self):
        assert get_correlation_id() is None
        set_correlation_id("corr-1")
        assert get_correlation_id() == "corr-1"
        clear_correlation_id()
        assert get_correlation_id() is None

    def test_errors_pick_up_correlation_id(self):
        set_correlation_id("corr-2")
        error = BaseError("x")
        assert error.to_dict()["error"]["correlation_id"] == "corr-2"
