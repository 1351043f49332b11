"""
Tests for ProviderRegistry.
"""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from saas_admin_core.enums import ProviderKind
from saas_admin_core.exceptions import DataUnavailableError, ProviderNotFoundError
from saas_admin_core.schemas.provider_schemas import CredentialProviderRead, StorageProviderRead


class TestListProviders:
    def test_active_credential_providers_by_name(self, registry, provider_catalog):
        providers = registry.list_credential_providers()

        assert [p.code for p in providers] == ["aws", "google"]
        assert all(isinstance(p, CredentialProviderRead) for p in providers)

    def test_include_inactive(self, registry, provider_catalog):
        codes = [p.code for p in registry.list_providers(ProviderKind.CREDENTIAL, active_only=False)]
        assert codes == ["aws", "google", "legacy"]

    def test_storage_providers(self, registry, provider_catalog):
        providers = registry.list_storage_providers()

        assert [p.code for p in providers] == ["s3", "google_drive"]
        assert all(isinstance(p, StorageProviderRead) for p in providers)

    def test_field_schema_order_preserved(self, registry, provider_catalog):
        s3 = registry.find_provider("storage", "s3")
        assert list(s3.settings_schema) == ["bucket", "region", "max_file_mb", "versioning"]

    def test_empty_catalog(self, registry):
        assert registry.list_storage_providers() == []

    def test_store_unavailable(self, registry, db_session):
        error = OperationalError("SELECT", {}, Exception("connection refused"))
        with patch.object(db_session, "query", side_effect=error):
            with pytest.raises(DataUnavailableError):
                registry.list_credential_providers()


class TestFindProvider:
    def test_found(self, registry, provider_catalog):
        google = registry.find_provider(ProviderKind.CREDENTIAL, "google")
        assert google.auth_types == ["oauth2", "service_account"]
        assert list(google.fields_for("oauth2")) == ["client_id", "client_secret", "scopes"]

    def test_inactive_is_found(self, registry, provider_catalog):
        assert registry.find_provider("credential", "legacy").is_active is False

    def test_missing_returns_none(self, registry, provider_catalog):
        assert registry.find_provider("storage", "dropbox") is None

    def test_undeclared_credential_providers(self, registry, provider_catalog):
        assert registry.find_provider("storage", "google_drive").credential_providers is None


def test_get_provider_raises(registry, provider_catalog):
    assert registry.get_provider("storage", "s3").name == "Amazon S3"
    with pytest.raises(ProviderNotFoundError) as exc_info:
        registry.get_provider("storage", "dropbox")
    assert exc_info.value.code == "dropbox"
    assert exc_info.value.kind == "storage"
