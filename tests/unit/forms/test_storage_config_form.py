"""
Tests for the storage configuration form.
"""

from unittest.mock import Mock, patch

import pytest

from saas_admin_core.enums import FormMode
from saas_admin_core.exceptions import ConflictError, CredentialLookupFailedError, DataUnavailableError
from saas_admin_core.forms.storage_config_form import (
    CREDENTIALS_UNAVAILABLE_MESSAGE,
    PROVIDER_UNRESOLVED_NOTICE,
    TENANT_REQUIRED_MESSAGE,
    TENANTS_UNAVAILABLE_MESSAGE,
    StorageConfigForm,
)
from tests.fixtures.factories import (
    StorageConfigFactory,
    SystemCredentialFactory,
    TenantCredentialFactory,
    TenantFactory,
)


@pytest.fixture
def credentials(provider_catalog, sample_tenant_id):
    return {
        "system_aws": SystemCredentialFactory(name="Shared AWS", provider="aws"),
        "system_google": SystemCredentialFactory(name="Shared Google", provider="google"),
        "tenant_aws": TenantCredentialFactory(name="Acme AWS", provider="aws", tenant_id=sample_tenant_id),
    }


@pytest.fixture
def form(gateway, registry, resolver, tenant_service, provider_catalog):
    form = StorageConfigForm(gateway, registry, resolver, tenant_service)
    form.load_providers()
    return form


def _fill_s3(form, credential_id):
    form.update_field("name", "Documentos")
    form.select_provider("s3")
    form.select_credential(credential_id)
    form.update_setting("bucket", "acme-docs")
    form.update_setting("region", "sa-east-1")


class TestCredentialResolution:
    def test_select_provider_resolves_system_credentials(self, form, credentials):
        form.select_provider("s3")

        assert [c.name for c in form.available_credentials] == ["Shared AWS"]
        assert form.tenant_credentials == []
        assert form.notice is None

    def test_tenant_scope_adds_tenant_credentials(self, form, credentials, sample_tenant_id):
        form.select_provider("s3")
        form.set_config_type("tenant")
        form.select_tenant(sample_tenant_id)

        assert [c.name for c in form.available_credentials] == ["Shared AWS", "Acme AWS"]

    def test_back_to_system_drops_tenant_credential(self, form, credentials, sample_tenant_id):
        form.select_provider("s3")
        form.set_config_type("tenant")
        form.select_tenant(sample_tenant_id)
        form.select_credential(credentials["tenant_aws"].id)

        form.set_config_type("system")

        assert form.values["credentialId"] == ""
        assert form.values["tenantId"] is None

    def test_switching_tenant_keeps_system_credential(self, form, credentials, sample_tenant_id):
        form.select_provider("s3")
        form.set_config_type("tenant")
        form.select_tenant(sample_tenant_id)
        form.select_credential(credentials["system_aws"].id)

        form.select_tenant("tenant-other")

        assert form.values["credentialId"] == credentials["system_aws"].id

    def test_switching_provider_resets_dependents(self, form, credentials):
        _fill_s3(form, credentials["system_aws"].id)

        form.select_provider("google_drive")

        assert form.values["credentialId"] == ""
        assert form.values["settings"] == {}
        assert [c.name for c in form.available_credentials] == ["Shared Google"]
        assert [f.key for f in form.settings_fields()] == ["folder_id"]

    def test_unresolved_provider_notice(self, form, provider_catalog):
        SystemCredentialFactory(name="Dropbox", provider="dropbox")

        form.select_provider("dropbox")

        assert form.notice == PROVIDER_UNRESOLVED_NOTICE
        assert [c.name for c in form.available_credentials] == ["Dropbox"]
        assert form.settings_fields() == []

    def test_lookup_failure_clears_lists(self, form, credentials, resolver):
        form.select_provider("s3")
        assert form.available_credentials

        with patch.object(resolver, "resolve", side_effect=CredentialLookupFailedError("failed")):
            form.set_config_type("tenant")

        assert form.system_credentials == []
        assert form.tenant_credentials == []
        assert form.available_credentials == []
        assert form.banner == CREDENTIALS_UNAVAILABLE_MESSAGE


class TestValidation:
    def test_tenant_scope_without_tenant_has_single_error(self, form, credentials):
        _fill_s3(form, credentials["system_aws"].id)
        form.set_config_type("tenant")

        assert form.validate() == {"tenantId": TENANT_REQUIRED_MESSAGE}

    def test_valid_system_config(self, form, credentials):
        _fill_s3(form, credentials["system_aws"].id)
        assert form.validate() == {}
        assert form.is_valid is True

    def test_required_fields(self, form):
        assert form.validate() == {
            "name": "Nome é obrigatório",
            "provider": "Selecione um provedor",
            "credentialId": "Selecione uma credencial",
        }

    def test_incompatible_credential(self, form, credentials):
        _fill_s3(form, credentials["system_google"].id)
        assert form.validate() == {
            "credentialId": "Credencial incompatível com o provedor selecionado"
        }

    def test_settings_validated_with_prefix(self, form, credentials):
        form.update_field("name", "Documentos")
        form.select_provider("s3")
        form.select_credential(credentials["system_aws"].id)
        form.update_setting("max_file_mb", "big")

        assert form.validate() == {
            "settings.bucket": "Bucket é obrigatório",
            "settings.region": "Região é obrigatório",
            "settings.max_file_mb": "Valor numérico inválido",
        }

    @pytest.mark.parametrize(
        "space_limit, message",
        [(-1, "Limite de espaço não pode ser negativo"), ("abc", "Limite de espaço inválido"), (1.5, "Limite de espaço inválido")],
    )
    def test_space_limit(self, form, credentials, space_limit, message):
        _fill_s3(form, credentials["system_aws"].id)
        form.update_field("spaceLimit", space_limit)
        assert form.validate() == {"spaceLimit": message}

    def test_update_setting_clears_error(self, form, credentials):
        _fill_s3(form, credentials["system_aws"].id)
        form.update_setting("bucket", "")
        form.validate()

        form.update_setting("bucket", "docs")
        assert "settings.bucket" not in form.errors


class TestSubmit:
    def test_create_system_config(self, form, gateway, credentials):
        _fill_s3(form, credentials["system_aws"].id)
        form.update_setting("max_file_mb", "250")
        form.update_field("spaceLimit", "1024")

        result = form.submit()

        assert result.success is True
        saved = gateway.get_storage_config(result.record.id)
        assert saved.credential_id == credentials["system_aws"].id
        assert saved.tenant_id is None
        assert saved.space_limit == 1024
        assert saved.settings == {
            "bucket": "acme-docs",
            "region": "sa-east-1",
            "max_file_mb": 250,
            "versioning": False,
        }

    def test_create_tenant_config_with_tenant_credential(self, form, gateway, credentials, sample_tenant_id):
        _fill_s3(form, credentials["tenant_aws"].id)
        form.set_config_type("tenant")
        form.select_tenant(sample_tenant_id)
        form.select_credential(credentials["tenant_aws"].id)

        result = form.submit()

        assert result.success is True
        assert result.record.config_type == "tenant"
        assert result.record.tenant_id == sample_tenant_id

    def test_conflict_banner_keeps_draft(self, registry, resolver, credentials):
        gateway = Mock()
        gateway.create_storage_config.side_effect = ConflictError("Duplicate", field="name")
        form = StorageConfigForm(gateway, registry, resolver)
        form.load_providers()
        _fill_s3(form, credentials["system_aws"].id)

        result = form.submit()

        assert result.success is False
        assert form.errors == {"name": "Valor já em uso"}
        assert form.banner == "Já existe um registro com estes dados."
        assert form.values["name"] == "Documentos"

    def test_edit_existing(self, form, gateway, credentials):
        config = StorageConfigFactory(
            provider="s3",
            credential_id=credentials["system_aws"].id,
            settings={"bucket": "old", "region": "us-east-1"},
        )

        assert form.load(config.id) is True
        assert form.mode == FormMode.EDIT
        assert [c.name for c in form.available_credentials] == ["Shared AWS"]

        form.update_setting("bucket", "new")
        result = form.submit()

        assert result.success is True
        assert gateway.get_storage_config(config.id).settings["bucket"] == "new"


class TestTenants:
    def test_load_tenants(self, form):
        TenantFactory(name="Acme")
        assert [t.name for t in form.load_tenants()] == ["Acme"]

    def test_tenants_unavailable(self, gateway, registry, resolver):
        tenant_service = Mock()
        tenant_service.list_tenants.side_effect = DataUnavailableError("down")
        form = StorageConfigForm(gateway, registry, resolver, tenant_service)

        assert form.load_tenants() == []
        assert form.banner == TENANTS_UNAVAILABLE_MESSAGE
