"""
Storage configuration form.

The credential dropdown is driven by the CompatibilityResolver and is
re-resolved whenever the provider, the scope or the tenant changes. A
selected credential that stops being eligible is dropped.
"""

import copy
from typing import Any, Dict, List, Optional

from ..enums import ConfigType, FormMode
from ..exceptions import BaseError, CredentialLookupFailedError
from ..schemas.provider_schemas import StorageProviderRead
from ..schemas.tenant_schemas import TenantRead
from ..utils.icon_registry import IconHandle, resolve_icon
from . import field_walker
from .field_walker import RenderableField, is_absent, parse_number
from .form_state import FormWorkflow

PROVIDERS_UNAVAILABLE_MESSAGE = "Não foi possível carregar os provedores de armazenamento."
TENANTS_UNAVAILABLE_MESSAGE = "Não foi possível carregar os tenants."
CREDENTIALS_UNAVAILABLE_MESSAGE = (
    "Não foi possível carregar as credenciais compatíveis. Tente novamente."
)
PROVIDER_UNRESOLVED_NOTICE = (
    "Provedor não encontrado no catálogo; exibindo credenciais do mesmo código."
)
TENANT_REQUIRED_MESSAGE = "Tenant é obrigatório para configurações do tipo tenant"


class StorageConfigForm(FormWorkflow):
    """Create or edit a storage configuration."""

    DEFAULTS: Dict[str, Any] = {
        "name": "",
        "description": "",
        "provider": "",
        "configType": ConfigType.SYSTEM.value,
        "tenantId": None,
        "credentialId": "",
        "settings": {},
        "isActive": True,
        "isDefault": False,
        "spaceLimit": None,
    }
    RESOURCE_LABEL = "a configuração de armazenamento"

    def __init__(
        self,
        gateway,
        registry,
        resolver,
        tenant_service=None,
        mode: FormMode = FormMode.CREATE,
        record_id: Optional[str] = None,
    ):
        super().__init__(gateway, mode=mode, record_id=record_id)
        self.registry = registry
        self.resolver = resolver
        self.tenant_service = tenant_service
        self.providers: List[StorageProviderRead] = []
        self.tenants: List[TenantRead] = []
        self.selected_provider: Optional[StorageProviderRead] = None
        self.compatible = None
        self.notice: Optional[str] = None

    # Loading

    def load_providers(self) -> List[StorageProviderRead]:
        try:
            self.providers = self.registry.list_storage_providers()
        except BaseError:
            self.providers = []
            self.banner = PROVIDERS_UNAVAILABLE_MESSAGE
        return self.providers

    def load_tenants(self) -> List[TenantRead]:
        if self.tenant_service is None:
            return self.tenants
        try:
            self.tenants = self.tenant_service.list_tenants()
        except BaseError:
            self.tenants = []
            self.banner = TENANTS_UNAVAILABLE_MESSAGE
        return self.tenants

    def load(self, config_id: str) -> bool:
        """Open an existing configuration. Returns False with the banner set on failure."""
        if not self.providers:
            self.load_providers()

        try:
            record = self.gateway.get_storage_config(config_id)
        except BaseError as e:
            self._handle_store_error(e)
            return False

        self._populate(record)
        self.values["settings"] = self.values.get("settings") or {}
        self.values["credentialId"] = self.values.get("credentialId") or ""
        self.selected_provider = self._find_provider(self.values["provider"])
        self._resolve_credentials()
        return True

    def _find_provider(self, code: Optional[str]) -> Optional[StorageProviderRead]:
        return next((p for p in self.providers if p.code == code), None)

    # Draft changes

    def select_provider(self, code: str) -> None:
        """Switch provider; the credential and settings belong to the old one and are reset."""
        self.values["provider"] = code or ""
        self.values["credentialId"] = ""
        self.values["settings"] = {}
        self.selected_provider = self._find_provider(code)
        self.errors.pop("provider", None)
        self.errors.pop("credentialId", None)
        self.clear_errors("settings")
        self._resolve_credentials()

    def set_config_type(self, config_type: str) -> None:
        config_type = ConfigType(config_type)
        self.values["configType"] = config_type.value
        if config_type == ConfigType.SYSTEM:
            self.values["tenantId"] = None
        self.errors.pop("configType", None)
        self.errors.pop("tenantId", None)
        self._resolve_credentials()
        self._drop_ineligible_credential()

    def select_tenant(self, tenant_id: Optional[str]) -> None:
        self.values["tenantId"] = tenant_id or None
        self.errors.pop("tenantId", None)
        self._resolve_credentials()
        self._drop_ineligible_credential()

    def select_credential(self, credential_id: Optional[str]) -> None:
        self.update_field("credentialId", credential_id or "")

    def update_setting(self, key: str, value: Any) -> None:
        self.values["settings"][key] = value
        self.errors.pop(f"settings.{key}", None)

    def _resolve_credentials(self) -> None:
        self.notice = None
        provider_code = self.values.get("provider")
        if not provider_code:
            self.compatible = None
            return

        try:
            self.compatible = self.resolver.resolve(
                provider_code,
                scope=self.values["configType"],
                tenant_id=self.values.get("tenantId"),
            )
        except CredentialLookupFailedError:
            self.compatible = None
            self.banner = CREDENTIALS_UNAVAILABLE_MESSAGE
            return

        if not self.compatible.provider_resolved:
            self.notice = PROVIDER_UNRESOLVED_NOTICE

    def _drop_ineligible_credential(self) -> None:
        credential_id = self.values.get("credentialId")
        if credential_id and credential_id not in self.eligible_credential_ids:
            self.values["credentialId"] = ""

    # Display helpers

    @property
    def system_credentials(self) -> list:
        return list(self.compatible.system_credentials) if self.compatible else []

    @property
    def tenant_credentials(self) -> list:
        return list(self.compatible.tenant_credentials) if self.compatible else []

    @property
    def available_credentials(self) -> list:
        if self.compatible is None:
            return []
        return self.compatible.eligible(self.values["configType"])

    @property
    def eligible_credential_ids(self) -> List[str]:
        return [credential.id for credential in self.available_credentials]

    @property
    def settings_schema(self):
        if self.selected_provider is not None:
            return self.selected_provider.settings_schema
        if self.compatible is not None and self.compatible.provider is not None:
            return self.compatible.provider.settings_schema
        return {}

    def settings_fields(self) -> List[RenderableField]:
        return field_walker.renderable_fields(self.settings_schema)

    @property
    def provider_icon(self) -> IconHandle:
        return resolve_icon(self.selected_provider.icon if self.selected_provider else None)

    # Validation and payload

    def _collect_errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}

        if is_absent((self.values.get("name") or "").strip()):
            errors["name"] = "Nome é obrigatório"
        if not self.values.get("provider"):
            errors["provider"] = "Selecione um provedor"

        if self.values.get("configType") == ConfigType.TENANT.value and not self.values.get("tenantId"):
            errors["tenantId"] = TENANT_REQUIRED_MESSAGE

        credential_id = self.values.get("credentialId")
        if not credential_id:
            errors["credentialId"] = "Selecione uma credencial"
        elif self.values.get("provider") and credential_id not in self.eligible_credential_ids:
            errors["credentialId"] = "Credencial incompatível com o provedor selecionado"

        for error in field_walker.validate(self.settings_schema, self.values.get("settings")):
            errors[error.form_key("settings")] = error.message

        space_limit = self.values.get("spaceLimit")
        if not is_absent(space_limit):
            number = parse_number(space_limit)
            if number is None or not number.is_integer():
                errors["spaceLimit"] = "Limite de espaço inválido"
            elif number < 0:
                errors["spaceLimit"] = "Limite de espaço não pode ser negativo"

        return errors

    def payload(self) -> Dict[str, Any]:
        values = copy.deepcopy(self.values)
        values["name"] = values["name"].strip()
        values["description"] = values.get("description") or None
        values["credentialId"] = values.get("credentialId") or None
        values["settings"] = field_walker.normalize_values(self.settings_schema, values.get("settings"))
        if values["configType"] == ConfigType.SYSTEM.value:
            values["tenantId"] = None
        space_limit = values.get("spaceLimit")
        values["spaceLimit"] = None if is_absent(space_limit) else int(parse_number(space_limit))
        return values

    def _persist(self):
        if self.mode == FormMode.EDIT:
            return self.gateway.update_storage_config(self.record_id, self.payload())
        return self.gateway.create_storage_config(self.payload())
