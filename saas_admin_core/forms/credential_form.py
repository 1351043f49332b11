"""
Multi-step credential forms.

Step 1 picks the credential provider, step 2 the authentication type and
step 3 fills the fields the provider declares for that type. A provider
with a single authentication type goes straight from step 1 to step 3.
"""

import copy
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..constants import AUTH_TYPE_LABELS
from ..context.tenant_context import tenant_context
from ..enums import FormMode
from ..exceptions import BaseError
from ..schemas.provider_schemas import CredentialProviderRead
from ..utils.icon_registry import IconHandle, resolve_icon
from . import field_walker
from .field_walker import RenderableField, is_absent
from .form_state import FormWorkflow

STEP_PROVIDER = 1
STEP_AUTH_TYPE = 2
STEP_FIELDS = 3

PROVIDERS_UNAVAILABLE_MESSAGE = "Não foi possível carregar os provedores de credenciais."
AUTH_TYPE_NOT_CONFIGURED_MESSAGE = "Tipo de autenticação não configurado para este provedor"


def parse_datetime(value: Any) -> Optional[datetime]:
    """Timezone-aware datetime from a datetime or ISO string; naive values are taken as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def auth_type_label(auth_type: str) -> str:
    return AUTH_TYPE_LABELS.get(auth_type, auth_type)


class CredentialForm(FormWorkflow):
    """Common flow for system and tenant credentials."""

    DEFAULTS: Dict[str, Any] = {
        "name": "",
        "description": "",
        "provider": "",
        "authType": "",
        "credentials": {},
        "isActive": True,
        "expiresAt": None,
    }
    RESOURCE_LABEL = "a credencial"

    def __init__(
        self,
        gateway,
        registry,
        mode: FormMode = FormMode.CREATE,
        record_id: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        super().__init__(gateway, mode=mode, record_id=record_id)
        self.registry = registry
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.providers: List[CredentialProviderRead] = []
        self.selected_provider: Optional[CredentialProviderRead] = None
        self.step = STEP_PROVIDER

    # Loading

    def load_providers(self) -> List[CredentialProviderRead]:
        """Fetch active credential providers. A failure clears the list and sets the banner."""
        try:
            self.providers = self.registry.list_credential_providers()
        except BaseError:
            self.providers = []
            self.banner = PROVIDERS_UNAVAILABLE_MESSAGE
        return self.providers

    def _find_provider(self, code: Optional[str]) -> Optional[CredentialProviderRead]:
        return next((p for p in self.providers if p.code == code), None)

    def _fetch(self, record_id: str):
        raise NotImplementedError

    def load(self, record_id: str) -> bool:
        """
        Open an existing credential for editing.

        Providers are loaded first so the stored provider can be matched.
        Returns False, with the banner set, when the record cannot be read
        or its provider is no longer in the catalog.
        """
        if not self.providers:
            self.load_providers()

        try:
            record = self._fetch(record_id)
        except BaseError as e:
            self._handle_store_error(e)
            return False

        self._populate(record)
        self.selected_provider = self._find_provider(self.values["provider"])
        if self.selected_provider is None:
            self.banner = f'Provedor "{self.values["provider"]}" não encontrado'
            return False

        self.step = STEP_FIELDS
        return True

    # Steps

    def select_provider(self, code: str) -> bool:
        """Pick the provider and reset everything that depends on it."""
        provider = self._find_provider(code)
        if provider is None:
            self.errors["provider"] = "Selecione um provedor"
            return False

        self.selected_provider = provider
        self.values["provider"] = provider.code
        self.values["credentials"] = {}
        self.errors.pop("provider", None)
        self.clear_errors("authType")
        self.clear_errors("credentials")

        if provider.has_single_auth_type:
            self.values["authType"] = provider.auth_types[0]
            self.step = STEP_FIELDS
        else:
            self.values["authType"] = ""
            self.step = STEP_AUTH_TYPE
        return True

    def select_auth_type(self, auth_type: str) -> bool:
        if self.selected_provider is None or auth_type not in self.selected_provider.auth_types:
            self.errors["authType"] = "Selecione um tipo de autenticação"
            return False

        self.values["authType"] = auth_type
        self.values["credentials"] = {}
        self.errors.pop("authType", None)
        self.clear_errors("credentials")
        self.step = STEP_FIELDS
        return True

    def go_back(self) -> int:
        if self.step == STEP_FIELDS and self.selected_provider and self.selected_provider.has_single_auth_type:
            self.step = STEP_PROVIDER
        elif self.step > STEP_PROVIDER:
            self.step -= 1
        return self.step

    def update_credential(self, key: str, value: Any) -> None:
        self.values["credentials"][key] = value
        self.errors.pop(f"credentials.{key}", None)

    # Display helpers

    def auth_type_options(self) -> List[Tuple[str, str]]:
        if self.selected_provider is None:
            return []
        return [(auth_type, auth_type_label(auth_type)) for auth_type in self.selected_provider.auth_types]

    @property
    def credential_schema(self):
        if self.selected_provider is None:
            return None
        return self.selected_provider.fields_for(self.values.get("authType"))

    def credential_fields(self) -> List[RenderableField]:
        return field_walker.renderable_fields(self.credential_schema)

    @property
    def auth_type_configured(self) -> bool:
        return self.credential_schema is not None

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
        if not self.values.get("authType"):
            errors["authType"] = "Selecione um tipo de autenticação"

        if self.values.get("provider") and self.values.get("authType"):
            schema = self.credential_schema
            if schema is None:
                errors["authType"] = AUTH_TYPE_NOT_CONFIGURED_MESSAGE
            else:
                for error in field_walker.validate(schema, self.values.get("credentials")):
                    errors[error.form_key("credentials")] = error.message

        expires_at = self.values.get("expiresAt")
        if not is_absent(expires_at):
            parsed = parse_datetime(expires_at)
            if parsed is None:
                errors["expiresAt"] = "Data de expiração inválida"
            elif parsed < self.clock():
                errors["expiresAt"] = "A data de expiração não pode estar no passado"

        return errors

    def payload(self) -> Dict[str, Any]:
        """camelCase payload for the gateway."""
        values = copy.deepcopy(self.values)
        values["name"] = values["name"].strip()
        values["description"] = values.get("description") or None
        values["credentials"] = field_walker.normalize_values(
            self.credential_schema, values.get("credentials")
        )
        expires_at = values.get("expiresAt")
        values["expiresAt"] = None if is_absent(expires_at) else parse_datetime(expires_at)
        return values


class SystemCredentialForm(CredentialForm):
    """Credential shared by every tenant."""

    def _fetch(self, record_id: str):
        return self.gateway.get_system_credential(record_id)

    def _persist(self):
        if self.mode == FormMode.EDIT:
            return self.gateway.update_system_credential(self.record_id, self.payload())
        return self.gateway.create_system_credential(self.payload())


class TenantCredentialForm(CredentialForm):
    """
    Credential owned by one tenant.

    With ``overrideSystem`` set it replaces a system credential for that
    tenant. Writes run inside the tenant's context.
    """

    DEFAULTS: Dict[str, Any] = {
        **CredentialForm.DEFAULTS,
        "tenantId": None,
        "overrideSystem": False,
        "systemCredentialId": None,
    }

    def select_tenant(self, tenant_id: Optional[str]) -> None:
        self.update_field("tenantId", tenant_id or None)

    def set_override(self, override: bool, system_credential_id: Optional[str] = None) -> None:
        self.values["overrideSystem"] = bool(override)
        self.values["systemCredentialId"] = system_credential_id if override else None
        self.errors.pop("systemCredentialId", None)

    def _collect_errors(self) -> Dict[str, str]:
        errors = super()._collect_errors()
        if not self.values.get("tenantId"):
            errors["tenantId"] = "Tenant é obrigatório"
        if self.values.get("overrideSystem") and not self.values.get("systemCredentialId"):
            errors["systemCredentialId"] = "Selecione a credencial do sistema a ser substituída"
        return errors

    def _fetch(self, record_id: str):
        return self.gateway.get_tenant_credential(record_id)

    def _persist(self):
        with tenant_context(self.values["tenantId"]):
            if self.mode == FormMode.EDIT:
                return self.gateway.update_tenant_credential(self.record_id, self.payload())
            return self.gateway.create_tenant_credential(self.payload())
