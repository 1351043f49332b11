"""
Credential compatibility resolution for storage configurations.

Given a storage provider code and a configuration scope, find the stored
credentials that can be bound to it. The lookup never blocks on a
provider missing from the catalog: codes then come from the fallback
table, and finally from the provider code itself.
"""

from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from ..config import get_config
from ..constants import FALLBACK_CREDENTIAL_PROVIDERS
from ..context.operation_context import operation
from ..db.db_credential_models import SystemCredential, TenantCredential
from ..enums import ConfigType, ProviderKind
from ..exceptions import CredentialLookupFailedError, ProviderUnresolvedError
from ..schemas.credential_schemas import SystemCredentialRead, TenantCredentialRead
from ..schemas.provider_schemas import StorageProviderRead
from .base_service import SessionManagedService
from .provider_registry import ProviderRegistry

CredentialRead = Union[SystemCredentialRead, TenantCredentialRead]


class CompatibleCredentials(BaseModel):
    """
    Outcome of one resolution.

    System and tenant credentials are kept apart; ``eligible(scope)`` gives
    the list a configuration of that scope may choose from.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    provider_code: str
    compatible_codes: List[str] = Field(default_factory=list)
    system_credentials: List[SystemCredentialRead] = Field(default_factory=list)
    tenant_credentials: List[TenantCredentialRead] = Field(default_factory=list)
    provider: Optional[StorageProviderRead] = None
    unresolved: Optional[ProviderUnresolvedError] = Field(default=None, exclude=True)

    @property
    def provider_resolved(self) -> bool:
        return self.unresolved is None

    def eligible(self, scope: Union[ConfigType, str]) -> List[CredentialRead]:
        """System credentials for system scope; system then tenant credentials for tenant scope."""
        if ConfigType(scope) == ConfigType.TENANT:
            return [*self.system_credentials, *self.tenant_credentials]
        return list(self.system_credentials)

    def eligible_ids(self, scope: Union[ConfigType, str]) -> List[str]:
        return [credential.id for credential in self.eligible(scope)]

    def is_eligible(self, credential_id: Optional[str], scope: Union[ConfigType, str]) -> bool:
        return bool(credential_id) and credential_id in self.eligible_ids(scope)


def compatible_provider_codes(
    provider_code: str,
    provider: Optional[StorageProviderRead],
    fallback_table: Optional[Mapping[str, Sequence[str]]] = None,
) -> List[str]:
    """
    Credential provider codes usable with ``provider_code``. Never empty.

    Order of precedence: the provider's declared ``credential_providers``,
    the fallback table entry, then ``[provider_code]``. An empty declared
    list counts as undeclared.
    """
    if fallback_table is None:
        fallback_table = FALLBACK_CREDENTIAL_PROVIDERS

    declared = provider.credential_providers if provider is not None else None
    if declared:
        codes = declared
    elif fallback_table.get(provider_code):
        codes = fallback_table[provider_code]
    else:
        codes = [provider_code]

    # Deduplicate, keep order
    return list(dict.fromkeys(code for code in codes if code)) or [provider_code]


class CompatibilityResolver(SessionManagedService):
    """Finds the credentials a storage configuration can use."""

    def __init__(
        self,
        session: Optional[Session] = None,
        registry: Optional[ProviderRegistry] = None,
        fallback_table: Optional[Mapping[str, Sequence[str]]] = None,
    ):
        super().__init__(session=session)
        self.registry = registry or ProviderRegistry(session=self.session)
        if fallback_table is None:
            fallback_table = (
                FALLBACK_CREDENTIAL_PROVIDERS
                if get_config().features.enable_provider_fallback
                else {}
            )
        self.fallback_table: Dict[str, Sequence[str]] = dict(fallback_table)

    def resolve_codes(
        self, provider_code: str
    ) -> Tuple[List[str], Optional[StorageProviderRead], Optional[ProviderUnresolvedError]]:
        """
        Compatible codes, the provider if found, and the unresolved error if not.

        The error is built (and so logged) but not raised.
        """
        provider = self.registry.find_provider(ProviderKind.STORAGE, provider_code)
        codes = compatible_provider_codes(provider_code, provider, self.fallback_table)

        unresolved = None
        if provider is None:
            unresolved = ProviderUnresolvedError(provider_code, fallback_codes=codes)
        return codes, provider, unresolved

    @operation()
    def resolve(
        self,
        provider_code: str,
        scope: Union[ConfigType, str] = ConfigType.SYSTEM,
        tenant_id: Optional[str] = None,
    ) -> CompatibleCredentials:
        """
        Active credentials compatible with ``provider_code``, ordered by name.

        Tenant credentials are only looked up for tenant scope with a tenant id.

        Raises:
            CredentialLookupFailedError: Any query failed. No partial result
                is returned.
        """
        scope = ConfigType(scope)
        try:
            codes, provider, unresolved = self.resolve_codes(provider_code)
            system_credentials = self._query(SystemCredential, codes).all()
            tenant_credentials = []
            if scope == ConfigType.TENANT and tenant_id:
                tenant_credentials = (
                    self._query(TenantCredential, codes)
                    .filter(TenantCredential.tenant_id == tenant_id)
                    .all()
                )
        except Exception as e:
            raise CredentialLookupFailedError(
                f"Failed to look up credentials for provider {provider_code}",
                cause=e,
                provider_code=provider_code,
                scope=scope.value,
                tenant_id=tenant_id,
            ) from e

        result = CompatibleCredentials(
            provider_code=provider_code,
            compatible_codes=codes,
            system_credentials=[SystemCredentialRead.model_validate(c) for c in system_credentials],
            tenant_credentials=[TenantCredentialRead.model_validate(c) for c in tenant_credentials],
            provider=provider,
            unresolved=unresolved,
        )
        self.logger.info(
            "Resolved compatible credentials",
            extra={
                "provider_code": provider_code,
                "compatible_codes": codes,
                "system_count": len(result.system_credentials),
                "tenant_count": len(result.tenant_credentials),
                "provider_resolved": result.provider_resolved,
            },
        )
        return result

    def _query(self, model, codes: List[str]):
        return (
            self.session.query(model)
            .filter(model.provider.in_(codes), model.is_active.is_(True))
            .order_by(model.name)
        )
