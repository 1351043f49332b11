"""
Read access to the credential and storage provider catalogs.
"""

from typing import Dict, List, Optional, Tuple, Type, Union

from sqlalchemy.orm import Session

from ..context.operation_context import operation
from ..db.db_provider_models import CredentialProvider, StorageProvider
from ..enums import ProviderKind
from ..exceptions import ProviderNotFoundError
from ..schemas.provider_schemas import CredentialProviderRead, ProviderRead, StorageProviderRead
from .base_service import SessionManagedService

_CATALOGS: Dict[ProviderKind, Tuple[Type, Type[ProviderRead]]] = {
    ProviderKind.CREDENTIAL: (CredentialProvider, CredentialProviderRead),
    ProviderKind.STORAGE: (StorageProvider, StorageProviderRead),
}


class ProviderRegistry(SessionManagedService):
    """
    Provider catalog lookups. Read-only.

    Store connectivity failures surface as DataUnavailableError; an empty
    catalog is an empty list, not an error.
    """

    def __init__(self, session: Optional[Session] = None):
        super().__init__(session=session)

    @staticmethod
    def _catalog(kind: Union[ProviderKind, str]) -> Tuple[Type, Type[ProviderRead]]:
        return _CATALOGS[ProviderKind(kind)]

    @operation()
    def list_providers(
        self, kind: Union[ProviderKind, str], active_only: bool = True
    ) -> List[ProviderRead]:
        """
        Providers of ``kind`` ordered by name.

        Args:
            kind: ProviderKind.CREDENTIAL or ProviderKind.STORAGE
            active_only: Skip providers with is_active = false

        Raises:
            DataUnavailableError: The store could not be reached
        """
        model, read_schema = self._catalog(kind)
        try:
            query = self.session.query(model)
            if active_only:
                query = query.filter(model.is_active.is_(True))
            rows = query.order_by(model.name).all()
        except Exception as e:
            self._handle_service_exception("list_providers", e, resource=model.__tablename__)

        return [read_schema.model_validate(row) for row in rows]

    def find_provider(self, kind: Union[ProviderKind, str], code: str) -> Optional[ProviderRead]:
        """Provider with ``code`` or None. Inactive providers are returned too."""
        model, read_schema = self._catalog(kind)
        try:
            row = self.session.get(model, code)
        except Exception as e:
            self._handle_service_exception(
                "find_provider", e, entity_id=code, resource=model.__tablename__
            )

        return read_schema.model_validate(row) if row is not None else None

    @operation()
    def get_provider(self, kind: Union[ProviderKind, str], code: str) -> ProviderRead:
        """
        Provider with ``code``.

        Raises:
            ProviderNotFoundError: No provider of ``kind`` has this code
            DataUnavailableError: The store could not be reached
        """
        provider = self.find_provider(kind, code)
        if provider is None:
            raise ProviderNotFoundError(ProviderKind(kind).value, code)
        return provider

    def list_credential_providers(self, active_only: bool = True) -> List[CredentialProviderRead]:
        return self.list_providers(ProviderKind.CREDENTIAL, active_only)

    def list_storage_providers(self, active_only: bool = True) -> List[StorageProviderRead]:
        return self.list_providers(ProviderKind.STORAGE, active_only)
