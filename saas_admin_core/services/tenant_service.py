"""
Tenant lookups for tenant-scoped forms.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from ..config import get_config
from ..context.operation_context import operation
from ..db.db_tenant_models import Tenant
from ..exceptions import not_found
from ..schemas.tenant_schemas import TenantRead
from ..utils.crud_helpers import list_records
from .base_service import SessionManagedService


class TenantService(SessionManagedService):
    """Read-only tenant access."""

    def __init__(self, session: Optional[Session] = None):
        super().__init__(session=session)

    @operation()
    def list_tenants(self, active_only: bool = True, limit: Optional[int] = None) -> List[TenantRead]:
        """Tenants ordered by name, for tenant pickers."""
        limit = limit or get_config().console.default_page_size
        try:
            tenants = list_records(
                self.session,
                Tenant,
                filters={"is_active": True if active_only else None},
                order_by="name",
                limit=limit,
            )
        except Exception as e:
            self._handle_service_exception("list_tenants", e, resource=Tenant.__tablename__)

        return [TenantRead.model_validate(tenant) for tenant in tenants]

    @operation()
    def get_tenant(self, tenant_id: str) -> TenantRead:
        """
        Tenant by id.

        Raises:
            NotFoundError: No tenant with this id
        """
        try:
            tenant = self.session.get(Tenant, tenant_id)
        except Exception as e:
            self._handle_service_exception(
                "get_tenant", e, entity_id=tenant_id, resource=Tenant.__tablename__
            )

        if tenant is None:
            raise not_found("Tenant", tenant_id=tenant_id)
        return TenantRead.model_validate(tenant)
