"""
Write boundary for credentials, storage configurations and modules.

Payloads arrive as schema instances or camelCase/snake_case mappings and
are stored under their column names. Every failure is translated by
translate_store_error, so callers deal with ConflictError,
PermissionDeniedError, NotFoundError, DataUnavailableError and
ValidationError only.
"""

from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from ..config import get_config
from ..context.operation_context import operation
from ..context.tenant_context import TenantContext
from ..db.db_credential_models import SystemCredential, TenantCredential
from ..db.db_module_models import SaaSModule
from ..db.db_storage_models import StorageConfig
from ..exceptions import ErrorCode, PermissionDeniedError, ValidationError, not_found
from ..schemas.credential_schemas import (
    SystemCredentialCreate,
    SystemCredentialRead,
    SystemCredentialUpdate,
    TenantCredentialCreate,
    TenantCredentialRead,
    TenantCredentialUpdate,
)
from ..schemas.module_schemas import SaaSModuleCreate, SaaSModuleRead, SaaSModuleUpdate
from ..schemas.storage_schemas import StorageConfigCreate, StorageConfigRead, StorageConfigUpdate
from ..utils.crud_helpers import create_record, get_record_by_id, update_record
from .base_service import SessionManagedService

TSchema = TypeVar("TSchema", bound=BaseModel)
Payload = Union[BaseModel, Mapping[str, Any]]


def coerce_payload(payload: Payload, schema: Type[TSchema]) -> TSchema:
    """
    Validate ``payload`` into ``schema``.

    Raises:
        ValidationError: The payload does not fit the schema; ``errors``
            in the context lists pydantic's findings
    """
    if isinstance(payload, schema):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(
            f"Invalid {schema.__name__} payload",
            error_code=ErrorCode.VALIDATION_FAILED,
            errors=[
                {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
                for err in e.errors()
            ],
        ) from e


class ConfigurationGateway(SessionManagedService):
    """Creates, updates and reads the records edited by the admin forms."""

    def __init__(self, session: Optional[Session] = None):
        super().__init__(session=session)

    def _create(self, model_class, create_schema, read_schema, payload: Payload):
        data = coerce_payload(payload, create_schema).model_dump()
        record = create_record(self.session, model_class, data)
        return read_schema.model_validate(record)

    def _update(self, model_class, update_schema, read_schema, record_id: str, payload: Payload):
        data = coerce_payload(payload, update_schema).model_dump(exclude_unset=True)
        record = update_record(self.session, model_class, record_id, data)
        return read_schema.model_validate(record)

    def _get(self, model_class, read_schema, record_id: str):
        try:
            record = get_record_by_id(self.session, model_class, record_id)
        except Exception as e:
            self._handle_service_exception(
                "get", e, entity_id=record_id, resource=model_class.__tablename__
            )
        if record is None:
            raise not_found(model_class.__name__, record_id=record_id)
        return read_schema.model_validate(record)

    # Storage configurations

    @operation()
    def create_storage_config(self, payload: Payload) -> StorageConfigRead:
        """
        Insert a storage configuration.

        Raises:
            ConflictError: A uniqueness constraint was violated
        """
        return self._create(StorageConfig, StorageConfigCreate, StorageConfigRead, payload)

    @operation()
    def update_storage_config(self, config_id: str, payload: Payload) -> StorageConfigRead:
        """
        Update a storage configuration.

        Raises:
            NotFoundError: No such configuration is visible
            PermissionDeniedError: The store refused or silently skipped the write
        """
        return self._update(
            StorageConfig, StorageConfigUpdate, StorageConfigRead, config_id, payload
        )

    def get_storage_config(self, config_id: str) -> StorageConfigRead:
        return self._get(StorageConfig, StorageConfigRead, config_id)

    # System credentials

    @operation()
    def create_system_credential(self, payload: Payload) -> SystemCredentialRead:
        return self._create(
            SystemCredential, SystemCredentialCreate, SystemCredentialRead, payload
        )

    @operation()
    def update_system_credential(self, credential_id: str, payload: Payload) -> SystemCredentialRead:
        return self._update(
            SystemCredential, SystemCredentialUpdate, SystemCredentialRead, credential_id, payload
        )

    def get_system_credential(self, credential_id: str) -> SystemCredentialRead:
        return self._get(SystemCredential, SystemCredentialRead, credential_id)

    # Tenant credentials

    def _check_tenant_isolation(self, tenant_id: Optional[str], credential_id: Optional[str] = None):
        """Refuse writes to another tenant's credential while a tenant context is set."""
        current = TenantContext.get_current_tenant_id()
        if not get_config().features.enable_tenant_isolation or current is None:
            return
        if tenant_id != current:
            raise PermissionDeniedError(
                "Tenant credential belongs to another tenant",
                resource="tenant_credentials",
                expected_tenant_id=current,
                actual_tenant_id=tenant_id,
                credential_id=credential_id,
            )

    @operation()
    def create_tenant_credential(self, payload: Payload) -> TenantCredentialRead:
        data = coerce_payload(payload, TenantCredentialCreate)
        self._check_tenant_isolation(data.tenant_id)
        return self._create(TenantCredential, TenantCredentialCreate, TenantCredentialRead, data)

    @operation()
    def update_tenant_credential(self, credential_id: str, payload: Payload) -> TenantCredentialRead:
        existing = self.get_tenant_credential(credential_id)
        self._check_tenant_isolation(existing.tenant_id, credential_id)
        return self._update(
            TenantCredential, TenantCredentialUpdate, TenantCredentialRead, credential_id, payload
        )

    def get_tenant_credential(self, credential_id: str) -> TenantCredentialRead:
        return self._get(TenantCredential, TenantCredentialRead, credential_id)

    # Modules

    @operation()
    def create_module(self, payload: Payload) -> SaaSModuleRead:
        """
        Insert a SaaS module.

        Raises:
            ConflictError: ``code`` is already taken (field='code')
        """
        return self._create(SaaSModule, SaaSModuleCreate, SaaSModuleRead, payload)

    @operation()
    def update_module(self, module_id: str, payload: Payload) -> SaaSModuleRead:
        return self._update(SaaSModule, SaaSModuleUpdate, SaaSModuleRead, module_id, payload)

    def get_module(self, module_id: str) -> SaaSModuleRead:
        return self._get(SaaSModule, SaaSModuleRead, module_id)
