"""Pydantic schemas for the admin core."""

from .credential_schemas import (
    SystemCredentialCreate,
    SystemCredentialRead,
    SystemCredentialUpdate,
    TenantCredentialCreate,
    TenantCredentialRead,
    TenantCredentialUpdate,
)
from .field_schemas import FieldOption, FieldSpec, parse_field_schema
from .mixins import CamelModel
from .module_schemas import SaaSModuleCreate, SaaSModuleRead, SaaSModuleUpdate
from .provider_schemas import CredentialProviderRead, ProviderRead, StorageProviderRead
from .storage_schemas import StorageConfigCreate, StorageConfigRead, StorageConfigUpdate
from .tenant_schemas import TenantRead

__all__ = [
    "CamelModel",
    "FieldOption",
    "FieldSpec",
    "parse_field_schema",
    "CredentialProviderRead",
    "StorageProviderRead",
    "ProviderRead",
    "SystemCredentialCreate",
    "SystemCredentialRead",
    "SystemCredentialUpdate",
    "TenantCredentialCreate",
    "TenantCredentialRead",
    "TenantCredentialUpdate",
    "StorageConfigCreate",
    "StorageConfigRead",
    "StorageConfigUpdate",
    "SaaSModuleCreate",
    "SaaSModuleRead",
    "SaaSModuleUpdate",
    "TenantRead",
]
