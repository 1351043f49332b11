"""Services of the admin core."""

from .base_service import SessionManagedService
from .compatibility_resolver import (
    CompatibilityResolver,
    CompatibleCredentials,
    compatible_provider_codes,
)
from .configuration_gateway import ConfigurationGateway
from .provider_registry import ProviderRegistry
from .tenant_service import TenantService

__all__ = [
    "SessionManagedService",
    "CompatibilityResolver",
    "CompatibleCredentials",
    "compatible_provider_codes",
    "ConfigurationGateway",
    "ProviderRegistry",
    "TenantService",
]
