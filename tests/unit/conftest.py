"""
Unit test conftest.py - Component-specific fixtures.

Services share the test session, factories are bound to it and a small
provider catalog is available for registry, resolver and form tests.
"""

import pytest

from saas_admin_core.services.compatibility_resolver import CompatibilityResolver
from saas_admin_core.services.configuration_gateway import ConfigurationGateway
from saas_admin_core.services.provider_registry import ProviderRegistry
from saas_admin_core.services.tenant_service import TenantService
from tests.fixtures.factories import (
    CredentialProviderFactory,
    GoogleCredentialProviderFactory,
    S3StorageProviderFactory,
    StorageProviderFactory,
    configure_factories,
)


@pytest.fixture(autouse=True)
def bind_factories(db_session):
    configure_factories(db_session)
    yield


# ==================== SERVICE FIXTURES ====================


@pytest.fixture(scope="function")
def registry(db_session):
    return ProviderRegistry(session=db_session)


@pytest.fixture(scope="function")
def resolver(db_session, registry):
    return CompatibilityResolver(session=db_session, registry=registry)


@pytest.fixture(scope="function")
def gateway(db_session):
    return ConfigurationGateway(session=db_session)


@pytest.fixture(scope="function")
def tenant_service(db_session):
    return TenantService(session=db_session)


# ==================== CATALOG FIXTURES ====================


@pytest.fixture(scope="function")
def provider_catalog(db_session):
    """
    aws (api_key only), google (oauth2 + service_account) and an inactive
    provider; s3 declaring ['aws'] and google_drive declaring nothing.
    """
    return {
        "aws": CredentialProviderFactory(code="aws", name="AWS", icon="cloud"),
        "google": GoogleCredentialProviderFactory(),
        "legacy": CredentialProviderFactory(code="legacy", name="Legacy", is_active=False),
        "s3": S3StorageProviderFactory(),
        "google_drive": StorageProviderFactory(
            code="google_drive",
            name="Google Drive",
            credential_providers=None,
            settings_schema={"folder_id": {"type": "text", "label": "Pasta", "required": True}},
        ),
    }
