"""Admin form workflows and the schema-driven field walker."""

from .credential_form import (
    STEP_AUTH_TYPE,
    STEP_FIELDS,
    STEP_PROVIDER,
    CredentialForm,
    SystemCredentialForm,
    TenantCredentialForm,
)
from .field_walker import (
    FieldError,
    RenderableField,
    normalize_values,
    renderable_fields,
    validate,
)
from .form_state import FormWorkflow, SubmitResult, SubmitStatus
from .module_form import ModuleForm
from .storage_config_form import StorageConfigForm

__all__ = [
    "STEP_AUTH_TYPE",
    "STEP_FIELDS",
    "STEP_PROVIDER",
    "CredentialForm",
    "SystemCredentialForm",
    "TenantCredentialForm",
    "FieldError",
    "RenderableField",
    "normalize_values",
    "renderable_fields",
    "validate",
    "FormWorkflow",
    "SubmitResult",
    "SubmitStatus",
    "ModuleForm",
    "StorageConfigForm",
]
