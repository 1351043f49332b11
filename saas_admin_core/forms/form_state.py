"""
Shared state machine for admin forms.

A form owns one in-memory draft (camelCase keys, like the console), the
field errors shown next to inputs, a banner message and the submitting
flag that blocks duplicate submissions. Subclasses declare their
defaults, validation and the gateway call that persists the draft.
"""

import copy
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from ..enums import FormMode
from ..exceptions import (
    BaseError,
    ConflictError,
    DataUnavailableError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from ..utils.logger import get_logger

VALIDATION_BANNER = "Verifique os campos do formulário"
SUBMIT_IN_PROGRESS_MESSAGE = "Aguarde o término do envio atual"
PERMISSION_DENIED_MESSAGE = (
    "Você não tem permissão para alterar este registro. A operação foi bloqueada pelas "
    "políticas de segurança do banco (RLS); verifique se o registro pertence ao seu "
    "usuário ou tenant."
)
NOT_FOUND_MESSAGE = "Registro não encontrado. Ele pode ter sido removido."
UNAVAILABLE_MESSAGE = "Não foi possível conectar ao banco de dados. Tente novamente."
INVALID_DATA_MESSAGE = "Os dados enviados são inválidos. Revise o formulário."
CONFLICT_FIELD_MESSAGE = "Valor já em uso"
CONFLICT_BANNER = "Já existe um registro com estes dados."


class SubmitStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class SubmitResult(BaseModel):
    """Outcome of FormWorkflow.submit()."""

    status: SubmitStatus
    success: bool
    record: Optional[Any] = Field(default=None, description="Read model of the saved record")
    error_message: Optional[str] = None
    error_code: Optional[str] = None
    field_errors: Dict[str, str] = Field(default_factory=dict)
    retryable: bool = False

    # Serialized error, including the redacted payload that failed to save
    diagnostics: Dict[str, Any] = Field(default_factory=dict)

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def success_result(cls, record: Any = None, **kwargs) -> "SubmitResult":
        return cls(status=SubmitStatus.SUCCESS, success=True, record=record, **kwargs)

    @classmethod
    def failure_result(
        cls, error_message: str, error_code: Optional[str] = None, **kwargs
    ) -> "SubmitResult":
        return cls(
            status=SubmitStatus.FAILURE,
            success=False,
            error_message=error_message,
            error_code=error_code,
            **kwargs,
        )


class FormWorkflow:
    """
    Base class for one editing session.

    Subclasses set DEFAULTS, RESOURCE_LABEL and CONFLICT_MESSAGES and
    implement ``_collect_errors`` and ``_persist``.
    """

    DEFAULTS: Dict[str, Any] = {}
    RESOURCE_LABEL = "o registro"

    # {field: (field message, banner)} for uniqueness conflicts
    CONFLICT_MESSAGES: Dict[str, tuple] = {}

    def __init__(self, gateway, mode: FormMode = FormMode.CREATE, record_id: Optional[str] = None):
        self.gateway = gateway
        self.mode = FormMode(mode)
        self.record_id = record_id
        self.values: Dict[str, Any] = copy.deepcopy(self.DEFAULTS)
        self.errors: Dict[str, str] = {}
        self.banner: Optional[str] = None
        self.submitting = False
        self.last_result: Optional[SubmitResult] = None
        self.logger = get_logger()

    # Draft editing

    def update_field(self, key: str, value: Any) -> None:
        """Set a top-level draft value and clear its error."""
        self.values[key] = value
        self.errors.pop(key, None)

    def clear_errors(self, prefix: str) -> None:
        """Drop ``prefix`` and every ``prefix.*`` error."""
        for key in [k for k in self.errors if k == prefix or k.startswith(f"{prefix}.")]:
            del self.errors[key]

    def dismiss_banner(self) -> None:
        self.banner = None

    def _populate(self, record: BaseModel) -> None:
        """Fill the draft from a read model, keeping only form fields."""
        view = record.model_dump(by_alias=True)
        self.values = {
            key: copy.deepcopy(view.get(key, default)) for key, default in self.DEFAULTS.items()
        }
        self.record_id = view.get("id")
        self.mode = FormMode.EDIT

    # Validation and submission

    def _collect_errors(self) -> Dict[str, str]:
        raise NotImplementedError

    def _persist(self) -> BaseModel:
        raise NotImplementedError

    def validate(self) -> Dict[str, str]:
        """Run validation, replace ``errors`` and return them."""
        self.errors = self._collect_errors()
        return dict(self.errors)

    @property
    def is_valid(self) -> bool:
        return not self._collect_errors()

    def submit(self) -> SubmitResult:
        """
        Validate and persist the draft.

        Blocked while another submission is in flight. On any failure the
        draft is left as it was so the user can fix it and resubmit.
        """
        if self.submitting:
            return SubmitResult.failure_result(SUBMIT_IN_PROGRESS_MESSAGE, "SUBMIT_IN_PROGRESS")

        if self.validate():
            self.banner = VALIDATION_BANNER
            self.last_result = SubmitResult.failure_result(
                VALIDATION_BANNER, "VALIDATION_FAILED", field_errors=dict(self.errors)
            )
            return self.last_result

        self.submitting = True
        self.banner = None
        try:
            record = self._persist()
        except BaseError as e:
            self.last_result = self._handle_store_error(e)
            return self.last_result
        finally:
            self.submitting = False

        self.record_id = getattr(record, "id", self.record_id)
        self.mode = FormMode.EDIT
        self.logger.info(
            f"{type(self).__name__} saved",
            extra={"record_id": self.record_id},
        )
        self.last_result = SubmitResult.success_result(record=record)
        return self.last_result

    def _handle_store_error(self, error: BaseError) -> SubmitResult:
        """Map a gateway error onto banner and field errors."""
        retryable = False

        if isinstance(error, ConflictError):
            field = to_camel(error.field) if error.field else None
            field_message, banner = self.CONFLICT_MESSAGES.get(
                field, (CONFLICT_FIELD_MESSAGE, CONFLICT_BANNER)
            )
            if field and field in self.values:
                self.errors[field] = field_message
            self.banner = banner
        elif isinstance(error, PermissionDeniedError):
            self.banner = PERMISSION_DENIED_MESSAGE
        elif isinstance(error, NotFoundError):
            self.banner = NOT_FOUND_MESSAGE
        elif isinstance(error, DataUnavailableError):
            self.banner = UNAVAILABLE_MESSAGE
            retryable = True
        elif isinstance(error, ValidationError):
            self.banner = INVALID_DATA_MESSAGE
        else:
            self.banner = (
                f"Ocorreu um erro ao salvar {self.RESOURCE_LABEL}. Por favor, tente novamente."
            )

        return SubmitResult.failure_result(
            self.banner,
            error.error_code.value,
            field_errors=dict(self.errors),
            retryable=retryable,
            diagnostics=error.to_dict(include_cause=True),
        )
