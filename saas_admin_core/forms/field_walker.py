"""
Schema-driven field rendering and validation.

A provider declares its inputs as an ordered ``{key: FieldSpec}`` mapping.
This module turns that mapping into renderable fields and validates
submitted values against it. Dispatch over field types is a table keyed
by every FieldType member; a member without an entry fails at import.
"""

import math
import re
from decimal import Decimal
from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

from ..constants import EMAIL_PATTERN
from ..enums import FieldErrorCode, FieldType
from ..schemas.field_schemas import FieldSpec

FieldSchema = Mapping[str, FieldSpec]

_EMAIL_RE = re.compile(EMAIL_PATTERN)


class RenderableField(BaseModel):
    """One input ready for display."""

    key: str
    label: str
    field_type: FieldType
    declared_type: str
    control: str
    required: bool = False
    sensitive: bool = False
    default: Optional[Any] = None
    options: List[Dict[str, Any]] = Field(default_factory=list)
    help: Optional[str] = None


class FieldError(BaseModel):
    key: str
    code: FieldErrorCode
    message: str

    def form_key(self, prefix: Optional[str] = None) -> str:
        """Key under which the form shows this error, e.g. 'settings.bucket'."""
        return f"{prefix}.{self.key}" if prefix else self.key


def is_absent(value: Any) -> bool:
    """None, empty string and empty collections all count as not provided."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) == 0
    return False


def parse_number(value: Any) -> Optional[float]:
    """Numeric value of ``value``, or None when it is not a number. Booleans, NaN and infinities are not."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def coerce_list(value: Any) -> Optional[List[Any]]:
    """List form of a multi-select value, or None when it cannot be one."""
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    if isinstance(value, (str, int, float, Decimal)):
        return [value]
    return None


# Format checks: return an error message or None
def _accept(value: Any, spec: FieldSpec) -> Optional[str]:
    return None


def _check_email(value: Any, spec: FieldSpec) -> Optional[str]:
    if not isinstance(value, str) or not _EMAIL_RE.search(value):
        return "Email inválido"
    return None


def _check_number(value: Any, spec: FieldSpec) -> Optional[str]:
    if parse_number(value) is None:
        return "Valor numérico inválido"
    return None


def _check_multi_select(value: Any, spec: FieldSpec) -> Optional[str]:
    if coerce_list(value) is None:
        return "Seleção inválida"
    return None


_FORMAT_CHECKS: Dict[FieldType, Callable[[Any, FieldSpec], Optional[str]]] = {
    FieldType.TEXT: _accept,
    FieldType.PASSWORD: _accept,
    FieldType.EMAIL: _check_email,
    FieldType.NUMBER: _check_number,
    FieldType.SELECT: _accept,
    FieldType.MULTI_SELECT: _check_multi_select,
    FieldType.TEXTAREA: _accept,
    FieldType.BOOLEAN: _accept,
}

_CONTROLS: Dict[FieldType, str] = {
    FieldType.TEXT: "input",
    FieldType.PASSWORD: "password",
    FieldType.EMAIL: "email",
    FieldType.NUMBER: "number",
    FieldType.SELECT: "select",
    FieldType.MULTI_SELECT: "multiselect",
    FieldType.TEXTAREA: "textarea",
    FieldType.BOOLEAN: "checkbox",
}

for _table_name, _table in (("_FORMAT_CHECKS", _FORMAT_CHECKS), ("_CONTROLS", _CONTROLS)):
    _missing = set(FieldType) - set(_table)
    if _missing:
        raise TypeError(f"{_table_name} has no entry for {sorted(m.value for m in _missing)}")


def renderable_fields(schema: Optional[FieldSchema]) -> List[RenderableField]:
    """
    Fields in schema order.

    Unknown declared types render as plain text inputs; ``declared_type``
    keeps what the provider asked for.
    """
    fields = []
    for key, spec in (schema or {}).items():
        field_type = spec.field_type
        default = spec.default
        if field_type == FieldType.BOOLEAN and default is None:
            default = False
        fields.append(
            RenderableField(
                key=key,
                label=spec.label or key,
                field_type=field_type,
                declared_type=spec.type,
                control=_CONTROLS[field_type],
                required=spec.required,
                sensitive=field_type == FieldType.PASSWORD,
                default=default,
                options=[option.model_dump() for option in spec.options],
                help=spec.help,
            )
        )
    return fields


def validate(schema: Optional[FieldSchema], values: Optional[Mapping[str, Any]]) -> List[FieldError]:
    """
    Validate ``values`` against ``schema``.

    Returns one error at most per field, in schema order. A required field
    that is absent yields MISSING_REQUIRED_FIELD whatever its type; a
    boolean explicitly set to False is present. Present values are then
    format-checked for their type. Neither argument is modified.
    """
    values = values or {}
    errors: List[FieldError] = []

    for key, spec in (schema or {}).items():
        value = values.get(key)
        label = spec.label or key

        if is_absent(value):
            if spec.required:
                errors.append(
                    FieldError(
                        key=key,
                        code=FieldErrorCode.MISSING_REQUIRED_FIELD,
                        message=f"{label} é obrigatório",
                    )
                )
            continue

        message = _FORMAT_CHECKS[spec.field_type](value, spec)
        if message:
            errors.append(FieldError(key=key, code=FieldErrorCode.INVALID_FORMAT, message=message))

    return errors


def normalize_values(
    schema: Optional[FieldSchema], values: Optional[Mapping[str, Any]]
) -> Dict[str, Any]:
    """
    Values ready to store, as a new dict.

    Declared defaults fill absent fields, booleans default to False,
    multi-selects become lists and numeric strings become numbers. Keys not
    in the schema are kept as they are.
    """
    normalized: Dict[str, Any] = dict(values or {})

    for key, spec in (schema or {}).items():
        value = normalized.get(key)
        field_type = spec.field_type

        if is_absent(value) and spec.default is not None:
            value = spec.default

        if field_type == FieldType.BOOLEAN:
            if isinstance(value, str):
                value = value.strip().lower() in ("true", "1", "on", "yes")
            else:
                value = bool(value)
        elif field_type == FieldType.MULTI_SELECT:
            as_list = coerce_list(value)
            value = as_list if as_list is not None else value
        elif field_type == FieldType.NUMBER and isinstance(value, str) and value.strip():
            number = parse_number(value)
            if number is not None:
                value = int(number) if number.is_integer() else number

        if value is not None or key in normalized:
            normalized[key] = value

    return normalized
