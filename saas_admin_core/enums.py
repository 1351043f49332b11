"""
Enums used across the saas_admin_core package.

Kept in one module so models, schemas and forms can share them without
circular imports.
"""

import enum


class ProviderKind(str, enum.Enum):
    """Which provider catalog a lookup targets."""

    CREDENTIAL = "credential"
    STORAGE = "storage"


class ConfigType(str, enum.Enum):
    """Scope of a storage configuration."""

    SYSTEM = "system"
    TENANT = "tenant"


class FormMode(str, enum.Enum):
    CREATE = "create"
    EDIT = "edit"


class FieldType(str, enum.Enum):
    """Input types a provider field schema can declare."""

    TEXT = "text"
    PASSWORD = "password"
    EMAIL = "email"
    NUMBER = "number"
    SELECT = "select"
    MULTI_SELECT = "multi-select"
    TEXTAREA = "textarea"
    BOOLEAN = "boolean"

    @classmethod
    def parse(cls, value) -> "FieldType":
        """Map a declared type to a member, falling back to TEXT for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.TEXT


class FieldErrorCode(str, enum.Enum):
    """Field-level validation outcomes."""

    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVALID_FORMAT = "invalid_format"
