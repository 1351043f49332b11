"""
Column types and mixins shared by the admin core models.

Keeps the models portable between SQLite (tests, development) and
PostgreSQL (production).
"""

import json
import uuid
from datetime import UTC, datetime

from pydantic_core import to_jsonable_python
from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.dialects.postgresql import JSON as PG_JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import TypeDecorator


def utc_now():
    """Return current UTC time with timezone info attached."""
    return datetime.now(UTC)


class JSON(TypeDecorator):
    """Cross-database JSON type: JSONB on PostgreSQL, text elsewhere."""

    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(Text())

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if dialect.name == "postgresql":
            return to_jsonable_python(value)
        return json.dumps(to_jsonable_python(value))

    def process_result_value(self, value, dialect):
        if value is None or dialect.name == "postgresql":
            return value
        return json.loads(value)


class OrderedJSON(JSON):
    """
    JSON that keeps object key order.

    JSONB normalizes key order, so field schemas use plain JSON on
    PostgreSQL. Field order is the order the form renders.
    """

    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(PG_JSON())
        return dialect.type_descriptor(Text())


class TimestampMixin:
    """created_at/updated_at columns."""

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)


class UUIDMixin:
    """String UUID primary key."""

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
