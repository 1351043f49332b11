"""
Generic write helpers shared by the configuration gateway.

Each helper commits on success, rolls back on failure and raises the
translated store error.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type, TypeVar

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from ..exceptions import not_found
from .logger import get_logger
from .store_errors import translate_store_error

T = TypeVar("T")


def model_columns(model_class: Type[Any]) -> List[str]:
    """Column attribute names of a mapped class."""
    return [column.key for column in inspect(model_class).column_attrs]


def create_record(session: Session, model_class: Type[T], data: Dict[str, Any]) -> T:
    """
    Insert a row and commit.

    Raises:
        BaseError: The translated store error, ConflictError on duplicates
    """
    logger = get_logger()
    columns = model_columns(model_class)

    try:
        record = model_class(**{k: v for k, v in data.items() if k in columns})
        session.add(record)
        session.commit()
    except Exception as e:
        session.rollback()
        raise translate_store_error(
            e,
            resource=model_class.__tablename__,
            operation="create",
            payload=data,
            known_fields=columns,
        ) from e

    logger.info(
        f"Created {model_class.__name__}",
        extra={"model": model_class.__name__, "record_id": getattr(record, "id", None)},
    )
    return record


def get_record_by_id(session: Session, model_class: Type[T], record_id: str) -> Optional[T]:
    return session.get(model_class, record_id)


def update_record(
    session: Session,
    model_class: Type[T],
    record_id: str,
    data: Dict[str, Any],
) -> T:
    """
    Update a row and commit.

    Keys absent from ``data`` are left untouched; explicit None values are
    written.

    Raises:
        NotFoundError: No row with ``record_id`` is visible
        PermissionDeniedError: The UPDATE matched no rows
        BaseError: Any other translated store error
    """
    logger = get_logger()
    columns = model_columns(model_class)

    try:
        record = get_record_by_id(session, model_class, record_id)
    except Exception as e:
        raise translate_store_error(
            e,
            resource=model_class.__tablename__,
            operation="update",
            payload=data,
            record_id=record_id,
        ) from e
    if record is None:
        raise not_found(model_class.__name__, record_id=record_id)

    try:
        for key, value in data.items():
            if key in columns and key != "id":
                setattr(record, key, value)
        if "updated_at" in columns:
            record.updated_at = datetime.now(timezone.utc)
        session.commit()
    except Exception as e:
        session.rollback()
        raise translate_store_error(
            e,
            resource=model_class.__tablename__,
            operation="update",
            payload=data,
            record_id=record_id,
            known_fields=columns,
        ) from e

    logger.info(
        f"Updated {model_class.__name__}",
        extra={"model": model_class.__name__, "record_id": record_id},
    )
    return record


def list_records(
    session: Session,
    model_class: Type[T],
    filters: Optional[Dict[str, Any]] = None,
    order_by: str = "name",
    limit: Optional[int] = None,
) -> List[T]:
    """Rows matching equality ``filters``, ordered by ``order_by``."""
    query = session.query(model_class)
    for key, value in (filters or {}).items():
        if hasattr(model_class, key) and value is not None:
            query = query.filter(getattr(model_class, key) == value)
    if hasattr(model_class, order_by):
        query = query.order_by(getattr(model_class, order_by))
    if limit:
        query = query.limit(limit)
    return query.all()
