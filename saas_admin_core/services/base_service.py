"""
Base service with session ownership and shared error handling.
"""

from contextlib import contextmanager
from typing import NoReturn, Optional

from sqlalchemy.orm import Session

from ..exceptions import BaseError, ErrorCode, ServiceError
from ..utils.logger import ContextAwareLogger, get_logger
from ..utils.store_errors import UNAVAILABLE_ERRORS, translate_store_error


class SessionManagedService:
    """
    Service that owns its database session unless one is handed in.

    A service created with ``session=...`` never commits, rolls back or
    closes that session; the caller does.
    """

    def __init__(
        self,
        session: Optional[Session] = None,
        logger: Optional[ContextAwareLogger] = None,
    ):
        if session is not None:
            self.session = session
            self._owns_session = False
        else:
            self.session = self._create_session()
            self._owns_session = True
        self.logger = logger or get_logger()

    def _create_session(self) -> Session:
        """New session from the global database manager."""
        from ..db.db_config import get_db_manager

        return get_db_manager().session_factory()

    @contextmanager
    def transaction(self):
        """
        Commit on success and roll back on error, for owned sessions.

            with service.transaction():
                service.session.add(row)
        """
        try:
            yield self.session
            if self._owns_session:
                self.session.commit()
        except Exception:
            if self._owns_session:
                self.session.rollback()
            raise

    def commit(self):
        if self._owns_session:
            self.session.commit()

    def rollback(self):
        if self._owns_session:
            self.session.rollback()

    def close(self):
        """Close the session if this service owns it."""
        if self._owns_session and self.session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.rollback()
        else:
            self.commit()
        self.close()

    def _handle_service_exception(
        self,
        operation: str,
        exception: Exception,
        entity_id: Optional[str] = None,
        resource: Optional[str] = None,
    ) -> NoReturn:
        """
        Re-raise ``exception`` as an admin core error.

        BaseErrors pass through. Connectivity failures become
        DataUnavailableError; anything else is wrapped in a ServiceError.
        """
        if isinstance(exception, BaseError):
            raise exception

        if isinstance(exception, UNAVAILABLE_ERRORS):
            raise translate_store_error(
                exception, resource=resource or type(self).__name__, operation=operation
            ) from exception

        self.logger.error(
            f"Error in {operation}: {str(exception)}",
            extra={
                "operation": operation,
                "entity_id": entity_id,
                "error_type": type(exception).__name__,
            },
        )
        raise ServiceError(
            f"Error in {operation}: {str(exception)}",
            error_code=ErrorCode.INTERNAL_ERROR,
            operation=operation,
            entity_id=entity_id,
            cause=exception,
        )
