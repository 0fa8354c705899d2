"""
Base service class providing common functionality for all services.
"""

import logging
from abc import ABC
from contextlib import contextmanager
from typing import Any, Dict, Generic, Optional, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from hotelpms.repositories.calendar.calendar_repository import CalendarDataAccess
from hotelpms.services.base.service_result import (
    ErrorCode,
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)

TRepo = TypeVar("TRepo", bound=CalendarDataAccess)


class BaseService(ABC, Generic[TRepo]):
    """
    Base service with common behaviors:
    - Injected data access and a per-class logger
    - Consistent error handling via ServiceResult
    - Unit-of-work helper around the data access commit/rollback
    """

    def __init__(self, repository: TRepo):
        self.repository: TRepo = repository
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    # -------------------------------------------------------------------------
    # Exception & Error Handling
    # -------------------------------------------------------------------------

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
        severity: ErrorSeverity = ErrorSeverity.CRITICAL,
        additional_context: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        """
        Convert exception to a ServiceResult failure and log it.

        Args:
            exception: The caught exception
            operation: Description of the operation that failed
            entity_ref: Reference to the entity involved (ID, name, etc.)
            severity: Error severity level
            additional_context: Extra context for logging/debugging
        """
        context = {
            "operation": operation,
            "entity_ref": str(entity_ref) if entity_ref is not None else None,
            "exception_type": type(exception).__name__,
        }
        if additional_context:
            context.update(additional_context)

        self._logger.error(
            f"Error during {operation}: {exception}",
            exc_info=True,
            extra=context,
        )

        return ServiceResult.failure(
            ServiceError(
                code=self._map_exception_to_error_code(exception),
                message=f"Failed to {operation}",
                details={
                    "error": str(exception),
                    "entity_ref": str(entity_ref) if entity_ref is not None else None,
                    "context": additional_context,
                },
                severity=severity,
            )
        )

    def _map_exception_to_error_code(self, exception: Exception) -> ErrorCode:
        exception_mapping = {
            ValueError: ErrorCode.VALIDATION_ERROR,
            KeyError: ErrorCode.NOT_FOUND,
            AttributeError: ErrorCode.INVALID_REFERENCE,
            IntegrityError: ErrorCode.CONFLICT,
            SQLAlchemyError: ErrorCode.INTERNAL_ERROR,
        }
        for exc_type, error_code in exception_mapping.items():
            if isinstance(exception, exc_type):
                return error_code
        return ErrorCode.INTERNAL_ERROR

    # -------------------------------------------------------------------------
    # Transaction Management
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self):
        """
        Commit on success, roll back and re-raise on error.

        Example:
            with self.transaction():
                link.room_id = new_room_id
        """
        try:
            yield self.repository
            self.repository.commit()
            self._logger.debug("Transaction committed successfully")
        except Exception as e:
            self._rollback()
            self._logger.error(f"Transaction failed: {e}", exc_info=True)
            raise

    def _rollback(self) -> None:
        """Rollback the current transaction, suppressing rollback errors."""
        try:
            self.repository.rollback()
            self._logger.debug("Transaction rolled back")
        except SQLAlchemyError as e:
            # Rollback errors must not mask the original error
            self._logger.warning(f"Rollback failed: {e}")
