"""
Custom exceptions for the application.
"""

from enum import Enum
from typing import Any, Iterable, Optional
from uuid import UUID


class ErrorKind(str, Enum):
    """Error category reported back to the host (toast layer)."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PERSISTENCE = "persistence"


class DeepWorkError(Exception):
    """Base exception for the planner."""

    kind: ErrorKind = ErrorKind.PERSISTENCE

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(DeepWorkError):
    """Request rejected before any write was attempted."""

    kind = ErrorKind.VALIDATION


class NotFoundError(DeepWorkError):
    """Referenced task or venture does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        message: str,
        missing_ids: Optional[Iterable[UUID]] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message, details)
        self.missing_ids: list[UUID] = list(missing_ids or [])


class PersistenceError(DeepWorkError):
    """
    The storage layer rejected a batch.

    failed_task_ids is empty when the storage layer cannot tell which
    row caused the failure.
    """

    kind = ErrorKind.PERSISTENCE

    def __init__(
        self,
        message: str,
        failed_task_ids: Optional[Iterable[UUID]] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message, details)
        self.failed_task_ids: list[UUID] = list(failed_task_ids or [])
