from typing import Any, Optional


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(
        self,
        message: str,
        status_code: int,
        *,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(
        self, message: str, status_code: int = 400, *, error_code: Optional[str] = None
    ) -> None:
        super().__init__(message, status_code, error_code=error_code)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str, *, error_code: Optional[str] = None) -> None:
        super().__init__(message, 403, error_code=error_code)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str, *, error_code: Optional[str] = None) -> None:
        super().__init__(message, 404, error_code=error_code)


class ConflictError(CustomBaseError):
    def __init__(self, message: str, *, error_code: Optional[str] = None) -> None:
        super().__init__(message, 409, error_code=error_code)


class DocumentNotFoundError(NotFoundError):
    """A source record needed to build a snapshot is missing."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code='DOCUMENT_NOT_FOUND')


class InconsistentDataError(CustomBaseError):
    """
    Persisted data failed an internal invariant check.

    Not a user input error: callers should treat it as a defect signal.
    """

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message, 500, error_code='INCONSISTENT_DATA', details=details)
