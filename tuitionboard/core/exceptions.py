"""Custom exception classes and error handling."""

from typing import Any

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base application exception."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(
            status_code=status_code,
            detail={
                "success": False,
                "error": {
                    "code": code,
                    "message": message,
                    "details": details or {},
                },
            },
        )


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            code="AUTH_FAILED",
            message=message,
        )


class PermissionDeniedError(AppException):
    """Permission denied for the requested action."""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            code="PERMISSION_DENIED",
            message=message,
        )


class ValidationError(AppException):
    """Data validation failed."""

    def __init__(
        self,
        message: str = "Validation error",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            code="VALIDATION_ERROR",
            message=message,
            details=details,
        )


class NotFoundError(AppException):
    """Resource not found."""

    def __init__(
        self,
        resource: str = "Resource",
        identifier: str | None = None,
    ):
        details = {}
        if identifier:
            details["identifier"] = identifier
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            code="NOT_FOUND",
            message=f"{resource} not found",
            details=details,
        )


class PersistenceError(AppException):
    """A read or write against the data store failed.

    Transient from the caller's point of view: nothing is retried
    automatically and the user may repeat the action.
    """

    def __init__(
        self,
        message: str = "The data store is unavailable, please try again",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            code="PERSISTENCE_FAILURE",
            message=message,
            details=details,
        )


class PartialPipelineError(AppException):
    """Attendance was saved but a later step of the mark pipeline failed.

    Attendance writes are never rolled back; ``details["phase"]`` names the
    step that failed.
    """

    def __init__(
        self,
        phase: str,
        message: str = "Attendance saved but class log could not be updated",
        details: dict[str, Any] | None = None,
    ):
        payload = {"phase": phase, "attendance_saved": True}
        payload.update(details or {})
        self.phase = phase
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            code="PARTIAL_PIPELINE_FAILURE",
            message=message,
            details=payload,
        )
