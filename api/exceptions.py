"""Custom exceptions and error handling."""

from collections.abc import Iterable
from typing import Any

from fastapi import status


class ShiftscopeError(Exception):
    """Base exception for the audit service."""

    def __init__(
        self,
        message: str,
        code: str = "error",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class NotFoundError(ShiftscopeError):
    """Resource not found."""

    def __init__(self, resource: str, identifier: str | None = None):
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} with id '{identifier}' not found"
        super().__init__(
            message=message,
            code="not_found",
            status_code=status.HTTP_404_NOT_FOUND,
        )


class ValidationError(ShiftscopeError):
    """Validation error."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            code="validation_error",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
        )


class MissingArtifactError(ShiftscopeError):
    """Required upstream artifacts are absent for an audit."""

    def __init__(self, missing: Iterable[str], audit_id: str | None = None):
        missing = sorted(missing)
        message = f"Required artifact(s) missing: {', '.join(missing)}"
        details: dict[str, Any] = {"missing": missing}
        if audit_id:
            message = f"{message} (audit '{audit_id}')"
            details["audit_id"] = audit_id
        super().__init__(
            message=message,
            code="missing_artifact",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
        )


class TraceProcessingError(ShiftscopeError):
    """A trace could not be processed into a computed artifact."""

    def __init__(self, message: str, reason: str | None = None):
        super().__init__(
            message=message,
            code="trace_processing_error",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"reason": reason} if reason else {},
        )
