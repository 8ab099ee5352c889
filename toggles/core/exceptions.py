"""
Custom exception hierarchy for centralized error handling.
All exceptions map to appropriate HTTP status codes.

The evaluation core never raises these around Flag Store or expiration
gate failures; those propagate to the caller unchanged.
"""
from typing import Any, Dict, List, Optional


class AppException(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to API response format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


class ValidationError(AppException):
    """Invalid input data."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class NotFoundError(AppException):
    """Resource not found."""

    def __init__(self, resource: str, identifier: str) -> None:
        super().__init__(
            message=f"{resource} not found: {identifier}",
            status_code=404,
            error_code="NOT_FOUND",
            details={"resource": resource, "identifier": identifier},
        )


class SeedFileError(ValidationError):
    """Flag seed file could not be read or holds invalid records."""

    def __init__(
        self,
        path: str,
        reason: str,
        errors: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        details: Dict[str, Any] = {"path": path, "reason": reason}
        if errors:
            details["errors"] = errors
        super().__init__(message=f"Invalid flag seed file {path}: {reason}", details=details)


class ConfigurationError(AppException):
    """Setting value the application cannot act on."""

    def __init__(self, setting: str, value: Any, reason: str) -> None:
        super().__init__(
            message=f"Invalid {setting}={value!r}: {reason}",
            status_code=500,
            error_code="CONFIGURATION_ERROR",
            details={"setting": setting, "value": value},
        )
