"""Custom exceptions for MeshGraph.

Provides a hierarchy of exceptions with structured error payloads.
"""

from typing import Any


class MeshGraphError(Exception):
    """Base exception for all MeshGraph errors."""

    error_code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize exception with optional details.

        Args:
            message: Human-readable error message.
            details: Additional error details for debugging.
            cause: Original exception that caused this error.
        """
        self.message = message or self.message
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a structured dictionary."""
        result = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class ValidationError(MeshGraphError):
    """Input validation failed."""

    error_code = "VALIDATION_ERROR"
    message = "Input validation failed"


class IdentityResolutionError(ValidationError):
    """No node identity can be derived from the telemetry."""

    error_code = "IDENTITY_RESOLUTION_ERROR"
    message = "Failed to resolve node identity"

    def __init__(
        self,
        telemetry: dict[str, Any],
        message: str | None = None,
    ) -> None:
        """Initialize with the offending telemetry tuple.

        Args:
            telemetry: Field values that could not be resolved.
            message: Human-readable error message.
        """
        self.telemetry = dict(telemetry)
        super().__init__(message=message, details=self.telemetry)


class InvalidGraphTypeError(ValidationError):
    """Unsupported graph type requested."""

    error_code = "INVALID_GRAPH_TYPE"
    message = "Invalid graph type"


class ConfigurationError(MeshGraphError):
    """Configuration error."""

    error_code = "CONFIGURATION_ERROR"
    message = "Service configuration error"
