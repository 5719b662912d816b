"""
Shared error handling for the Standards services.

The rule evaluator itself never raises: malformed expressions pass and
missing data fails. These exceptions cover rule authoring and the
service surface around the evaluator.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class StandardsException(Exception):
    """Base exception for Standards services."""

    status_code = 400

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self, request_id: Optional[str] = None) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=request_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class ValidationError(StandardsException):
    """Malformed rule or request payload."""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)


class RuleNotFoundError(StandardsException):
    """Rule lookup failed."""

    status_code = 404

    def __init__(self, rule_id: str, details: Optional[Dict[str, Any]] = None):
        self.rule_id = rule_id
        super().__init__("RULE_NOT_FOUND", f"Rule not found: {rule_id}", details)


class ServiceError(StandardsException):
    """Service-related errors."""

    status_code = 500

    def __init__(self, message: str = "Service error", details: Optional[Dict[str, Any]] = None):
        super().__init__("SERVICE_ERROR", message, details)
