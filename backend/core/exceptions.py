"""Custom exceptions for the marketing workflow service."""

from dataclasses import dataclass
from typing import Optional


class AppException(Exception):
    """Base exception for the marketing workflow service."""

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code.

        Args:
            message: Exception message
            status_code: HTTP status code
        """
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(AppException):
    """Resource not found exception."""

    def __init__(self, message: str = "Resource not found"):
        """Initialize NotFoundError with 404 status code."""
        super().__init__(message, 404)


class InvalidStepTypeError(AppException):
    """Step type is not one of the catalog variants, or a step's type was changed."""

    def __init__(self, step_type: object, message: Optional[str] = None):
        self.step_type = step_type
        super().__init__(message or f"Invalid step type: {step_type!r}", 422)


class StepNotFoundError(AppException):
    """A builder operation referenced a step id absent from the workflow."""

    def __init__(self, step_id: str):
        self.step_id = step_id
        super().__init__(f"Step not found: {step_id}", 404)


class DuplicateStepError(AppException):
    """A step was added under an id the workflow already uses."""

    def __init__(self, step_id: str):
        self.step_id = step_id
        super().__init__(f"Step id already in workflow: {step_id}", 409)


@dataclass(frozen=True)
class ValidationIssue:
    """One violated save rule."""

    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class ValidationError(AppException):
    """One or more required-field rules failed at save time.

    Carries every violated rule so a caller can render them all at once.
    """

    def __init__(self, violations: list[ValidationIssue], message: str = "Validation failed"):
        self.violations = list(violations)
        if self.violations:
            message = f"{message}: " + "; ".join(v.message for v in self.violations)
        super().__init__(message, 422)


class PersistenceError(AppException):
    """Document store failure. Passed through untouched, never retried."""

    def __init__(self, message: str = "Persistence failure"):
        """Initialize PersistenceError with 503 status code."""
        super().__init__(message, 503)
