"""
Custom exceptions for the Registrar core.
"""

from typing import Optional, Any, Dict

from .enums import ErrorCode


class RegistrarException(Exception):
    """Base exception for all Registrar errors."""

    default_code = ErrorCode.INVALID_ARGUMENT

    def __init__(self, message: str, error_code: Optional[ErrorCode] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}


class ValidationError(RegistrarException):
    """Raised when an argument is out of range or otherwise invalid."""
    default_code = ErrorCode.INVALID_ARGUMENT


class ResourceNotFoundError(RegistrarException):
    """Raised when a requested student or course is not found."""
    default_code = ErrorCode.NOT_FOUND


class DuplicateEntityError(RegistrarException):
    """Raised when attempting to create a duplicate entity."""
    default_code = ErrorCode.DUPLICATE_KEY


class EnrollmentError(RegistrarException):
    """Base for failures of the enrollment relation."""
    pass


class AlreadyEnrolledError(EnrollmentError):
    """Raised when a student is already enrolled in a course."""
    default_code = ErrorCode.ALREADY_ENROLLED


class NotEnrolledError(EnrollmentError):
    """Raised when grading a student who is not enrolled in the course."""
    default_code = ErrorCode.NOT_ENROLLED


class CapacityExceededError(EnrollmentError):
    """Raised when a course has reached its maximum capacity."""
    default_code = ErrorCode.CAPACITY_EXCEEDED


class ConcurrencyError(RegistrarException):
    """Raised when an entity lock cannot be acquired."""
    default_code = ErrorCode.CONCURRENCY
