"""
Core module containing the entity model, exceptions and enumerations.
"""

from .entities import *
from .interfaces import *
from .exceptions import *
from .enums import *

__all__ = [
    # Entities
    "AbstractEntity",
    "Course",
    "Student",
    "GradeState",

    # Interfaces
    "EnrollmentPolicy",

    # Enums
    "GradeStatus",
    "ErrorCode",
    "AdminOperation",
    "MIN_GRADE",
    "MAX_GRADE",

    # Exceptions
    "RegistrarException",
    "ValidationError",
    "ResourceNotFoundError",
    "DuplicateEntityError",
    "EnrollmentError",
    "AlreadyEnrolledError",
    "NotEnrolledError",
    "CapacityExceededError",
    "ConcurrencyError",
]
