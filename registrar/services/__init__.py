"""
Services module containing the store and the enrollment and grading managers.
"""

from .concurrency_manager import ConcurrencyManager
from .entity_store import EntityStore
from .enrollment_service import EnrollmentService, EnrollmentRecord
from .grading_service import GradingService, AggregateGrade

__all__ = [
    "ConcurrencyManager",
    "EntityStore",
    "EnrollmentService",
    "EnrollmentRecord",
    "GradingService",
    "AggregateGrade",
]
