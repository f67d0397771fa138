"""
Core interfaces and abstract base classes for the Registrar core.
"""

from abc import ABC, abstractmethod

from .entities import Student, Course


class EnrollmentPolicy(ABC):
    """Abstract base class for enrollment policies.

    A policy inspects a (student, course) pair before the enrollment is
    written and raises an ``EnrollmentError`` subclass to reject it.
    """

    @abstractmethod
    def check(self, student: Student, course: Course) -> None:
        """Raise if the student may not enroll in the course."""
        pass

    @abstractmethod
    def get_policy_name(self) -> str:
        """Get the name of this policy."""
        pass
