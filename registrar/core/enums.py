"""
Enumerations and constants for the Registrar core.
"""

from enum import Enum


MIN_GRADE = 0
MAX_GRADE = 100


class GradeStatus(Enum):
    """State of a grade within an enrollment."""
    PENDING = "pending"
    ASSIGNED = "assigned"


class ErrorCode(Enum):
    """Tags attached to failures reported by the core."""
    NOT_FOUND = "not_found"
    DUPLICATE_KEY = "duplicate_key"
    INVALID_ARGUMENT = "invalid_argument"
    ALREADY_ENROLLED = "already_enrolled"
    NOT_ENROLLED = "not_enrolled"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    CONCURRENCY = "concurrency"


class AdminOperation(Enum):
    """Named operations exposed by the administrative facade."""
    ADD_COURSE = "add-course"
    ADD_STUDENT = "add-student"
    ENROLL = "enroll"
    ASSIGN_GRADE = "assign-grade"
    COMPUTE_AGGREGATE = "compute-aggregate"
    UPDATE_STUDENT = "update-student"
    UPDATE_COURSE = "update-course"
    LIST_COURSES = "list-courses"
    LIST_STUDENTS = "list-students"
