"""
Enrollment service enforcing the enroll-once, capacity-checked relation.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List

from ..core.entities import Student, Course, GradeState
from ..core.interfaces import EnrollmentPolicy
from ..core.exceptions import AlreadyEnrolledError, CapacityExceededError, EnrollmentError
from .concurrency_manager import course_resource, student_resource
from .entity_store import EntityStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnrollmentRecord:
    """Result of a successful enrollment."""
    student_id: str
    course_code: str
    grade: GradeState
    course_enrolled_count: int
    course_capacity: int


class DuplicateEnrollmentPolicy(EnrollmentPolicy):
    """A (student, course) pair may appear at most once."""

    def check(self, student: Student, course: Course) -> None:
        if student.is_enrolled_in(course.course_code):
            raise AlreadyEnrolledError(
                f"Student {student.name} is already enrolled in {course.name}",
                details={'student_id': student.id, 'course_code': course.course_code}
            )

    def get_policy_name(self) -> str:
        return "DuplicateEnrollmentPolicy"


class CourseCapacityPolicy(EnrollmentPolicy):
    """A course accepts enrollments until its own counter reaches its capacity."""

    def check(self, student: Student, course: Course) -> None:
        if course.enrolled_count >= course.max_capacity:
            raise CapacityExceededError(
                f"Enrollment failed. {course.name} has reached maximum capacity.",
                details={
                    'course_code': course.course_code,
                    'max_capacity': course.max_capacity,
                    'enrolled_count': course.enrolled_count,
                }
            )

    def get_policy_name(self) -> str:
        return "CourseCapacityPolicy"


class EnrollmentService:
    """Service for enrolling students in courses."""

    def __init__(self, store: EntityStore):
        self._store = store
        self._concurrency_manager = store.concurrency_manager
        self._policies: List[EnrollmentPolicy] = []
        self._lock = threading.RLock()

        self._add_default_policies()

    def _add_default_policies(self):
        self._policies.append(DuplicateEnrollmentPolicy())
        self._policies.append(CourseCapacityPolicy())

    def add_policy(self, policy: EnrollmentPolicy) -> None:
        """Add an enrollment policy, evaluated after the existing ones."""
        with self._lock:
            self._policies.append(policy)

    def remove_policy(self, policy_name: str) -> None:
        """Remove an enrollment policy by name."""
        with self._lock:
            self._policies = [p for p in self._policies if p.get_policy_name() != policy_name]

    def get_policy_names(self) -> List[str]:
        with self._lock:
            return [p.get_policy_name() for p in self._policies]

    def enroll(self, student_id: str, course_code: str) -> EnrollmentRecord:
        """Enroll a student in a course with a pending grade."""
        student = self._store.get_student(student_id)
        course = self._store.get_course(course_code)

        with self._concurrency_manager.lock(student_resource(student.id), course_resource(course.course_code)):
            try:
                self._evaluate_policies(student, course)
            except EnrollmentError as e:
                logger.warning("Enrollment of %s in %s rejected: %s", student.id, course.course_code, e)
                raise

            course.increment_enrollment()
            student.add_enrollment(course.course_code)

        logger.info("Student %s successfully enrolled in %s", student.name, course.name)
        return EnrollmentRecord(
            student_id=student.id,
            course_code=course.course_code,
            grade=student.grade_for(course.course_code),
            course_enrolled_count=course.enrolled_count,
            course_capacity=course.max_capacity
        )

    def _evaluate_policies(self, student: Student, course: Course) -> None:
        with self._lock:
            policies = list(self._policies)
        for policy in policies:
            policy.check(student, course)

    def get_enrollments(self, student_id: str) -> Dict[str, GradeState]:
        """Get the course codes a student is enrolled in, with grade states."""
        return dict(self._store.get_student(student_id).enrollments)

    def get_roster(self, course_code: str) -> List[Student]:
        """Get all students enrolled in a course."""
        course = self._store.get_course(course_code)
        return [s for s in self._store.list_students() if s.is_enrolled_in(course.course_code)]

    def get_statistics(self) -> Dict[str, Any]:
        """Get enrollment statistics."""
        courses = self._store.list_courses()
        return {
            'total_enrollments': sum(c.enrolled_count for c in courses),
            'full_courses': sum(1 for c in courses if c.is_full),
            'active_policies': len(self._policies),
        }
