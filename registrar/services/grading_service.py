"""
Grading service: grade assignment for enrolled pairs and aggregate grades.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.entities import validate_grade
from ..core.exceptions import NotEnrolledError
from .concurrency_manager import student_resource
from .entity_store import EntityStore

logger = logging.getLogger(__name__)

NO_GRADES_MESSAGE = "no grades yet"


@dataclass(frozen=True)
class AggregateGrade:
    """Mean of a student's assigned grades, or no value when none are assigned."""
    student_id: str
    average: Optional[float]
    graded_courses: int

    @property
    def has_grades(self) -> bool:
        return self.average is not None

    def display(self) -> str:
        return f"{self.average:.2f}" if self.has_grades else NO_GRADES_MESSAGE

    def to_dict(self) -> Dict[str, Any]:
        return {
            'student_id': self.student_id,
            'average': self.average,
            'graded_courses': self.graded_courses,
            'has_grades': self.has_grades,
        }


class GradingService:
    """Assigns grades and computes per-student aggregates."""

    def __init__(self, store: EntityStore):
        self._store = store
        self._concurrency_manager = store.concurrency_manager
        self._aggregates: Dict[str, AggregateGrade] = {}
        self._lock = threading.RLock()

    def assign_grade(self, student_id: str, course_code: str, value: int) -> int:
        """Assign (or reassign) a grade for an enrolled (student, course) pair."""
        student = self._store.get_student(student_id)

        with self._concurrency_manager.lock(student_resource(student.id)):
            if not student.is_enrolled_in(course_code):
                course_known = self._store.has_course(course_code)
                logger.warning("Grade rejected: %s is not enrolled in %s", student.id, course_code)
                message = f"Student {student.name} is not enrolled in course {course_code}"
                if not course_known:
                    message += f" (no course with code {course_code})"
                raise NotEnrolledError(
                    message,
                    details={'student_id': student.id, 'course_code': course_code,
                             'course_exists': course_known}
                )
            validate_grade(value)
            student.set_grade(course_code, value)

        logger.info("Grade %d assigned to %s for course %s", value, student.name, course_code)
        return value

    def compute_aggregate(self, student_id: str) -> AggregateGrade:
        """Compute the mean of assigned grades and cache it for the student."""
        student = self._store.get_student(student_id)

        with self._concurrency_manager.lock(student_resource(student.id)):
            grades = student.assigned_grades()

        average = sum(grades) / len(grades) if grades else None
        aggregate = AggregateGrade(student_id=student.id, average=average, graded_courses=len(grades))

        with self._lock:
            self._aggregates[student.id] = aggregate

        if aggregate.has_grades:
            logger.info("Overall grade for %s (ID: %s): %.2f", student.name, student.id, average)
        else:
            logger.info("Student %s has %s", student.name, NO_GRADES_MESSAGE)
        return aggregate

    def get_cached_aggregate(self, student_id: str) -> Optional[AggregateGrade]:
        """Last computed aggregate; not refreshed by later grade assignments."""
        with self._lock:
            return self._aggregates.get(student_id)
