"""
In-memory store of Course and Student records.
"""

import logging
import threading
from typing import Dict, List, Optional

from ..core.entities import Course, Student, generate_student_id, validate_name
from ..core.exceptions import DuplicateEntityError, ResourceNotFoundError
from .concurrency_manager import ConcurrencyManager, course_resource, student_resource

logger = logging.getLogger(__name__)


class EntityStore:
    """Authoritative collections of courses and students, keyed by identifier."""

    def __init__(self, concurrency_manager: Optional[ConcurrencyManager] = None):
        self._concurrency_manager = concurrency_manager or ConcurrencyManager()
        self._courses: Dict[str, Course] = {}
        self._students: Dict[str, Student] = {}
        self._lock = threading.RLock()

    @property
    def concurrency_manager(self) -> ConcurrencyManager:
        return self._concurrency_manager

    def add_course(self, course_code: str, name: str, capacity: int) -> Course:
        """Create a course with zero enrollments.

        An existing code is reported as a duplicate before name and
        capacity are validated.
        """
        course_code = validate_name(course_code, "Course code")
        with self._lock:
            if course_code in self._courses:
                raise DuplicateEntityError(
                    f"Course code {course_code} already exists.",
                    details={'course_code': course_code}
                )
            course = Course(course_code, name, capacity)
            self._courses[course.course_code] = course
        logger.info("Added course %s (%s), capacity %d", course.name, course.course_code, course.max_capacity)
        return course

    def add_student(self, name: str) -> Student:
        """Create a student under a freshly generated identifier."""
        with self._lock:
            student_id = generate_student_id()
            while student_id in self._students:
                student_id = generate_student_id()
            student = Student(name, student_id=student_id)
            self._students[student_id] = student
        logger.info("Added student %s (ID: %s)", student.name, student.id)
        return student

    def get_course(self, course_code: str) -> Course:
        with self._lock:
            course = self._courses.get(course_code)
        if course is None:
            raise ResourceNotFoundError(
                f"Course with code {course_code} not found.",
                details={'course_code': course_code}
            )
        return course

    def get_student(self, student_id: str) -> Student:
        with self._lock:
            student = self._students.get(student_id)
        if student is None:
            raise ResourceNotFoundError(
                f"Student with ID {student_id} not found.",
                details={'student_id': student_id}
            )
        return student

    def has_course(self, course_code: str) -> bool:
        with self._lock:
            return course_code in self._courses

    def update_course(self, course_code: str, name: str, capacity: int) -> Course:
        course = self.get_course(course_code)
        with self._concurrency_manager.lock(course_resource(course_code)):
            course.update_details(name, capacity)
        logger.info("Course %s updated: name=%s, capacity=%d", course_code, course.name, course.max_capacity)
        return course

    def update_student(self, student_id: str, name: str) -> Student:
        student = self.get_student(student_id)
        with self._concurrency_manager.lock(student_resource(student_id)):
            student.rename(name)
        logger.info("Student ID %s updated to name: %s", student_id, student.name)
        return student

    def list_courses(self) -> List[Course]:
        with self._lock:
            return list(self._courses.values())

    def list_students(self) -> List[Student]:
        with self._lock:
            return list(self._students.values())

    def total_enrolled(self) -> int:
        """System-wide number of enrollments, summed over courses."""
        with self._lock:
            return sum(course.enrolled_count for course in self._courses.values())
