"""
Administrative facade: named operations over the store, enrollment and grading services.

Every operation returns an ``OperationResult``; failures raised by the
services are reported as structured results rather than propagated.
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Union

from ..core.entities import Course, Student
from ..core.enums import AdminOperation, ErrorCode
from ..core.exceptions import RegistrarException
from ..services import EntityStore, EnrollmentService, GradingService

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"


@dataclass
class OperationResult:
    """Outcome of one administrative operation."""
    success: bool
    operation: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    error_code: Optional[str] = None

    @classmethod
    def ok(cls, operation: AdminOperation, message: str, **data) -> "OperationResult":
        return cls(success=True, operation=operation.value, message=message, data=data)

    @classmethod
    def failure(cls, operation: str, error: RegistrarException) -> "OperationResult":
        return cls(
            success=False,
            operation=operation,
            message=f"Error: {error.message}",
            data=dict(error.details),
            error_code=error.error_code.value
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'operation': self.operation,
            'message': self.message,
            'data': self.data,
            'error_code': self.error_code,
        }


class AdminFacade:
    """Maps named administrative operations onto the core services."""

    def __init__(self, store: EntityStore, enrollment_service: EnrollmentService,
                 grading_service: GradingService):
        self._store = store
        self._enrollment_service = enrollment_service
        self._grading_service = grading_service
        self._handlers: Dict[AdminOperation, Callable[..., OperationResult]] = {
            AdminOperation.ADD_COURSE: self._add_course,
            AdminOperation.ADD_STUDENT: self._add_student,
            AdminOperation.ENROLL: self._enroll,
            AdminOperation.ASSIGN_GRADE: self._assign_grade,
            AdminOperation.COMPUTE_AGGREGATE: self._compute_aggregate,
            AdminOperation.UPDATE_STUDENT: self._update_student,
            AdminOperation.UPDATE_COURSE: self._update_course,
            AdminOperation.LIST_COURSES: self._list_courses,
            AdminOperation.LIST_STUDENTS: self._list_students,
        }

    @classmethod
    def create(cls, store: Optional[EntityStore] = None) -> "AdminFacade":
        """Build a facade with fresh services over the given (or a new) store."""
        store = store if store is not None else EntityStore()
        return cls(store, EnrollmentService(store), GradingService(store))

    @property
    def store(self) -> EntityStore:
        return self._store

    @property
    def enrollment_service(self) -> EnrollmentService:
        return self._enrollment_service

    @property
    def grading_service(self) -> GradingService:
        return self._grading_service

    def execute(self, operation: Union[str, AdminOperation], **kwargs) -> OperationResult:
        """Dispatch an operation by name."""
        name = operation.value if isinstance(operation, AdminOperation) else str(operation)
        try:
            op = AdminOperation(name)
        except ValueError:
            logger.warning("Unknown operation requested: %s", name)
            return OperationResult(
                success=False,
                operation=name,
                message=f"Error: Unknown operation {name}.",
                error_code=ErrorCode.INVALID_ARGUMENT.value
            )

        handler = self._handlers[op]
        try:
            inspect.signature(handler).bind(**kwargs)
        except TypeError as e:
            return OperationResult(
                success=False,
                operation=name,
                message=f"Error: Invalid arguments for {name}: {e}",
                error_code=ErrorCode.INVALID_ARGUMENT.value
            )

        try:
            return handler(**kwargs)
        except RegistrarException as e:
            return OperationResult.failure(name, e)

    # Named entry points

    def add_course(self, course_code: str, name: str, capacity: int) -> OperationResult:
        return self.execute(AdminOperation.ADD_COURSE, course_code=course_code, name=name, capacity=capacity)

    def add_student(self, name: str) -> OperationResult:
        return self.execute(AdminOperation.ADD_STUDENT, name=name)

    def enroll(self, student_id: str, course_code: str) -> OperationResult:
        return self.execute(AdminOperation.ENROLL, student_id=student_id, course_code=course_code)

    def assign_grade(self, student_id: str, course_code: str, value: int) -> OperationResult:
        return self.execute(AdminOperation.ASSIGN_GRADE, student_id=student_id, course_code=course_code, value=value)

    def compute_aggregate(self, student_id: str) -> OperationResult:
        return self.execute(AdminOperation.COMPUTE_AGGREGATE, student_id=student_id)

    def update_student(self, student_id: str, name: str) -> OperationResult:
        return self.execute(AdminOperation.UPDATE_STUDENT, student_id=student_id, name=name)

    def update_course(self, course_code: str, name: str, capacity: int) -> OperationResult:
        return self.execute(AdminOperation.UPDATE_COURSE, course_code=course_code, name=name, capacity=capacity)

    def list_courses(self) -> OperationResult:
        return self.execute(AdminOperation.LIST_COURSES)

    def list_students(self) -> OperationResult:
        return self.execute(AdminOperation.LIST_STUDENTS)

    # Handlers

    def _add_course(self, course_code: str, name: str, capacity: int) -> OperationResult:
        course = self._store.add_course(course_code, name, capacity)
        return OperationResult.ok(
            AdminOperation.ADD_COURSE,
            f"Successfully added Course: {course.name} ({course.course_code})",
            course=self.course_view(course)
        )

    def _add_student(self, name: str) -> OperationResult:
        student = self._store.add_student(name)
        return OperationResult.ok(
            AdminOperation.ADD_STUDENT,
            f"Successfully added Student: {student.name} (ID: {student.id})",
            student_id=student.id,
            student=self.student_view(student)
        )

    def _enroll(self, student_id: str, course_code: str) -> OperationResult:
        record = self._enrollment_service.enroll(student_id, course_code)
        student = self._store.get_student(record.student_id)
        course = self._store.get_course(record.course_code)
        return OperationResult.ok(
            AdminOperation.ENROLL,
            f"Student {student.name} successfully enrolled in {course.name}",
            student_id=record.student_id,
            course_code=record.course_code,
            enrolled_count=record.course_enrolled_count,
            max_capacity=record.course_capacity
        )

    def _assign_grade(self, student_id: str, course_code: str, value: int) -> OperationResult:
        self._grading_service.assign_grade(student_id, course_code, value)
        student = self._store.get_student(student_id)
        return OperationResult.ok(
            AdminOperation.ASSIGN_GRADE,
            f"Grade {value} assigned to {student.name} for course {course_code}",
            student_id=student_id,
            course_code=course_code,
            value=value
        )

    def _compute_aggregate(self, student_id: str) -> OperationResult:
        aggregate = self._grading_service.compute_aggregate(student_id)
        student = self._store.get_student(student_id)
        if aggregate.has_grades:
            message = f"Overall Grade for {student.name} (ID: {student.id}): {aggregate.display()}"
        else:
            message = f"Student {student.name} has {aggregate.display()}."
        return OperationResult.ok(AdminOperation.COMPUTE_AGGREGATE, message, **aggregate.to_dict())

    def _update_student(self, student_id: str, name: str) -> OperationResult:
        student = self._store.update_student(student_id, name)
        return OperationResult.ok(
            AdminOperation.UPDATE_STUDENT,
            f"Student ID {student.id} updated to name: {student.name}",
            student=self.student_view(student)
        )

    def _update_course(self, course_code: str, name: str, capacity: int) -> OperationResult:
        course = self._store.update_course(course_code, name, capacity)
        return OperationResult.ok(
            AdminOperation.UPDATE_COURSE,
            f"Course {course.course_code} updated.",
            course=self.course_view(course)
        )

    def _list_courses(self) -> OperationResult:
        courses = [self.course_view(c) for c in self._store.list_courses()]
        message = f"{len(courses)} course(s) registered." if courses else "No courses registered."
        return OperationResult.ok(
            AdminOperation.LIST_COURSES,
            message,
            courses=courses,
            total_enrolled=self._store.total_enrolled()
        )

    def _list_students(self) -> OperationResult:
        students = [self.student_view(s) for s in self._store.list_students()]
        message = f"{len(students)} student(s) registered." if students else "No students registered."
        return OperationResult.ok(AdminOperation.LIST_STUDENTS, message, students=students)

    # Views

    def course_view(self, course: Course) -> Dict[str, Any]:
        return {
            'course_code': course.course_code,
            'name': course.name,
            'max_capacity': course.max_capacity,
            'enrolled_count': course.enrolled_count,
            'is_full': course.is_full,
            'version': course.version,
        }

    def student_view(self, student: Student) -> Dict[str, Any]:
        aggregate = self._grading_service.get_cached_aggregate(student.id)
        if aggregate is None:
            overall = NOT_AVAILABLE
        else:
            overall = aggregate.display()
        return {
            'student_id': student.id,
            'name': student.name,
            'enrollments': {code: state.value for code, state in student.enrollments.items()},
            'overall_grade': overall,
            'version': student.version,
        }
