"""
REST API implementation for the Registrar core using FastAPI.
"""

import logging
import threading
from typing import Optional, Dict, Any, List
from datetime import datetime, timezone
from pydantic import BaseModel, Field

from fastapi import FastAPI, HTTPException, status

from ..core.enums import ErrorCode
from ..core.exceptions import RegistrarException
from .admin_facade import AdminFacade, OperationResult

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorCode.NOT_FOUND.value: status.HTTP_404_NOT_FOUND,
    ErrorCode.DUPLICATE_KEY.value: status.HTTP_409_CONFLICT,
    ErrorCode.ALREADY_ENROLLED.value: status.HTTP_409_CONFLICT,
    ErrorCode.NOT_ENROLLED.value: status.HTTP_409_CONFLICT,
    ErrorCode.CAPACITY_EXCEEDED.value: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_ARGUMENT.value: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CONCURRENCY.value: status.HTTP_503_SERVICE_UNAVAILABLE,
}


# Pydantic models for API
class CourseCreate(BaseModel):
    course_code: str = Field(..., min_length=1, max_length=20)
    name: str = Field(..., min_length=1, max_length=200)
    capacity: int


class CourseUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    capacity: int


class CourseResponse(BaseModel):
    course_code: str
    name: str
    max_capacity: int
    enrolled_count: int
    is_full: bool
    version: int


class StudentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)


class StudentUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)


class StudentResponse(BaseModel):
    student_id: str
    name: str
    enrollments: Dict[str, Optional[int]] = {}
    overall_grade: str
    version: int


class EnrollmentRequest(BaseModel):
    student_id: str = Field(..., min_length=1)
    course_code: str = Field(..., min_length=1)


class GradeRequest(BaseModel):
    # Range is checked by the grading service so it reports invalid_argument
    value: int


class OperationResponse(BaseModel):
    success: bool
    operation: str
    message: str
    data: Dict[str, Any] = {}


class CourseListResponse(BaseModel):
    courses: List[CourseResponse]
    total_enrolled: int


class StatisticsResponse(BaseModel):
    success: bool
    message: str
    statistics: Dict[str, Any]


class RegistrarRestAPI:
    """REST API over the administrative facade."""

    def __init__(self, facade: AdminFacade):
        self._facade = facade
        # One request is processed to completion before the next begins
        self._lock = threading.RLock()

        self.app = FastAPI(
            title="Registrar API",
            description="Course enrollment and grade management",
            version="1.0.0",
            docs_url="/docs",
            redoc_url="/redoc"
        )

        self._setup_routes()

    def _run(self, operation: str, **kwargs) -> OperationResult:
        with self._lock:
            result = self._facade.execute(operation, **kwargs)
        if not result.success:
            status_code = ERROR_STATUS.get(result.error_code, status.HTTP_400_BAD_REQUEST)
            logger.info("%s failed (%s): %s", operation, result.error_code, result.message)
            raise HTTPException(
                status_code=status_code,
                detail={'error_code': result.error_code, 'message': result.message, 'data': result.data}
            )
        return result

    def _lookup(self, operation: str, fetch) -> Dict[str, Any]:
        with self._lock:
            try:
                return fetch()
            except RegistrarException as e:
                result = OperationResult.failure(operation, e)
        raise HTTPException(
            status_code=ERROR_STATUS.get(result.error_code, status.HTTP_400_BAD_REQUEST),
            detail={'error_code': result.error_code, 'message': result.message, 'data': result.data}
        )

    def _setup_routes(self):
        """Setup API routes."""

        @self.app.get("/", response_model=Dict[str, str])
        async def root():
            """Root endpoint."""
            return {
                "message": "Registrar API",
                "version": "1.0.0",
                "docs": "/docs"
            }

        @self.app.get("/health", response_model=Dict[str, str])
        async def health_check():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

        # Course endpoints
        @self.app.post("/courses", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
        def create_course(course_data: CourseCreate):
            """Create a new course."""
            result = self._run("add-course", course_code=course_data.course_code,
                               name=course_data.name, capacity=course_data.capacity)
            return result.data['course']

        @self.app.get("/courses", response_model=CourseListResponse)
        def list_courses():
            """List all courses with the system-wide enrolled total."""
            result = self._run("list-courses")
            return result.data

        @self.app.get("/courses/{course_code}", response_model=CourseResponse)
        def get_course(course_code: str):
            """Get a course by code."""
            return self._lookup(
                "get-course",
                lambda: self._facade.course_view(self._facade.store.get_course(course_code))
            )

        @self.app.put("/courses/{course_code}", response_model=CourseResponse)
        def update_course(course_code: str, course_data: CourseUpdate):
            """Update a course's name and capacity."""
            result = self._run("update-course", course_code=course_code,
                               name=course_data.name, capacity=course_data.capacity)
            return result.data['course']

        # Student endpoints
        @self.app.post("/students", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
        def create_student(student_data: StudentCreate):
            """Register a new student."""
            result = self._run("add-student", name=student_data.name)
            return result.data['student']

        @self.app.get("/students", response_model=List[StudentResponse])
        def list_students(skip: int = 0, limit: int = 100):
            """List registered students."""
            result = self._run("list-students")
            return result.data['students'][skip:skip + limit]

        @self.app.get("/students/{student_id}", response_model=StudentResponse)
        def get_student(student_id: str):
            """Get a student by ID."""
            return self._lookup(
                "get-student",
                lambda: self._facade.student_view(self._facade.store.get_student(student_id))
            )

        @self.app.put("/students/{student_id}", response_model=StudentResponse)
        def update_student(student_id: str, student_data: StudentUpdate):
            """Rename a student."""
            result = self._run("update-student", student_id=student_id, name=student_data.name)
            return result.data['student']

        # Enrollment and grading endpoints
        @self.app.post("/enrollments", response_model=OperationResponse, status_code=status.HTTP_201_CREATED)
        def enroll_student(enrollment_data: EnrollmentRequest):
            """Enroll a student in a course."""
            result = self._run("enroll", student_id=enrollment_data.student_id,
                               course_code=enrollment_data.course_code)
            return result.to_dict()

        @self.app.put("/students/{student_id}/grades/{course_code}", response_model=OperationResponse)
        def assign_grade(student_id: str, course_code: str, grade_data: GradeRequest):
            """Assign a grade for an enrolled course."""
            result = self._run("assign-grade", student_id=student_id,
                               course_code=course_code, value=grade_data.value)
            return result.to_dict()

        @self.app.post("/students/{student_id}/aggregate", response_model=OperationResponse)
        def compute_aggregate(student_id: str):
            """Compute and cache the student's overall grade."""
            result = self._run("compute-aggregate", student_id=student_id)
            return result.to_dict()

        # Statistics endpoints
        @self.app.get("/statistics", response_model=StatisticsResponse)
        def get_statistics():
            """Get system statistics."""
            with self._lock:
                statistics = {
                    "enrollment": self._facade.enrollment_service.get_statistics(),
                    "locks": self._facade.store.concurrency_manager.get_statistics(),
                    "courses": len(self._facade.store.list_courses()),
                    "students": len(self._facade.store.list_students()),
                }
            return StatisticsResponse(
                success=True,
                message="Statistics retrieved successfully",
                statistics=statistics
            )
