"""
Core entities for the Registrar core.
"""

import uuid
from abc import ABC
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .enums import GradeStatus, MIN_GRADE, MAX_GRADE
from .exceptions import ValidationError, CapacityExceededError


def generate_student_id() -> str:
    """Generate a short student identifier."""
    return str(uuid.uuid4())[:8]


class AbstractEntity(ABC):
    """Base abstract entity with identifier, timestamps and versioning."""

    def __init__(self, entity_id: Optional[str] = None):
        self._id = entity_id or str(uuid.uuid4())
        self._created_at = datetime.now(timezone.utc)
        self._updated_at = self._created_at
        self._version = 1

    @property
    def id(self) -> str:
        """Get the entity ID."""
        return self._id

    @property
    def created_at(self) -> datetime:
        """Get creation timestamp."""
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        """Get last update timestamp."""
        return self._updated_at

    @property
    def version(self) -> int:
        """Get current version."""
        return self._version

    def touch(self) -> None:
        """Record a mutation."""
        self._updated_at = datetime.now(timezone.utc)
        self._version += 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to dictionary."""
        return {
            'id': self._id,
            'created_at': self._created_at.isoformat(),
            'updated_at': self._updated_at.isoformat(),
            'version': self._version,
        }

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id}, version={self._version})"


def validate_name(name: str, label: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"{label} must not be empty", details={'field': label.lower()})
    return name.strip()


def validate_capacity(capacity: int) -> int:
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise ValidationError("Capacity must be an integer", details={'capacity': capacity})
    if capacity <= 0:
        raise ValidationError("Capacity must be a positive number.", details={'capacity': capacity})
    return capacity


def validate_grade(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Grade must be an integer", details={'value': value})
    if not MIN_GRADE <= value <= MAX_GRADE:
        raise ValidationError(
            f"Invalid grade value. Grade must be between {MIN_GRADE} and {MAX_GRADE}.",
            details={'value': value}
        )
    return value


@dataclass(frozen=True)
class GradeState:
    """Immutable value object: a pending grade or an assigned value."""
    status: GradeStatus
    value: Optional[int] = None

    @classmethod
    def pending(cls) -> "GradeState":
        return cls(GradeStatus.PENDING)

    @classmethod
    def assigned(cls, value: int) -> "GradeState":
        return cls(GradeStatus.ASSIGNED, validate_grade(value))

    @property
    def is_assigned(self) -> bool:
        return self.status is GradeStatus.ASSIGNED

    def __str__(self) -> str:
        return str(self.value) if self.is_assigned else "Pending"


class Course(AbstractEntity):
    """Course keyed by its code, with a per-course enrollment counter."""

    def __init__(self, course_code: str, name: str, max_capacity: int):
        course_code = validate_name(course_code, "Course code")
        super().__init__(entity_id=course_code)
        self._name = validate_name(name, "Course name")
        self._max_capacity = validate_capacity(max_capacity)
        self._enrolled_count = 0

    @property
    def course_code(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def max_capacity(self) -> int:
        return self._max_capacity

    @property
    def enrolled_count(self) -> int:
        return self._enrolled_count

    @property
    def available_seats(self) -> int:
        return self._max_capacity - self._enrolled_count

    @property
    def is_full(self) -> bool:
        return self._enrolled_count >= self._max_capacity

    def update_details(self, name: str, max_capacity: int) -> None:
        """Change display name and capacity; capacity may not drop below current enrollment."""
        name = validate_name(name, "Course name")
        max_capacity = validate_capacity(max_capacity)
        if max_capacity < self._enrolled_count:
            raise ValidationError(
                f"Capacity {max_capacity} is below current enrollment of {self._enrolled_count}",
                details={'capacity': max_capacity, 'enrolled_count': self._enrolled_count}
            )
        self._name = name
        self._max_capacity = max_capacity
        self.touch()

    def increment_enrollment(self) -> None:
        if self.is_full:
            # Callers check capacity first; this guards the invariant.
            raise CapacityExceededError(f"{self._name} has reached maximum capacity.")
        self._enrolled_count += 1
        self.touch()

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            'course_code': self.course_code,
            'name': self._name,
            'max_capacity': self._max_capacity,
            'enrolled_count': self._enrolled_count,
            'available_seats': self.available_seats,
        })
        return base_dict


class Student(AbstractEntity):
    """Student with a mapping of enrolled course codes to grade states."""

    def __init__(self, name: str, student_id: Optional[str] = None):
        super().__init__(entity_id=student_id or generate_student_id())
        self._name = validate_name(name, "Student name")
        self._enrollments: Dict[str, GradeState] = {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def enrollments(self) -> Mapping[str, GradeState]:
        """Read-only snapshot of course code -> grade state."""
        return MappingProxyType(dict(self._enrollments))

    def rename(self, name: str) -> None:
        self._name = validate_name(name, "Student name")
        self.touch()

    def is_enrolled_in(self, course_code: str) -> bool:
        return course_code in self._enrollments

    def grade_for(self, course_code: str) -> Optional[GradeState]:
        return self._enrollments.get(course_code)

    def add_enrollment(self, course_code: str) -> None:
        self._enrollments[course_code] = GradeState.pending()
        self.touch()

    def set_grade(self, course_code: str, value: int) -> None:
        self._enrollments[course_code] = GradeState.assigned(value)
        self.touch()

    def assigned_grades(self):
        return [state.value for state in self._enrollments.values() if state.is_assigned]

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            'name': self._name,
            'enrollments': {code: state.value for code, state in self._enrollments.items()},
        })
        return base_dict
