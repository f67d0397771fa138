"""
Unit tests for the entity model

Tests grade states, course capacity bookkeeping and read-only enrollment snapshots.
"""

import pytest

from registrar.core.entities import Course, Student, GradeState
from registrar.core.enums import GradeStatus
from registrar.core.exceptions import ValidationError, CapacityExceededError


class TestGradeState:
    """Test the Pending/Assigned value object"""

    def test_pending_has_no_value(self):
        state = GradeState.pending()
        assert state.status is GradeStatus.PENDING
        assert state.value is None
        assert not state.is_assigned
        assert str(state) == "Pending"

    def test_assigned_carries_value(self):
        state = GradeState.assigned(88)
        assert state.is_assigned
        assert state.value == 88

    @pytest.mark.parametrize("value", [-1, 101, 1000])
    def test_assigned_rejects_out_of_range(self, value):
        with pytest.raises(ValidationError, match="between 0 and 100"):
            GradeState.assigned(value)

    def test_assigned_rejects_non_integer(self):
        with pytest.raises(ValidationError):
            GradeState.assigned(True)

    def test_bounds_are_inclusive(self):
        assert GradeState.assigned(0).value == 0
        assert GradeState.assigned(100).value == 100


class TestCourse:
    """Test course construction, updates and the enrollment counter"""

    def test_new_course_has_no_enrollments(self):
        course = Course("CS101", "Intro", 3)
        assert course.id == "CS101"
        assert course.course_code == "CS101"
        assert course.enrolled_count == 0
        assert course.available_seats == 3
        assert not course.is_full

    @pytest.mark.parametrize("capacity", [0, -5])
    def test_non_positive_capacity_rejected(self, capacity):
        with pytest.raises(ValidationError, match="positive"):
            Course("CS101", "Intro", capacity)

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            Course("CS101", "   ", 3)

    def test_increment_stops_at_capacity(self):
        course = Course("CS101", "Intro", 1)
        course.increment_enrollment()
        assert course.is_full
        with pytest.raises(CapacityExceededError):
            course.increment_enrollment()
        assert course.enrolled_count == 1

    def test_update_details_bumps_version(self):
        course = Course("CS101", "Intro", 3)
        course.update_details("Intro to Programming", 5)
        assert course.name == "Intro to Programming"
        assert course.max_capacity == 5
        assert course.version == 2

    def test_update_below_enrollment_rejected(self):
        course = Course("CS101", "Intro", 3)
        course.increment_enrollment()
        course.increment_enrollment()
        with pytest.raises(ValidationError, match="below current enrollment"):
            course.update_details("Intro", 1)
        assert course.max_capacity == 3

    def test_to_dict(self):
        data = Course("CS101", "Intro", 3).to_dict()
        assert data['course_code'] == "CS101"
        assert data['max_capacity'] == 3
        assert data['enrolled_count'] == 0
        assert 'created_at' in data


class TestStudent:
    """Test student enrollment map"""

    def test_generated_id_is_short(self):
        student = Student("Alice")
        assert len(student.id) == 8

    def test_enrollments_snapshot_is_read_only(self):
        student = Student("Alice")
        student.add_enrollment("CS101")
        snapshot = student.enrollments
        with pytest.raises(TypeError):
            snapshot["MA202"] = GradeState.pending()
        assert not student.is_enrolled_in("MA202")

    def test_snapshot_does_not_follow_later_changes(self):
        student = Student("Alice")
        student.add_enrollment("CS101")
        snapshot = student.enrollments
        student.set_grade("CS101", 70)
        assert not snapshot["CS101"].is_assigned
        assert student.grade_for("CS101").value == 70

    def test_assigned_grades_skip_pending(self):
        student = Student("Alice")
        student.add_enrollment("CS101")
        student.add_enrollment("MA202")
        student.set_grade("MA202", 60)
        assert student.assigned_grades() == [60]

    def test_rename(self):
        student = Student("Alice")
        student.rename("Alice Johnson")
        assert student.name == "Alice Johnson"
        assert student.version == 2
