"""
Unit tests for EnrollmentService

Tests enroll-once semantics, per-course capacity and custom policies.
"""

import random

import pytest

from registrar.core.entities import Course, Student
from registrar.core.exceptions import (
    AlreadyEnrolledError, CapacityExceededError, EnrollmentError, ResourceNotFoundError
)
from registrar.core.interfaces import EnrollmentPolicy


class TestEnroll:
    """Test the enroll operation"""

    def test_enroll_creates_pending_grade(self, store, enrollment_service, intro_course):
        student = store.add_student("A")
        record = enrollment_service.enroll(student.id, "CS101")

        assert record.course_enrolled_count == 1
        assert not record.grade.is_assigned
        assert student.is_enrolled_in("CS101")
        assert intro_course.enrolled_count == 1

    def test_capacity_scenario(self, store, enrollment_service, intro_course):
        """Third student in a two-seat course is rejected"""
        a, b, c = (store.add_student(n) for n in ("A", "B", "C"))
        enrollment_service.enroll(a.id, "CS101")
        enrollment_service.enroll(b.id, "CS101")

        with pytest.raises(CapacityExceededError, match="maximum capacity"):
            enrollment_service.enroll(c.id, "CS101")

        assert intro_course.enrolled_count == 2
        assert not c.is_enrolled_in("CS101")

    def test_double_enroll_leaves_state_unchanged(self, store, enrollment_service, intro_course):
        student = store.add_student("A")
        enrollment_service.enroll(student.id, "CS101")
        version = student.version

        with pytest.raises(AlreadyEnrolledError):
            enrollment_service.enroll(student.id, "CS101")

        assert intro_course.enrolled_count == 1
        assert student.version == version
        assert list(student.enrollments) == ["CS101"]

    def test_duplicate_checked_before_capacity(self, store, enrollment_service):
        store.add_course("SOLO", "Seminar", 1)
        student = store.add_student("A")
        enrollment_service.enroll(student.id, "SOLO")
        with pytest.raises(AlreadyEnrolledError):
            enrollment_service.enroll(student.id, "SOLO")

    def test_capacity_is_per_course(self, store, enrollment_service):
        """Enrollments in one course do not consume seats in another"""
        store.add_course("CS101", "Intro", 2)
        store.add_course("MA202", "Calculus II", 2)
        students = [store.add_student(n) for n in ("A", "B", "C", "D")]
        for s in students[:2]:
            enrollment_service.enroll(s.id, "CS101")
        for s in students[2:]:
            enrollment_service.enroll(s.id, "MA202")

        assert store.get_course("MA202").enrolled_count == 2
        assert store.total_enrolled() == 4

    def test_unknown_student(self, store, enrollment_service, intro_course):
        with pytest.raises(ResourceNotFoundError):
            enrollment_service.enroll("nobody", "CS101")

    def test_unknown_course(self, store, enrollment_service):
        student = store.add_student("A")
        with pytest.raises(ResourceNotFoundError):
            enrollment_service.enroll(student.id, "CS999")
        assert dict(student.enrollments) == {}

    def test_raised_capacity_admits_more(self, store, enrollment_service, intro_course):
        a, b, c = (store.add_student(n) for n in ("A", "B", "C"))
        enrollment_service.enroll(a.id, "CS101")
        enrollment_service.enroll(b.id, "CS101")
        store.update_course("CS101", "Intro", 3)
        enrollment_service.enroll(c.id, "CS101")
        assert intro_course.enrolled_count == 3


class TestCapacityInvariant:
    """Enrollment count never exceeds capacity after any sequence of enrolls"""

    @pytest.mark.parametrize("seed", range(5))
    def test_random_enroll_sequences(self, store, enrollment_service, seed):
        rng = random.Random(seed)
        codes = []
        for i in range(4):
            code = f"C{i}"
            store.add_course(code, f"Course {i}", rng.randint(1, 4))
            codes.append(code)
        students = [store.add_student(f"S{i}") for i in range(10)]

        for _ in range(60):
            student = rng.choice(students)
            code = rng.choice(codes)
            try:
                enrollment_service.enroll(student.id, code)
            except EnrollmentError:
                pass
            for course in store.list_courses():
                assert course.enrolled_count <= course.max_capacity

        for course in store.list_courses():
            roster = enrollment_service.get_roster(course.course_code)
            assert len(roster) == course.enrolled_count


class NoSeminarsPolicy(EnrollmentPolicy):
    def check(self, student: Student, course: Course) -> None:
        if course.course_code.startswith("SEM"):
            raise EnrollmentError("Seminars are closed")

    def get_policy_name(self) -> str:
        return "NoSeminarsPolicy"


class TestPolicies:
    """Test the policy list"""

    def test_default_policies(self, enrollment_service):
        assert enrollment_service.get_policy_names() == [
            "DuplicateEnrollmentPolicy", "CourseCapacityPolicy"
        ]

    def test_custom_policy_rejects(self, store, enrollment_service):
        store.add_course("SEM1", "Seminar", 5)
        student = store.add_student("A")
        enrollment_service.add_policy(NoSeminarsPolicy())

        with pytest.raises(EnrollmentError, match="closed"):
            enrollment_service.enroll(student.id, "SEM1")
        assert store.get_course("SEM1").enrolled_count == 0

        enrollment_service.remove_policy("NoSeminarsPolicy")
        enrollment_service.enroll(student.id, "SEM1")
        assert student.is_enrolled_in("SEM1")


class TestQueries:
    """Test read-side helpers"""

    def test_get_enrollments_and_roster(self, store, enrollment_service, intro_course):
        a, b = store.add_student("A"), store.add_student("B")
        enrollment_service.enroll(a.id, "CS101")

        assert list(enrollment_service.get_enrollments(a.id)) == ["CS101"]
        assert enrollment_service.get_enrollments(b.id) == {}
        assert enrollment_service.get_roster("CS101") == [a]

    def test_statistics(self, store, enrollment_service, intro_course):
        for name in ("A", "B"):
            enrollment_service.enroll(store.add_student(name).id, "CS101")
        stats = enrollment_service.get_statistics()
        assert stats['total_enrollments'] == 2
        assert stats['full_courses'] == 1
        assert stats['active_policies'] == 2
