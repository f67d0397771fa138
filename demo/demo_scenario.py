#!/usr/bin/env python3
"""
Demo scenario for the Registrar platform.

Run with ``python -m demo.demo_scenario`` from the project root.
"""

import logging

from registrar.api.admin_facade import AdminFacade, OperationResult


def _show(result: OperationResult) -> OperationResult:
    marker = "ok" if result.success else f"failed [{result.error_code}]"
    print(f"  {result.operation:<18} {marker:<28} {result.message}")
    return result


def demonstrate_capacity(facade: AdminFacade):
    """A two-seat course rejects its third student."""
    _show(facade.add_course("CS101", "Intro", 2))
    ids = [_show(facade.add_student(name)).data['student_id'] for name in ("A", "B", "C")]
    for student_id in ids:
        _show(facade.enroll(student_id, "CS101"))
    _show(facade.enroll(ids[0], "CS101"))
    return ids


def demonstrate_grading(facade: AdminFacade, student_ids):
    """Grades require an enrollment and must fall in 0..100."""
    first, _, last = student_ids
    _show(facade.assign_grade(last, "CS101", 50))
    _show(facade.assign_grade(first, "CS101", 150))
    _show(facade.compute_aggregate(first))
    _show(facade.assign_grade(first, "CS101", 80))
    _show(facade.add_course("MA202", "Calculus II", 3))
    _show(facade.enroll(first, "MA202"))
    _show(facade.assign_grade(first, "MA202", 90))
    _show(facade.compute_aggregate(first))


def demonstrate_updates(facade: AdminFacade, student_ids):
    """Capacity cannot drop below the current enrollment count."""
    _show(facade.update_course("CS101", "Intro to Programming", 1))
    _show(facade.update_course("CS101", "Intro to Programming", 4))
    _show(facade.update_student(student_ids[1], "Bob Smith"))


def run_demo() -> AdminFacade:
    """Run the demo against a fresh in-memory store."""
    print("=" * 60)
    print("REGISTRAR - DEMO")
    print("=" * 60)

    facade = AdminFacade.create()

    print("\n1. Enrollment and capacity...")
    ids = demonstrate_capacity(facade)

    print("\n2. Grading...")
    demonstrate_grading(facade, ids)

    print("\n3. Updates...")
    demonstrate_updates(facade, ids)

    print("\n4. Listing...")
    for course in _show(facade.list_courses()).data['courses']:
        print(f"    [{course['course_code']}] {course['name']} "
              f"{course['enrolled_count']}/{course['max_capacity']}")
    for student in _show(facade.list_students()).data['students']:
        print(f"    {student['student_id']} {student['name']} overall={student['overall_grade']}")

    print("\n" + "=" * 60)
    print("DEMO COMPLETED")
    print("=" * 60)
    return facade


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    run_demo()
