"""
Script to add sample data to the Registrar platform via REST API.
Make sure the server is running before executing this script.

Usage:
    python add_data.py
"""

import os
import sys
from typing import Any, Dict, List, Optional

import requests


def _console_supports_utf8() -> bool:
    enc = getattr(sys.stdout, "encoding", None)
    return enc is not None and "utf" in enc.lower()


_OK_CHAR = "✓" if _console_supports_utf8() else "[OK]"
_FAIL_CHAR = "✗" if _console_supports_utf8() else "[FAIL]"

DEFAULT_BASE_URL = "http://127.0.0.1:8000"


def detect_base_url(session=None) -> str:
    """Determine a reachable base URL.

    Priority: environment variable `REGISTRAR_BASE_URL`, then common local ports.
    If nothing responds, fall back to http://127.0.0.1:8000.
    """
    env = os.environ.get("REGISTRAR_BASE_URL")
    if env:
        return env

    session = session or requests
    candidates = [
        DEFAULT_BASE_URL,
        "http://127.0.0.1:8888",
        "http://localhost:8000",
        "http://localhost:8888",
    ]

    for c in candidates:
        try:
            resp = session.get(f"{c}/health", timeout=0.5)
            if resp.status_code == 200:
                return c
        except requests.exceptions.RequestException:
            continue

    return DEFAULT_BASE_URL


class RegistrarClient:
    """Thin client over the Registrar REST API."""

    def __init__(self, base_url: str, session=None):
        self.base_url = base_url.rstrip("/")
        self._session = session or requests.Session()

    def _request(self, method: str, path: str, expected: int, label: str,
                 json: Optional[Dict[str, Any]] = None) -> Optional[Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self._session.request(method, url, json=json)
        except requests.exceptions.RequestException as e:
            print(f"{_FAIL_CHAR} Error {label}: {e}")
            return None
        if response.status_code == expected:
            return response.json()
        print(f"{_FAIL_CHAR} Failed {label}: {response.text}")
        return None

    def check_server(self) -> bool:
        """Check if the server is running."""
        try:
            response = self._session.get(f"{self.base_url}/health", timeout=2)
            if response.status_code == 200:
                print(f"{_OK_CHAR} Server is running")
                return True
        except requests.exceptions.RequestException:
            pass
        print(f"{_FAIL_CHAR} Server is not running!")
        print("\nPlease start the server first:")
        print("  python -m registrar.main --rest-port 8000 --no-sample-data")
        return False

    def create_course(self, course_code: str, name: str, capacity: int):
        course = self._request("POST", "/courses", 201, "creating course",
                               json={"course_code": course_code, "name": name, "capacity": capacity})
        if course:
            print(f"{_OK_CHAR} Created course: {course_code} - {name}")
        return course

    def create_student(self, name: str):
        student = self._request("POST", "/students", 201, "creating student", json={"name": name})
        if student:
            print(f"{_OK_CHAR} Created student: {name} ({student['student_id']})")
        return student

    def enroll_student(self, student_id: str, course_code: str):
        result = self._request("POST", "/enrollments", 201, "enrolling student",
                               json={"student_id": student_id, "course_code": course_code})
        if result:
            print(f"{_OK_CHAR} {result['message']}")
        return result

    def assign_grade(self, student_id: str, course_code: str, value: int):
        result = self._request("PUT", f"/students/{student_id}/grades/{course_code}", 200,
                               "assigning grade", json={"value": value})
        if result:
            print(f"{_OK_CHAR} {result['message']}")
        return result

    def compute_aggregate(self, student_id: str):
        result = self._request("POST", f"/students/{student_id}/aggregate", 200, "computing overall grade")
        if result:
            print(f"{_OK_CHAR} {result['message']}")
        return result

    def list_students(self) -> List[Dict[str, Any]]:
        students = self._request("GET", "/students", 200, "listing students") or []
        print(f"\n--- Registered Students ({len(students)}) ---")
        for s in students:
            enrolled = ", ".join(s['enrollments']) or "None"
            print(f"ID: {s['student_id']} | Name: {s['name']} | Enrolled: {enrolled} | Overall Grade: {s['overall_grade']}")
        return students

    def list_courses(self) -> Dict[str, Any]:
        listing = self._request("GET", "/courses", 200, "listing courses") or {"courses": [], "total_enrolled": 0}
        print(f"\n--- Available Courses ({len(listing['courses'])}) ---")
        for c in listing['courses']:
            print(f"[{c['course_code']}] {c['name']} (Capacity: {c['max_capacity']}, Enrolled: {c['enrolled_count']})")
        print(f"Total Students Enrolled System-Wide: {listing['total_enrolled']}")
        return listing


def seed(client: RegistrarClient) -> Dict[str, Any]:
    """Create the sample courses, students, enrollments and grades."""
    print("\nCreating courses...")
    courses = [
        client.create_course("CS101", "Intro to Programming", 5),
        client.create_course("CS201", "Data Structures", 4),
        client.create_course("MA202", "Calculus II", 3),
        client.create_course("EN101", "English Composition", 2),
    ]

    print("\nCreating students...")
    names = ["Alice Johnson", "Bob Smith", "Carol Davis", "David Wilson", "Emma Brown"]
    students = {name: client.create_student(name) for name in names}
    ids = {name: s['student_id'] for name, s in students.items() if s}

    print("\nEnrolling students...")
    plan = [
        ("Alice Johnson", "CS101"), ("Bob Smith", "CS101"), ("Carol Davis", "CS201"),
        ("David Wilson", "MA202"), ("Emma Brown", "EN101"), ("Alice Johnson", "MA202"),
        ("Bob Smith", "EN101"),
    ]
    enrollments = [client.enroll_student(ids[name], code) for name, code in plan if name in ids]

    print("\nAssigning grades...")
    grades = [
        ("Alice Johnson", "CS101", 80), ("Alice Johnson", "MA202", 90),
        ("Bob Smith", "CS101", 72), ("Carol Davis", "CS201", 95),
    ]
    for name, code, value in grades:
        if name in ids:
            client.assign_grade(ids[name], code, value)
    for name in ids:
        client.compute_aggregate(ids[name])

    return {
        'courses': [c for c in courses if c],
        'students': ids,
        'enrollments': [e for e in enrollments if e],
    }


def main():
    base_url = detect_base_url()
    client = RegistrarClient(base_url)
    if not client.check_server():
        sys.exit(1)

    print("\n" + "=" * 60)
    print("Adding Sample Data...")
    print("=" * 60)

    seed(client)

    client.list_students()
    client.list_courses()

    print("\n" + "=" * 60)
    print(f"{_OK_CHAR} Sample data added successfully!")
    print("=" * 60)
    print("\nYou can now:")
    print(f"  - View API docs: {base_url}/docs")
    print(f"  - List students: curl {base_url}/students")
    print(f"  - List courses: curl {base_url}/courses")
    print()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print(f"\n\n{_FAIL_CHAR} Interrupted by user")
        sys.exit(1)
