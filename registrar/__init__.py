"""
Registrar: Course Enrollment and Grade Management Core

An in-memory core that keeps students, courses, enrollments and grades
consistent while they are mutated through an administrative interface,
with a REST API on top.
"""

__version__ = "1.0.0"
__author__ = "Registrar Development Team"
__description__ = "Course Enrollment and Grade Management Core"
