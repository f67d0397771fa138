"""
Shared fixtures for Registrar tests.
"""

import pytest

from registrar.api.admin_facade import AdminFacade
from registrar.services import EntityStore, EnrollmentService, GradingService


@pytest.fixture
def store():
    return EntityStore()


@pytest.fixture
def enrollment_service(store):
    return EnrollmentService(store)


@pytest.fixture
def grading_service(store):
    return GradingService(store)


@pytest.fixture
def facade():
    return AdminFacade.create()


@pytest.fixture
def intro_course(store):
    """CS101 with two seats"""
    return store.add_course("CS101", "Intro", 2)
