"""
Unit test fixtures. Services run against the in-memory DB from the root conftest.
"""
import pytest


@pytest.fixture
def enrollment_service(db_session):
    from api.services.enrollment_service import EnrollmentService
    return EnrollmentService(db_session)


@pytest.fixture
def catalog(db_session):
    from api.services.course_catalog import CourseCatalog
    return CourseCatalog(db_session)
