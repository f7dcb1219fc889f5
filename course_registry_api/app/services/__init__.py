"""
Service layer.

Each service encapsulates the business logic for one entity and is
constructed with the ``Store`` it operates on, so handlers and tests
choose the database explicitly instead of sharing a global connection.
"""

from .course_service import CourseService
from .enrollment_service import EnrollmentService
from .person_service import PersonService

__all__ = ["CourseService", "EnrollmentService", "PersonService"]
