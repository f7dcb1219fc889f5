"""
Pydantic schema definitions for API payloads.

Schemas are separated from the SQL in the service layer so the API
representation stays independent of the table layout.
"""

from .course import CourseCreate, CourseRead, CourseUpdate
from .person import PERSON_TYPES, PersonCreate, PersonRead, PersonUpdate

__all__ = [
    "CourseCreate", "CourseRead", "CourseUpdate",
    "PERSON_TYPES", "PersonCreate", "PersonRead", "PersonUpdate",
]
