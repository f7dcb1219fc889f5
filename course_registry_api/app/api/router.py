"""
Top-level API router.

Aggregates the entity routers; ``main.create_app`` mounts it under
``/api``.  The paths are singular (``/api/person``, ``/api/course``).
"""

from fastapi import APIRouter

from .endpoints import courses, people

router = APIRouter()

router.include_router(people.router, prefix="/person", tags=["people"])
router.include_router(courses.router, prefix="/course", tags=["courses"])
