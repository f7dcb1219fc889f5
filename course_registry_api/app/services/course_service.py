"""
Service layer for courses.

Course names are unique.  The existence check and the insert or rename
that depends on it share one transaction, and deleting a course removes
its enrollment rows in the same unit of work.
"""

import logging
import sqlite3
from typing import Any, List, Optional, Union

from ..core.db import Store
from ..core.errors import Conflict, InvalidID, NotFound
from ..core.validation import validate_payload
from ..schemas.course import CourseCreate, CourseRead, CourseUpdate
from .enrollment_service import EnrollmentService
from .identity import parse_course_id

logger = logging.getLogger(__name__)


class CourseService:
    """CRUD operations on courses."""

    def __init__(self, store: Store) -> None:
        self.store = store

    @staticmethod
    def _find_by_id(conn: sqlite3.Connection, course_id: int) -> Optional[sqlite3.Row]:
        return conn.execute("SELECT id, name FROM course WHERE id = ?", (course_id,)).fetchone()

    def _require_by_id(self, conn: sqlite3.Connection, course_id: int) -> sqlite3.Row:
        row = self._find_by_id(conn, course_id)
        if row is None:
            raise NotFound("Course not found")
        return row

    @staticmethod
    def _name_taken(conn: sqlite3.Connection, name: str, exclude_id: Optional[int] = None) -> bool:
        row = conn.execute("SELECT id FROM course WHERE name = ?", (name,)).fetchone()
        return row is not None and row["id"] != exclude_id

    async def list_courses(self) -> List[CourseRead]:
        with self.store.connection() as conn:
            rows = conn.execute("SELECT id, name FROM course").fetchall()
        return [CourseRead(id=row["id"], name=row["name"]) for row in rows]

    async def get_course(self, course_id: Union[str, int]) -> CourseRead:
        """Fetch a course; ``InvalidID`` for a non-numeric id, ``NotFound`` if absent."""
        course_id = parse_course_id(course_id)
        with self.store.connection() as conn:
            row = self._require_by_id(conn, course_id)
        return CourseRead(id=row["id"], name=row["name"])

    async def create_course(self, payload: Any) -> CourseRead:
        data = validate_payload(CourseCreate, payload)
        with self.store.transaction() as conn:
            if self._name_taken(conn, data.name):
                raise Conflict(f"Course {data.name!r} already exists")
            cursor = conn.execute("INSERT INTO course (name) VALUES (?)", (data.name,))
            course_id = cursor.lastrowid
        logger.info("Course %r created (id=%s)", data.name, course_id)
        return CourseRead(id=course_id, name=data.name)

    async def update_course(self, course_id: Union[str, int], payload: Any) -> CourseRead:
        """Rename a course.  ``name`` is the only field that changes."""
        course_id = parse_course_id(course_id)
        with self.store.transaction() as conn:
            self._require_by_id(conn, course_id)
            data = validate_payload(CourseUpdate, payload)
            if self._name_taken(conn, data.name, exclude_id=course_id):
                raise Conflict(f"Course {data.name!r} already exists")
            conn.execute("UPDATE course SET name = ? WHERE id = ?", (data.name, course_id))
        logger.info("Course %s renamed to %r", course_id, data.name)
        return CourseRead(id=course_id, name=data.name)

    async def delete_course(self, course_id: Union[str, int]) -> None:
        """Delete a course together with every enrollment that references it.

        A non-numeric id is reported as ``NotFound``.
        """
        try:
            course_id = parse_course_id(course_id)
        except InvalidID:
            raise NotFound("Course not found") from None
        with self.store.transaction() as conn:
            self._require_by_id(conn, course_id)
            removed = EnrollmentService.clear_for_course(conn, course_id)
            conn.execute("DELETE FROM course WHERE id = ?", (course_id,))
        logger.info("Course %s deleted (%s enrollments removed)", course_id, removed)
