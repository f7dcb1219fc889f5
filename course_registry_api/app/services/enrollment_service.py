"""
Synchronisation of the ``person_course`` join table.

Every method works on a connection whose transaction is owned by the
caller (``Store.transaction``) and never commits on its own, so the
enrollment rows change atomically with the person or course mutation
that triggered them.
"""

import logging
import sqlite3
from typing import Iterable, List

from ..core.errors import ValidationError

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Keeps enrollment rows consistent with their owning entities."""

    @classmethod
    def courses_for_person(cls, conn: sqlite3.Connection, person_id: int) -> List[int]:
        rows = conn.execute(
            "SELECT course_id FROM person_course WHERE person_id = ? ORDER BY course_id",
            (person_id,),
        ).fetchall()
        return [row["course_id"] for row in rows]

    @classmethod
    def missing_courses(cls, conn: sqlite3.Connection, course_ids: Iterable[int]) -> List[int]:
        """Return the ids from ``course_ids`` with no matching course row."""
        missing: List[int] = []
        for course_id in course_ids:
            row = conn.execute("SELECT id FROM course WHERE id = ?", (course_id,)).fetchone()
            if row is None:
                missing.append(course_id)
        return missing

    @classmethod
    def sync_person_courses(
        cls,
        conn: sqlite3.Connection,
        person_id: int,
        course_ids: Iterable[int],
    ) -> List[int]:
        """Make the person's enrollments equal to ``course_ids``.

        Existing rows for ``person_id`` are deleted and one row is
        inserted per distinct course id, in input order.  The person row
        must already exist.  Every course id is checked first; a dangling
        id raises ``ValidationError`` before anything is written, and the
        caller's transaction is expected to roll back.

        Returns the list of course ids written.
        """
        wanted = list(dict.fromkeys(course_ids))
        missing = cls.missing_courses(conn, wanted)
        if missing:
            raise ValidationError(
                "Unknown course id(s): " + ", ".join(str(c) for c in missing),
                fields=["courses"],
            )
        cursor = conn.execute("DELETE FROM person_course WHERE person_id = ?", (person_id,))
        removed = cursor.rowcount
        conn.executemany(
            "INSERT INTO person_course (person_id, course_id) VALUES (?, ?)",
            [(person_id, course_id) for course_id in wanted],
        )
        logger.debug(
            "Person %s enrollments replaced (%s removed, %s added)", person_id, removed, len(wanted)
        )
        return wanted

    @classmethod
    def clear_for_person(cls, conn: sqlite3.Connection, person_id: int) -> int:
        """Delete every enrollment of ``person_id``; zero rows is fine."""
        cursor = conn.execute("DELETE FROM person_course WHERE person_id = ?", (person_id,))
        return cursor.rowcount

    @classmethod
    def clear_for_course(cls, conn: sqlite3.Connection, course_id: int) -> int:
        """Delete every enrollment in ``course_id``; zero rows is fine."""
        cursor = conn.execute("DELETE FROM person_course WHERE course_id = ?", (course_id,))
        return cursor.rowcount
