"""
Service layer for people.

People are addressed by their ``(first_name, last_name)`` pair, which
must be unique, while the numeric ``id`` stays the canonical key used
for every write.  Each mutation runs in a single ``Store.transaction``
together with the enrollment changes it implies, so a failure at any
step leaves neither the person row nor the join table half-updated.
"""

import logging
import sqlite3
from typing import Any, List, Optional

from ..core.db import Store
from ..core.errors import Conflict, NotFound
from ..core.validation import validate_payload
from ..schemas.person import PersonCreate, PersonRead, PersonUpdate
from .enrollment_service import EnrollmentService
from .identity import format_full_name

logger = logging.getLogger(__name__)

PERSON_COLUMNS = "id, first_name, last_name, type, age"


class PersonService:
    """CRUD operations on people and their course enrollments."""

    def __init__(self, store: Store) -> None:
        self.store = store

    @staticmethod
    def _find_by_name(conn: sqlite3.Connection, first_name: str, last_name: str) -> Optional[sqlite3.Row]:
        return conn.execute(
            f"SELECT {PERSON_COLUMNS} FROM person WHERE first_name = ? AND last_name = ?",
            (first_name, last_name),
        ).fetchone()

    def _require_by_name(self, conn: sqlite3.Connection, first_name: str, last_name: str) -> sqlite3.Row:
        row = self._find_by_name(conn, first_name, last_name)
        if row is None:
            raise NotFound("Person not found")
        return row

    @staticmethod
    def _to_read(conn: sqlite3.Connection, row: sqlite3.Row) -> PersonRead:
        return PersonRead(
            id=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            type=row["type"],
            age=row["age"],
            courses=EnrollmentService.courses_for_person(conn, row["id"]),
        )

    async def list_people(self) -> List[PersonRead]:
        """Return every person in store order."""
        with self.store.connection() as conn:
            rows = conn.execute(f"SELECT {PERSON_COLUMNS} FROM person").fetchall()
            return [self._to_read(conn, row) for row in rows]

    async def get_person(self, first_name: str, last_name: str) -> PersonRead:
        """Exact, case-sensitive lookup by full name; ``NotFound`` if absent."""
        with self.store.connection() as conn:
            return self._to_read(conn, self._require_by_name(conn, first_name, last_name))

    async def create_person(self, payload: Any) -> PersonRead:
        """Insert a person and enroll them in ``payload.courses``.

        Raises ``ValidationError`` for a bad payload or an unknown course
        id and ``Conflict`` when the full name is already taken.
        """
        data = validate_payload(PersonCreate, payload)
        with self.store.transaction() as conn:
            if self._find_by_name(conn, data.first_name, data.last_name) is not None:
                raise Conflict(
                    f"Person {format_full_name(data.first_name, data.last_name)} already exists"
                )
            cursor = conn.execute(
                "INSERT INTO person (first_name, last_name, type, age) VALUES (?, ?, ?, ?)",
                (data.first_name, data.last_name, data.type, data.age),
            )
            person_id = cursor.lastrowid
            courses = EnrollmentService.sync_person_courses(conn, person_id, data.courses)
        logger.info(
            "Person %s created (id=%s, courses=%s)",
            format_full_name(data.first_name, data.last_name),
            person_id,
            courses,
        )
        return PersonRead(id=person_id, courses=courses, **data.model_dump(exclude={"courses"}))

    async def update_person(self, first_name: str, last_name: str, payload: Any) -> PersonRead:
        """Replace every field of the person currently named ``first last``.

        ``NotFound`` is checked before the payload is validated.  The
        enrollment set is replaced by ``payload.courses``.  A new name
        takes effect immediately: afterwards only the new name resolves.
        Renaming onto another person's name raises ``Conflict``.
        """
        with self.store.transaction() as conn:
            person_id = self._require_by_name(conn, first_name, last_name)["id"]
            data = validate_payload(PersonUpdate, payload)
            if (data.first_name, data.last_name) != (first_name, last_name):
                other = self._find_by_name(conn, data.first_name, data.last_name)
                if other is not None and other["id"] != person_id:
                    raise Conflict(
                        f"Person {format_full_name(data.first_name, data.last_name)} already exists"
                    )
            conn.execute(
                "UPDATE person SET first_name = ?, last_name = ?, type = ?, age = ? WHERE id = ?",
                (data.first_name, data.last_name, data.type, data.age, person_id),
            )
            courses = EnrollmentService.sync_person_courses(conn, person_id, data.courses)
        logger.info("Person %s updated (id=%s)", format_full_name(first_name, last_name), person_id)
        return PersonRead(id=person_id, courses=courses, **data.model_dump(exclude={"courses"}))

    async def delete_person(self, first_name: str, last_name: str) -> None:
        """Delete the person and all of their enrollments atomically."""
        with self.store.transaction() as conn:
            person_id = self._require_by_name(conn, first_name, last_name)["id"]
            removed = EnrollmentService.clear_for_person(conn, person_id)
            conn.execute("DELETE FROM person WHERE id = ?", (person_id,))
        logger.info(
            "Person %s deleted (id=%s, %s enrollments removed)",
            format_full_name(first_name, last_name),
            person_id,
            removed,
        )
