"""
SQLite store handle and simple migration system.

A ``Store`` wraps the path of a SQLite database file.  Services receive
a store when they are constructed and open one connection per call,
either for reading (``Store.connection``) or for an atomic unit of work
(``Store.transaction``).  Any ``sqlite3`` error raised inside either
block rolls the work back and is re-raised as a ``RegistryError`` so
callers never see driver exceptions.

``init_db`` applies the versioned migrations below and records each
applied version in the ``migrations`` table.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Tuple

from .config import settings
from .errors import Conflict, InternalError, RegistryError

logger = logging.getLogger(__name__)

DEMO_COURSES = ("Go Programming", "Web Development")

MIGRATIONS: List[Tuple[int, List[str]]] = [
    # Migration 1: people, courses and the enrollment join table.
    (
        1,
        [
            """
            CREATE TABLE IF NOT EXISTS person (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                first_name TEXT NOT NULL,
                last_name TEXT NOT NULL,
                type TEXT NOT NULL CHECK (type IN ('professor', 'student')),
                age INTEGER NOT NULL CHECK (age > 0)
            )
            """,
            """
            CREATE TABLE IF NOT EXISTS course (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL
            )
            """,
            """
            CREATE TABLE IF NOT EXISTS person_course (
                person_id INTEGER NOT NULL,
                course_id INTEGER NOT NULL,
                FOREIGN KEY(person_id) REFERENCES person(id),
                FOREIGN KEY(course_id) REFERENCES course(id)
            )
            """,
        ],
    ),
    # Migration 2: natural-key uniqueness backing the service-level checks,
    # plus lookup indices on the join table.
    (
        2,
        [
            "CREATE UNIQUE INDEX IF NOT EXISTS uq_course_name ON course(name)",
            "CREATE UNIQUE INDEX IF NOT EXISTS uq_person_full_name ON person(first_name, last_name)",
            "CREATE UNIQUE INDEX IF NOT EXISTS uq_person_course ON person_course(person_id, course_id)",
            "CREATE INDEX IF NOT EXISTS idx_person_course_course_id ON person_course(course_id)",
        ],
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is absolute it is used directly,
    otherwise it is resolved relative to the ``course_registry_api``
    package directory.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # course_registry_api/
    return str((base_dir / db_url).resolve())


def _translate(exc: sqlite3.Error) -> RegistryError:
    # Unique indices only fire when two writers race past the
    # service-level existence check.
    if isinstance(exc, sqlite3.IntegrityError) and "UNIQUE" in str(exc):
        return Conflict("Record already exists")
    return InternalError(f"Database error: {exc}")


class Store:
    """Handle on one SQLite database file."""

    def __init__(self, path: str) -> None:
        self.path = path

    def __repr__(self) -> str:
        return f"Store({self.path!r})"

    def connect(self) -> sqlite3.Connection:
        """Open a new connection in autocommit mode.

        Transactions are started explicitly by ``transaction`` so that
        the existence check and the write that depends on it hold the
        same write lock.  Rows are returned as ``sqlite3.Row`` and
        foreign key enforcement is enabled for the connection.
        """
        conn = sqlite3.connect(self.path, isolation_level=None)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection for read-only work and close it on exit."""
        conn = None
        try:
            conn = self.connect()
            yield conn
        except sqlite3.Error as exc:
            logger.error("Query against %s failed: %s", self.path, exc)
            raise _translate(exc) from exc
        finally:
            if conn is not None:
                conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Run the enclosed block as one atomic unit of work.

        ``BEGIN IMMEDIATE`` takes the write lock up front.  The block is
        committed when it exits normally and rolled back on any
        exception: ``RegistryError`` subclasses propagate unchanged,
        ``sqlite3`` errors are translated first.
        """
        conn = None
        try:
            conn = self.connect()
            conn.execute("BEGIN IMMEDIATE")
            yield conn
            conn.execute("COMMIT")
        except RegistryError as exc:
            _rollback(conn)
            logger.debug("Transaction rolled back: %s", exc.message)
            raise
        except sqlite3.Error as exc:
            _rollback(conn)
            logger.error("Transaction rolled back after database error: %s", exc)
            raise _translate(exc) from exc
        except Exception:
            _rollback(conn)
            logger.exception("Transaction rolled back after unexpected error")
            raise
        finally:
            if conn is not None:
                conn.close()


def _rollback(conn) -> None:
    if conn is not None and conn.in_transaction:
        conn.execute("ROLLBACK")


def init_db(store: Store, seed: bool = False) -> int:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, applies every
    migration newer than the recorded version and, when ``seed`` is
    true, inserts the demo courses that are not present yet.  Returns
    the schema version after the run.
    """
    with store.transaction() as conn:
        conn.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        row = conn.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, statements in MIGRATIONS:
            if version <= current_version:
                continue
            for statement in statements:
                conn.execute(statement)
            conn.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
            logger.info("Applied migration %s to %s", version, store.path)
            current_version = version

        if seed:
            for name in DEMO_COURSES:
                conn.execute("INSERT OR IGNORE INTO course (name) VALUES (?)", (name,))
    return current_version
