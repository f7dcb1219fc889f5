"""Tests for the person_course synchronisation logic."""
import pytest

from course_registry_api.app.core.errors import ValidationError
from course_registry_api.app.services.enrollment_service import EnrollmentService


@pytest.fixture
def seeded(store):
    """Two people and three courses, with no enrollments yet."""
    with store.transaction() as conn:
        for name in ("Math 101", "Physics 201", "History 301"):
            conn.execute("INSERT INTO course (name) VALUES (?)", (name,))
        conn.execute(
            "INSERT INTO person (first_name, last_name, type, age) VALUES ('Ada', 'Lovelace', 'professor', 36)"
        )
        conn.execute(
            "INSERT INTO person (first_name, last_name, type, age) VALUES ('Alan', 'Turing', 'student', 22)"
        )
    return store


def test_sync_person_courses_writes_one_row_per_course(seeded, enrollment_rows):
    with seeded.transaction() as conn:
        written = EnrollmentService.sync_person_courses(conn, 1, [2, 1])
    assert written == [2, 1]
    assert enrollment_rows(1) == [(1, 1), (1, 2)]


def test_sync_person_courses_replaces_previous_set(seeded, enrollment_rows):
    with seeded.transaction() as conn:
        EnrollmentService.sync_person_courses(conn, 1, [1, 2])
    with seeded.transaction() as conn:
        EnrollmentService.sync_person_courses(conn, 1, [3])
    assert enrollment_rows(1) == [(1, 3)]


def test_sync_person_courses_collapses_duplicates(seeded, enrollment_rows):
    with seeded.transaction() as conn:
        written = EnrollmentService.sync_person_courses(conn, 1, [2, 2, 1, 2])
    assert written == [2, 1]
    assert enrollment_rows(1) == [(1, 1), (1, 2)]


def test_sync_person_courses_with_empty_list_clears(seeded, enrollment_rows):
    with seeded.transaction() as conn:
        EnrollmentService.sync_person_courses(conn, 1, [1, 2])
    with seeded.transaction() as conn:
        EnrollmentService.sync_person_courses(conn, 1, [])
    assert enrollment_rows(1) == []


def test_sync_person_courses_rejects_unknown_course_and_rolls_back(seeded, enrollment_rows):
    with seeded.transaction() as conn:
        EnrollmentService.sync_person_courses(conn, 1, [1])

    with pytest.raises(ValidationError) as excinfo:
        with seeded.transaction() as conn:
            EnrollmentService.sync_person_courses(conn, 1, [2, 99])

    assert excinfo.value.fields == ["courses"]
    assert "99" in excinfo.value.message
    # The earlier enrollment set survives the failed replacement.
    assert enrollment_rows(1) == [(1, 1)]


def test_clear_for_person_leaves_other_people_alone(seeded, enrollment_rows):
    with seeded.transaction() as conn:
        EnrollmentService.sync_person_courses(conn, 1, [1, 2])
        EnrollmentService.sync_person_courses(conn, 2, [2, 3])
    with seeded.transaction() as conn:
        assert EnrollmentService.clear_for_person(conn, 1) == 2
    assert enrollment_rows() == [(2, 2), (2, 3)]


def test_clear_for_course_removes_only_that_course(seeded, enrollment_rows):
    with seeded.transaction() as conn:
        EnrollmentService.sync_person_courses(conn, 1, [1, 2])
        EnrollmentService.sync_person_courses(conn, 2, [2, 3])
    with seeded.transaction() as conn:
        assert EnrollmentService.clear_for_course(conn, 2) == 2
    assert enrollment_rows() == [(1, 1), (2, 3)]


def test_clear_is_idempotent(seeded):
    with seeded.transaction() as conn:
        assert EnrollmentService.clear_for_person(conn, 1) == 0
        assert EnrollmentService.clear_for_course(conn, 3) == 0


def test_courses_for_person_is_ordered(seeded):
    with seeded.transaction() as conn:
        EnrollmentService.sync_person_courses(conn, 2, [3, 1])
    with seeded.connection() as conn:
        assert EnrollmentService.courses_for_person(conn, 2) == [1, 3]
