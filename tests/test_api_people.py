"""HTTP tests for the /api/person endpoints."""
import pytest

from tests.factories import person_payload


@pytest.fixture
def course_ids(client):
    ids = []
    for name in ("Math 101", "Physics 201"):
        resp = client.post("/api/course", json={"name": name})
        assert resp.status_code == 201
        ids.append(resp.json()["id"])
    return ids


def test_create_and_get_by_encoded_name(client, course_ids, enrollment_rows):
    resp = client.post("/api/person", json=person_payload(courses=course_ids))
    assert resp.status_code == 201
    person_id = resp.json()["id"]

    resp = client.get("/api/person/John%20Doe")
    assert resp.status_code == 200
    body = resp.json()
    assert body["type"] == "student"
    assert body["age"] == 20
    assert body["courses"] == course_ids
    assert enrollment_rows(person_id) == [(person_id, course_ids[0]), (person_id, course_ids[1])]


def test_list_people(client):
    assert client.get("/api/person").json() == []
    client.post("/api/person", json=person_payload())
    client.post("/api/person", json=person_payload(first_name="Jane", last_name="Smith", age=35))
    resp = client.get("/api/person")
    assert resp.status_code == 200
    assert [p["first_name"] for p in resp.json()] == ["John", "Jane"]


def test_create_duplicate_returns_409(client):
    assert client.post("/api/person", json=person_payload()).status_code == 201
    resp = client.post("/api/person", json=person_payload(age=30))
    assert resp.status_code == 409
    assert "already exists" in resp.json()["detail"]


@pytest.mark.parametrize(
    "overrides",
    [{"type": "janitor"}, {"age": 0}, {"age": "old"}, {"first_name": ""}, {"courses": ["x"]}],
)
def test_create_invalid_payload_returns_400(client, overrides):
    payload = person_payload()
    payload.update(overrides)
    resp = client.post("/api/person", json=payload)
    assert resp.status_code == 400
    assert resp.json()["fields"]


def test_create_with_malformed_json_returns_400(client):
    resp = client.post(
        "/api/person", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 400


def test_create_with_unknown_course_returns_400(client):
    resp = client.post("/api/person", json=person_payload(courses=[404]))
    assert resp.status_code == 400
    assert resp.json()["fields"] == ["courses"]
    assert client.get("/api/person").json() == []


@pytest.mark.parametrize("segment", ["JohnDoe", "John%2", "%20Doe"])
def test_bad_name_format_returns_400(client, segment):
    assert client.get(f"/api/person/{segment}").status_code == 400
    assert client.delete(f"/api/person/{segment}").status_code == 400
    assert client.put(f"/api/person/{segment}", json=person_payload()).status_code == 400


def test_unknown_person_returns_404(client):
    assert client.get("/api/person/Nobody%20Here").status_code == 404
    assert client.delete("/api/person/Nobody%20Here").status_code == 404
    assert client.put("/api/person/Nobody%20Here", json=person_payload()).status_code == 404


def test_last_name_with_spaces_round_trips(client):
    client.post("/api/person", json=person_payload(first_name="Mary", last_name="Ann Lee"))
    resp = client.get("/api/person/Mary%20Ann%20Lee")
    assert resp.status_code == 200
    assert resp.json()["last_name"] == "Ann Lee"


def test_update_replaces_enrollments(client, course_ids, enrollment_rows):
    person_id = client.post("/api/person", json=person_payload(courses=course_ids)).json()["id"]

    resp = client.put(
        "/api/person/John%20Doe",
        json=person_payload(person_type="professor", age=45, courses=[course_ids[1]]),
    )

    assert resp.status_code == 200
    assert resp.json()["type"] == "professor"
    assert resp.json()["courses"] == [course_ids[1]]
    assert enrollment_rows(person_id) == [(person_id, course_ids[1])]


def test_update_with_new_name_rekeys(client):
    client.post("/api/person", json=person_payload())
    resp = client.put("/api/person/John%20Doe", json=person_payload(last_name="Roe"))
    assert resp.status_code == 200
    assert client.get("/api/person/John%20Doe").status_code == 404
    assert client.get("/api/person/John%20Roe").status_code == 200


def test_update_rename_conflict_returns_409(client):
    client.post("/api/person", json=person_payload())
    client.post("/api/person", json=person_payload(first_name="Jane", last_name="Smith"))
    resp = client.put("/api/person/Jane%20Smith", json=person_payload())
    assert resp.status_code == 409


def test_delete_person_removes_enrollments(client, course_ids, enrollment_rows):
    person_id = client.post("/api/person", json=person_payload(courses=course_ids)).json()["id"]

    resp = client.delete("/api/person/John%20Doe")

    assert resp.status_code == 200
    assert resp.json() == {"message": "Person deleted successfully"}
    assert enrollment_rows(person_id) == []
    assert client.get("/api/person/John%20Doe").status_code == 404


@pytest.mark.parametrize(
    "overrides, field",
    [({"age": True}, "age"), ({"age": "20"}, "age"), ({"courses": [True]}, "courses.0")],
)
def test_create_rejects_coercible_values(client, course_ids, overrides, field):
    payload = person_payload()
    payload.update(overrides)
    resp = client.post("/api/person", json=payload)
    assert resp.status_code == 400
    assert resp.json()["fields"] == [field]
    assert client.get("/api/person").json() == []
