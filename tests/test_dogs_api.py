"""
Integration tests for the /api/v1/dogs endpoints.
"""

from datetime import date
from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from kennel_api.app.core.errors import DogServiceError

BASE = "/api/v1/dogs"

MAX = {"name": "Max", "breed": "Labrador", "badgeId": 42, "status": "in training"}


def _create(client, **overrides):
    payload = {**MAX, **overrides}
    response = client.post(f"{BASE}/", json=payload)
    assert response.status_code == 200, response.text
    return response.json()


def test_create_returns_camel_case_record(client):
    body = _create(client, dateAcquired="2021-06-15", kennelingCharacteristics="Calm")

    assert body["id"] > 0
    assert body["badgeId"] == 42
    assert body["dateAcquired"] == "2021-06-15"
    assert body["kennelingCharacteristics"] == "Calm"
    assert body["supplier"] == ""
    assert body["dateDeleted"] is None


def test_get_by_id(client):
    created = _create(client)

    response = client.get(f"{BASE}/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_get_missing_dog_returns_404_error_body(client):
    response = client.get(f"{BASE}/999")

    assert response.status_code == 404
    assert response.json() == {
        "message": "Dog with ID 999 not found",
        "status": 404,
        "error": "Not Found",
        "path": f"{BASE}/999",
    }


def test_list_with_filter(client):
    _create(client, name="Buddy", breed="Golden Retriever", badgeId=1)
    _create(client, name="Luna", breed="Beagle", badgeId=2)

    response = client.get(f"{BASE}/", params={"filter": "golden"})

    assert response.status_code == 200
    assert [dog["name"] for dog in response.json()] == ["Buddy"]


def test_validation_failure_returns_400(client):
    response = client.post(f"{BASE}/", json={**MAX, "status": "asleep"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Bad Request"
    assert body["status"] == 400
    assert "in training" in body["message"]


def test_malformed_payload_returns_400(client):
    response = client.post(f"{BASE}/", json={**MAX, "birthDate": "not-a-date"})

    assert response.status_code == 400
    assert response.json()["path"] == f"{BASE}/"


def test_duplicate_badge_returns_400(client):
    _create(client)

    response = client.post(f"{BASE}/", json={**MAX, "name": "Rex"})

    assert response.status_code == 400
    assert "PUT" in response.json()["message"]


def test_update_then_soft_delete_scenario(client):
    created = _create(client)

    response = client.put(f"{BASE}/{created['id']}", json={"status": "retired"})
    assert response.status_code == 200
    assert response.json()["status"] == "retired"
    assert response.json()["name"] == "Max"

    response = client.delete(f"{BASE}/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {"message": f"Dog with ID {created['id']} has been successfully deleted"}

    assert client.get(f"{BASE}/").json() == []
    everything = client.get(f"{BASE}/all").json()
    assert [dog["id"] for dog in everything] == [created["id"]]
    assert everything[0]["dateDeleted"] == date.today().isoformat()
    assert client.get(f"{BASE}/{created['id']}").status_code == 200


def test_update_with_empty_body_returns_400(client):
    created = _create(client)

    response = client.put(f"{BASE}/{created['id']}", json={})

    assert response.status_code == 400
    assert response.json()["message"] == "No update values have been provided."


def test_update_and_delete_missing_dog_return_404(client):
    assert client.put(f"{BASE}/77", json={"name": "Ghost"}).status_code == 404
    assert client.delete(f"{BASE}/77").status_code == 404


def test_service_error_returns_500(client):
    client.app.state.dog_service.list_all_dogs = AsyncMock(
        side_effect=DogServiceError("Error while retrieving all dogs: database is locked")
    )

    response = client.get(f"{BASE}/all")

    assert response.status_code == 500
    assert response.json()["error"] == "Internal Server Error"
    assert "database is locked" in response.json()["message"]


def test_unexpected_error_returns_500(client):
    client.app.state.dog_service.get_dog = AsyncMock(side_effect=RuntimeError("boom"))
    unguarded = TestClient(client.app, raise_server_exceptions=False)

    response = unguarded.get(f"{BASE}/1")

    assert response.status_code == 500
    assert response.json()["message"] == "An unexpected error occurred: boom"


def test_health(client):
    response = client.get("/api/v1/info/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["database"] == "ok"


def test_out_of_range_integers(client):
    huge = 2**63

    assert client.get(f"{BASE}/{huge}").status_code == 404
    assert client.put(f"{BASE}/{huge}", json={"name": "Rex"}).status_code == 404
    assert client.delete(f"{BASE}/{huge}").status_code == 404

    response = client.post(f"{BASE}/", json={**MAX, "badgeId": huge})
    assert response.status_code == 400
    assert "cannot be greater than" in response.json()["message"]
