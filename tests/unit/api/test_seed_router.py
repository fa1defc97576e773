"""HTTP tests for the seed endpoint."""

from fastapi.testclient import TestClient

from src.advocates.entities.advocate import AdvocateRepository


def test_first_seed_inserts_dataset(client: TestClient, repository: AdvocateRepository):
    response = client.post("/api/seed")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Database seeded successfully"
    assert body["count"] == 15
    assert len(body["advocates"]) == 15
    assert body["advocates"][0]["firstName"] == "John"
    assert repository.count() == 15


def test_second_seed_conflicts_and_changes_nothing(
    client: TestClient, repository: AdvocateRepository
):
    assert client.post("/api/seed").status_code == 200

    response = client.post("/api/seed")

    assert response.status_code == 409
    assert response.json() == {
        "error": "Database already seeded",
        "message": "Advocates may already exist in the database",
    }
    assert repository.count() == 15


def test_seeded_data_is_listed(client: TestClient):
    client.post("/api/seed")

    body = client.get("/api/advocates", params={"specialty": "Bipolar"}).json()

    assert body["pagination"]["total"] >= 1
    assert all("Bipolar" in record["specialties"] for record in body["data"])
