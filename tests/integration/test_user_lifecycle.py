"""End-to-end user lifecycle over the HTTP surface."""

from fastapi.testclient import TestClient


def test_create_get_delete_scenario(client: TestClient):
    response = client.post(
        "/user", json={"first_name": "MG", "last_name": "Kim", "email": "a@b.com"}
    )
    assert response.status_code == 201
    created = response.json()
    assert created["id"] == 1

    response = client.get("/user/1")
    assert response.status_code == 200
    fetched = response.json()
    for field in ("id", "first_name", "last_name", "email", "created_at"):
        assert fetched[field] == created[field]

    response = client.delete("/user/1")
    assert response.status_code == 200
    assert response.text == "Deleted User Id:1"

    response = client.get("/user/1")
    assert response.status_code == 404
    assert response.text == "No User Id:1"


def test_listing_tracks_creates_and_deletes(client: TestClient, user_data):
    assert client.get("/users").status_code == 404

    for _ in range(3):
        client.post("/user", json=user_data)
    assert len(client.get("/users").json()) == 3

    client.delete("/user/2")
    users = client.get("/users").json()
    assert [user["id"] for user in users] == [1, 3]

    client.post("/user", json=user_data)
    assert client.get("/users").json()[-1]["id"] == 4


def test_update_then_read_back(client: TestClient, user_data):
    client.post("/user", json=user_data)

    response = client.put("/user", json={"id": 1, "email": "new@x.com"})
    assert response.status_code == 200

    user = client.get("/user/1").json()
    assert user["email"] == "new@x.com"
    assert user["first_name"] == "MG"
    assert user["last_name"] == "Kim"
