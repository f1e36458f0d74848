from __future__ import annotations


def test_location_crud(client):
    created = client.post("/api/locations", json={"name": "Kitchen"})
    assert created.status_code == 201
    location = created.get_json()["data"]
    assert location == {"id": location["id"], "name": "Kitchen"}

    client.post("/api/locations", json={"name": "Bathroom"})
    names = [loc["name"] for loc in client.get("/api/locations").get_json()["data"]]
    assert names == ["Bathroom", "Kitchen"]

    renamed = client.put(f"/api/locations/{location['id']}", json={"name": "Pantry"})
    assert renamed.status_code == 200
    assert renamed.get_json()["data"]["name"] == "Pantry"

    assert client.delete(f"/api/locations/{location['id']}").status_code == 204
    assert client.delete(f"/api/locations/{location['id']}").status_code == 404


def test_duplicate_location_name_is_conflict(client):
    client.post("/api/locations", json={"name": "Kitchen"})
    response = client.post("/api/locations", json={"name": "Kitchen"})

    assert response.status_code == 409
    assert response.get_json()["message"] == "Location 'Kitchen' already exists"


def test_location_name_required(client):
    assert client.post("/api/locations", json={}).status_code == 400
    assert client.post("/api/locations", json={"name": "  "}).status_code == 400


def test_rename_missing_location(client):
    assert client.put("/api/locations/9999", json={"name": "Attic"}).status_code == 404


def test_deleting_location_unassigns_plants(client):
    location_id = client.post("/api/locations", json={"name": "Porch"}).get_json()["data"]["id"]
    plant_id = client.post("/api/plants", json={"name": "Geranium", "location_id": location_id}).get_json()["data"]["id"]

    client.delete(f"/api/locations/{location_id}")

    plant = client.get(f"/api/plants/{plant_id}").get_json()["data"]
    assert plant["location_id"] is None
    assert plant["location_name"] is None
