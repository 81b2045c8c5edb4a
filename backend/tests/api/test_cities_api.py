"""City endpoints."""


def test_create_and_public_read(client, auth_headers):
    created = client.post("/api/v1/cities", json={
        "name": "Saudi Arabia",
        "subtitle": "Leading exhibition solutions across the Kingdom",
        "latitude": 24.7,
        "longitude": 46.7,
        "services": [{"name": "Pavilions"}, {"name": "Retired", "is_active": False}],
    }, headers=auth_headers)
    assert created.status_code == 201

    city = client.get("/api/v1/cities/saudi-arabia").get_json()["city"]
    assert city["coordinates"] == {"latitude": 24.7, "longitude": 46.7}
    assert [s["name"] for s in city["services"]] == ["Pavilions"]

    admin = client.get("/api/v1/cities/saudi-arabia?admin=true", headers=auth_headers).get_json()["city"]
    assert len(admin["services"]) == 2


def test_writes_require_token(client):
    assert client.post("/api/v1/cities", json={"name": "Oman"}).status_code == 401


def test_inactive_listing_is_admin_only(client, auth_headers):
    client.post("/api/v1/cities", json={"name": "Turkey", "is_active": False}, headers=auth_headers)

    assert client.get("/api/v1/cities").get_json()["total"] == 0
    assert client.get("/api/v1/cities?is_active=all").status_code == 401
    assert client.get("/api/v1/cities?is_active=all", headers=auth_headers).get_json()["total"] == 1


def test_duplicate_slug_envelope(client, auth_headers):
    client.post("/api/v1/cities", json={"name": "Qatar"}, headers=auth_headers)
    response = client.post("/api/v1/cities", json={"name": "Qatar"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.get_json() == {"success": False, "error": "A city with this slug already exists"}


def test_update_bulk_and_delete(client, auth_headers):
    ids = [
        client.post("/api/v1/cities", json={"name": name}, headers=auth_headers).get_json()["city"]["id"]
        for name in ("Kuwait", "Jordan", "Bahrain")
    ]

    updated = client.put("/api/v1/cities/kuwait", json={"subtitle": "Innovative"}, headers=auth_headers)
    assert updated.get_json()["city"]["subtitle"] == "Innovative"

    bulk = client.put(
        "/api/v1/cities",
        json={"action": "deactivate", "city_ids": ids[:2]},
        headers=auth_headers,
    ).get_json()
    assert bulk == {"success": True, "message": "Successfully deactivated 2 cities", "affected": 2}

    deleted = client.delete(f"/api/v1/cities?ids={ids[0]},{ids[1]}", headers=auth_headers).get_json()
    assert deleted["affected"] == 2

    single = client.delete("/api/v1/cities/bahrain", headers=auth_headers)
    assert single.get_json()["message"] == 'City "Bahrain" deleted successfully'
    assert client.get("/api/v1/cities/bahrain").status_code == 404
