"""List manager endpoints."""
import io


def test_public_list_and_admin_create(client, auth_headers):
    created = client.post(
        "/api/v1/collections/faq-items",
        json={"question": "How long does a build take?", "answer": "Two weeks."},
        headers=auth_headers,
    )
    listed = client.get("/api/v1/collections/faq-items").get_json()

    assert created.status_code == 201
    assert listed["total"] == 1
    assert listed["items"][0]["question"] == "How long does a build take?"


def test_create_requires_token(client):
    response = client.post("/api/v1/collections/faq-items", json={"question": "q", "answer": "a"})
    assert response.status_code == 401


def test_duplicate_tag_slug(client, auth_headers):
    client.post("/api/v1/collections/blog-tags", json={"name": "Design"}, headers=auth_headers)
    response = client.post("/api/v1/collections/blog-tags", json={"name": "design"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.get_json()["error"] == "A tag with this slug already exists"


def test_delete_item_removes_uploaded_image(client, auth_headers):
    upload = client.post(
        "/api/v1/images",
        data={"file": (io.BytesIO(b"jpeg"), "stand.jpg", "image/jpeg"), "bucket": "portfolio"},
        content_type="multipart/form-data",
        headers=auth_headers,
    ).get_json()["image"]

    item = client.post(
        "/api/v1/collections/portfolio-items",
        json={"title": "Gitex stand", "image_url": upload["url"]},
        headers=auth_headers,
    ).get_json()["item"]

    assert client.get(upload["url"]).status_code == 200

    response = client.delete(f"/api/v1/collections/portfolio-items/{item['id']}", headers=auth_headers)

    assert response.status_code == 200
    assert client.get(upload["url"]).status_code == 404


def test_reorder(client, auth_headers):
    ids = [
        client.post("/api/v1/collections/hero-typing-texts", json={"text": t}, headers=auth_headers)
        .get_json()["item"]["id"]
        for t in ("Design", "Build", "Deliver")
    ]

    response = client.post(
        "/api/v1/collections/hero-typing-texts/reorder",
        json={"items": [{"id": i, "display_order": 3 - n} for n, i in enumerate(ids)]},
        headers=auth_headers,
    )
    texts = [i["text"] for i in client.get("/api/v1/collections/hero-typing-texts").get_json()["items"]]

    assert response.get_json()["updated_count"] == 3
    assert texts == ["Deliver", "Build", "Design"]


def test_collection_index_counts_active_items(client, auth_headers):
    client.post("/api/v1/collections/blog-tags", json={"name": "Design"}, headers=auth_headers)
    client.post("/api/v1/collections/blog-tags", json={"name": "Hidden", "is_active": False}, headers=auth_headers)

    body = client.get("/api/v1/collections").get_json()
    by_key = {c["key"]: c for c in body["collections"]}

    assert by_key["blog-tags"]["item_count"] == 1
    assert by_key["blog-tags"]["has_slug"] is True
    assert by_key["blog-tags"]["fields"] == ["name", "color"]
    assert by_key["faq-items"]["has_slug"] is False
    assert by_key["faq-items"]["item_count"] == 0
