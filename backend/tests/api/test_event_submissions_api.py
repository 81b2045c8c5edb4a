"""Event enquiry form and its admin inbox over HTTP."""
import pytest  # type: ignore[import-not-found]


@pytest.fixture
def event(client, auth_headers):
    return client.post("/api/v1/events", json={"title": "Arab Health"}, headers=auth_headers).get_json()["event"]


def _submit(client, **data):
    payload = {"name": "Karim", "email": "karim@example.com", "message": "We exhibit in hall 4."}
    payload.update(data)
    return client.post("/api/v1/events/submissions", json=payload, headers={"Referer": "https://site.test/events"})


def test_public_submit(client, event):
    response = _submit(client, event_id=event["id"])

    assert response.status_code == 201
    body = response.get_json()
    assert body["success"] is True
    assert body["message"] == "Form submitted successfully"
    assert body["submission_id"]


def test_submit_validation_envelope(client):
    response = _submit(client, email="karim")

    assert response.status_code == 400
    assert response.get_json() == {"success": False, "error": "Invalid email format"}


def test_inbox_is_admin_only_and_embeds_event(client, auth_headers, event):
    _submit(client, event_id=event["id"])

    assert client.get("/api/v1/events/submissions").status_code == 401

    body = client.get(
        f"/api/v1/events/submissions?event_id={event['id']}&status=new",
        headers=auth_headers,
    ).get_json()
    assert body["total"] == 1
    [row] = body["submissions"]
    assert row["event"] == {"id": event["id"], "title": "Arab Health", "slug": "arab-health"}
    assert row["referrer"] == "https://site.test/events"


def test_detail_patch_and_delete(client, auth_headers, event):
    submission_id = _submit(client, event_id=event["id"]).get_json()["submission_id"]
    url = f"/api/v1/events/submissions/{submission_id}"

    detail = client.get(url, headers=auth_headers).get_json()["submission"]
    assert detail["event"]["venue"] is None
    assert "start_date" in detail["event"]

    patched = client.patch(url, json={"status": "replied", "admin_notes": "Sent deck"}, headers=auth_headers)
    assert patched.get_json()["message"] == "Submission updated successfully"
    assert patched.get_json()["submission"]["status"] == "replied"

    deleted = client.delete(url, headers=auth_headers)
    assert deleted.get_json()["message"] == "Submission deleted successfully"
    assert client.get(url, headers=auth_headers).status_code == 404


def test_bulk_update_and_delete(client, auth_headers):
    ids = [_submit(client, name=name).get_json()["submission_id"] for name in ("A", "B")]

    updated = client.put(
        "/api/v1/events/submissions",
        json={"action": "mark_read", "submission_ids": ids},
        headers=auth_headers,
    ).get_json()
    assert updated["updated_count"] == 2
    assert {s["status"] for s in updated["submissions"]} == {"read"}

    bad = client.put("/api/v1/events/submissions", json={"action": "nope", "submission_ids": ids}, headers=auth_headers)
    assert bad.status_code == 400

    deleted = client.delete("/api/v1/events/submissions", json={"submission_ids": ids}, headers=auth_headers)
    assert deleted.get_json()["deleted_count"] == 2


def test_event_detail_route_still_resolves(client, auth_headers, event):
    client.patch(f"/api/v1/events/{event['id']}", json={"action": "publish"}, headers=auth_headers)
    assert client.get("/api/v1/events/arab-health").status_code == 200
