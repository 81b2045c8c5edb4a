"""Section endpoints: empty defaults, saves, seeding, admin field metadata."""


def test_empty_section_serves_defaults(client):
    response = client.get("/api/v1/sections/events.hero")

    assert response.status_code == 200
    body = response.get_json()
    assert body["state"] == "empty"
    assert body["id"] is None
    assert body["content"]["text_color"] == "#ffffff"
    assert "fields" not in body


def test_unknown_section_is_404(client):
    response = client.get("/api/v1/sections/nope.hero")
    assert response.status_code == 404
    assert response.get_json()["error"] == "Unknown section: nope.hero"


def test_save_then_load_round_trip(client, auth_headers, revalidated):
    payload = {"title": "  Stands  built\nin Dubai ", "overlay_opacity": 0.45}

    saved = client.put("/api/v1/sections/home.hero", json=payload, headers=auth_headers)
    loaded = client.get("/api/v1/sections/home.hero").get_json()

    assert saved.status_code == 200
    assert saved.get_json()["message"] == "Section saved successfully"
    assert loaded["state"] == "ready"
    assert loaded["content"]["title"] == payload["title"]
    assert loaded["content"]["overlay_opacity"] == 0.45
    assert revalidated == ["/"]


def test_save_rejects_missing_required(client, auth_headers):
    response = client.put("/api/v1/sections/privacy-policy", json={"content": ""}, headers=auth_headers)

    assert response.status_code == 400
    assert response.get_json() == {"success": False, "error": "Content is required"}


def test_seed_creates_once(client, auth_headers):
    first = client.post("/api/v1/sections/contact.form-settings/seed", headers=auth_headers)
    second = client.post("/api/v1/sections/contact.form-settings/seed", headers=auth_headers)

    assert first.status_code == 201
    assert second.status_code == 200
    assert second.get_json()["created"] is False
    assert first.get_json()["section"]["id"] == second.get_json()["section"]["id"]


def test_admin_view_lists_fields(client, auth_headers):
    body = client.get("/api/v1/sections/home.hero?admin=true", headers=auth_headers).get_json()

    by_name = {f["name"]: f for f in body["fields"]}
    assert by_name["title"]["required"] is True
    assert by_name["background_type"]["choices"] == ["image", "video"]


def test_admin_flag_without_token_is_public_view(client):
    body = client.get("/api/v1/sections/home.hero?admin=true").get_json()
    assert "fields" not in body


def test_history_and_activate(client, auth_headers):
    client.put("/api/v1/sections/kiosk.hero", json={"title": "One"}, headers=auth_headers)
    history = client.get("/api/v1/sections/kiosk.hero/history", headers=auth_headers).get_json()

    [row] = history["rows"]
    response = client.post(
        f"/api/v1/sections/kiosk.hero/rows/{row['id']}/activate",
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.get_json()["section"]["is_active"] is True


def test_concurrent_activation_returns_409_envelope(client, auth_headers, monkeypatch):
    from standsite.application import sections
    from standsite.extensions import db
    from standsite.models.section import PageSection

    client.put("/api/v1/sections/about.hero", json={"title": "Current"}, headers=auth_headers)
    draft = PageSection()
    draft.section_key = "about.hero"
    draft.content = {"title": "Draft"}
    db.session.add(draft)
    db.session.commit()

    original = sections._deactivate_others

    def deactivate_then_compete(section_key, keep_id):
        original(section_key, keep_id)
        competing = PageSection.__table__.insert().values(
            id="competing-row", section_key=section_key, is_active=True, content={},
        )
        db.session.execute(competing)

    monkeypatch.setattr(sections, "_deactivate_others", deactivate_then_compete)

    response = client.put(
        "/api/v1/sections/about.hero",
        json={"id": draft.id, "title": "Mine"},
        headers=auth_headers,
    )

    assert response.status_code == 409
    assert response.get_json() == {
        "success": False,
        "error": "This section was changed by another save at the same time, please retry",
    }
    loaded = client.get("/api/v1/sections/about.hero").get_json()
    assert loaded["content"]["title"] == "Current"
