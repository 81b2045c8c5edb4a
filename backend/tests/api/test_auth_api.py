"""Login, token checks and the error envelope."""


def test_login_returns_tokens_and_user(client, admin_user):
    response = client.post("/api/v1/auth/login", json={
        "email": "Admin@Example.com",
        "password": "s3cret-pass",
    })

    assert response.status_code == 200
    body = response.get_json()
    assert body["success"] is True
    assert body["access_token"]
    assert body["refresh_token"]
    assert body["user"]["email"] == "admin@example.com"


def test_login_rejects_bad_password(client, admin_user):
    response = client.post("/api/v1/auth/login", json={
        "email": "admin@example.com",
        "password": "wrong",
    })

    assert response.status_code == 401
    assert response.get_json() == {"success": False, "error": "Invalid credentials"}


def test_login_requires_both_fields(client):
    response = client.post("/api/v1/auth/login", json={"email": "admin@example.com"})
    assert response.status_code == 400


def test_admin_endpoint_without_token(client):
    response = client.put("/api/v1/sections/home.hero", json={"title": "Hacked"})

    assert response.status_code == 401
    assert response.get_json() == {"success": False, "error": "Authentication required"}


def test_garbage_token_is_401(client):
    response = client.get(
        "/api/v1/admin/dashboard",
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 401
    assert response.get_json()["success"] is False


def test_disabled_user_is_forbidden(client, admin_user, auth_headers):
    from standsite.extensions import db

    admin_user.is_active = False
    db.session.commit()

    response = client.get("/api/v1/admin/dashboard", headers=auth_headers)
    assert response.status_code == 403


def test_demoted_user_loses_admin_view(client, admin_user, auth_headers):
    from standsite.extensions import db

    client.post("/api/v1/events", json={"title": "Draft Show"}, headers=auth_headers)
    admin_user.role = "viewer"
    db.session.commit()

    response = client.get("/api/v1/events/draft-show?admin=true", headers=auth_headers)
    assert response.status_code == 403


def test_me(client, auth_headers):
    response = client.get("/api/v1/auth/me", headers=auth_headers)

    assert response.status_code == 200
    assert response.get_json()["user"]["role"] == "admin"
    assert response.get_json()["user"]["is_admin"] is True


def test_auth_can_be_switched_off(tmp_path):
    from standsite import create_app
    from standsite.extensions import db

    app = create_app("testing", {
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        "ADMIN_AUTH_REQUIRED": False,
    })
    with app.app_context():
        db.create_all()
        response = app.test_client().get("/api/v1/admin/dashboard")
        db.session.remove()
        db.drop_all()

    assert response.status_code == 200


def test_unknown_route_uses_envelope(client):
    response = client.get("/api/v1/nope")

    assert response.status_code == 404
    assert response.get_json()["success"] is False


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.get_json()["database"] == "ok"
