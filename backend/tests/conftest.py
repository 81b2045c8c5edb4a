"""Shared fixtures: app on in-memory SQLite, local storage in tmp_path,
recorded revalidation calls, and an admin token."""
from __future__ import annotations

import io
from typing import List

import pytest  # type: ignore[import-not-found]
from flask_jwt_extended import create_access_token

from standsite import create_app
from standsite.extensions import db
from standsite.models.user import User
from standsite.utils import revalidate


class _FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code


@pytest.fixture
def app(tmp_path):
    app = create_app("testing", {"UPLOAD_FOLDER": str(tmp_path / "uploads")})
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture(autouse=True)
def revalidated(monkeypatch) -> List[str]:
    """Paths sent to the public site's revalidation hook, in call order."""
    calls: List[str] = []

    def fake_post(url, json=None, headers=None, timeout=None):
        calls.append(json["path"])
        return _FakeResponse(200)

    monkeypatch.setattr(revalidate.requests, "post", fake_post)
    return calls


@pytest.fixture
def admin_user(app):
    user = User()
    user.email = "admin@example.com"
    user.role = "admin"
    user.set_password("s3cret-pass")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def auth_headers(app, admin_user):
    token = create_access_token(identity=admin_user.id, additional_claims={"role": admin_user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_upload():
    """Build a werkzeug FileStorage of ``size`` bytes."""
    from werkzeug.datastructures import FileStorage

    def _make(filename="photo.jpg", content_type="image/jpeg", size=1024):
        return FileStorage(
            stream=io.BytesIO(b"\0" * size),
            filename=filename,
            content_type=content_type,
        )

    return _make
