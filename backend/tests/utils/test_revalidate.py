import requests

from standsite.utils import revalidate
from standsite.utils.revalidate import EVENTS_LISTING_PATH, event_path, revalidate_paths


def test_posts_each_path_once_with_secret(app, monkeypatch):
    sent = []

    class Ok:
        status_code = 200

    def fake_post(url, json=None, headers=None, timeout=None):
        sent.append((url, json, headers["x-revalidate-secret"]))
        return Ok()

    monkeypatch.setattr(revalidate.requests, "post", fake_post)

    done = revalidate_paths("/", "/about-us", "/")

    assert done == ["/", "/about-us"]
    assert sent == [
        ("http://site.test/api/revalidate", {"path": "/"}, "testing"),
        ("http://site.test/api/revalidate", {"path": "/about-us"}, "testing"),
    ]


def test_failures_are_swallowed(app, monkeypatch):
    def boom(*args, **kwargs):
        raise requests.ConnectionError("site down")

    monkeypatch.setattr(revalidate.requests, "post", boom)

    assert revalidate_paths("/contact-us") == []


def test_non_2xx_is_not_reported_as_done(app, monkeypatch):
    class Failed:
        status_code = 500

    monkeypatch.setattr(revalidate.requests, "post", lambda *a, **k: Failed())

    assert revalidate_paths("/") == []


def test_skipped_without_url(app, monkeypatch):
    app.config["REVALIDATE_URL"] = ""

    def unexpected(*args, **kwargs):
        raise AssertionError("no request expected")

    monkeypatch.setattr(revalidate.requests, "post", unexpected)
    assert revalidate_paths("/") == []


def test_event_path():
    assert event_path("gitex-2025") == f"{EVENTS_LISTING_PATH}/gitex-2025"
