"""Media library, event image and company profile uploads over HTTP."""
import io

import pytest  # type: ignore[import-not-found]

MB = 1024 * 1024


def _file(name="photo.jpg", content_type="image/jpeg", size=1024):
    return (io.BytesIO(b"\0" * size), name, content_type)


def _upload(client, headers, **form):
    return client.post("/api/v1/images", data=form, content_type="multipart/form-data", headers=headers)


@pytest.fixture
def event(client, auth_headers):
    return client.post("/api/v1/events", json={"title": "Gitex"}, headers=auth_headers).get_json()["event"]


def test_oversized_image_is_rejected(client, auth_headers):
    response = _upload(client, auth_headers, file=_file(size=15 * MB), bucket="site-media")

    assert response.status_code == 400
    assert response.get_json() == {"success": False, "error": "Image size must be less than 10MB."}
    listed = client.get("/api/v1/images?bucket=site-media", headers=auth_headers).get_json()
    assert listed["images"] == []


def test_wrong_type_is_rejected(client, auth_headers):
    response = _upload(client, auth_headers, file=_file("notes.txt", "text/plain"), bucket="site-media")

    assert response.status_code == 400
    assert response.get_json()["error"] == "Invalid file type. Only JPEG, PNG, WebP, and GIF are allowed."


def test_unknown_bucket_is_rejected(client, auth_headers):
    response = _upload(client, auth_headers, file=_file(), bucket="company-profile-documents")
    assert response.status_code == 400


def test_upload_list_and_delete(client, auth_headers):
    image = _upload(client, auth_headers, file=_file("Stand Photo.jpg"), bucket="site-media").get_json()["image"]

    assert image["title"] == "Stand Photo"
    assert image["folder_path"] == "general"
    assert client.get(image["url"]).status_code == 200

    listed = client.get("/api/v1/images?bucket=site-media&folder=general", headers=auth_headers).get_json()
    assert [i["filename"] for i in listed["images"]] == [image["filename"]]

    deleted = client.delete(
        "/api/v1/images",
        json={"filePaths": [image["url"]], "bucket": "site-media"},
        headers=auth_headers,
    ).get_json()

    assert deleted["deleted_files"] == [image["path"]]
    assert client.get(image["url"]).status_code == 404


def test_non_ascii_upload_is_listed(client, auth_headers):
    image = _upload(client, auth_headers, file=_file("фото.jpg"), bucket="site-media").get_json()["image"]

    assert image["filename"].endswith(".jpg")
    assert image["original_filename"] == "фото.jpg"

    listed = client.get("/api/v1/images?bucket=site-media&folder=general", headers=auth_headers).get_json()
    assert [i["filename"] for i in listed["images"]] == [image["filename"]]


def test_delete_refuses_paths_outside_bucket(client, auth_headers):
    response = client.delete(
        "/api/v1/images",
        json={"filePaths": ["https://elsewhere.example.com/x.jpg"], "bucket": "site-media"},
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_event_upload_creates_gallery_record(client, auth_headers, event):
    image = _upload(
        client, auth_headers, file=_file(), bucket="event-images", event_id=event["id"]
    ).get_json()["image"]

    listed = client.get("/api/v1/images?bucket=event-images", headers=auth_headers).get_json()

    assert image["database_id"] is not None
    assert listed["source"] == "database"
    assert listed["images"][0]["event_id"] == event["id"]


def test_event_images_grouped(client, auth_headers, event):
    client.post(
        f"/api/v1/events/{event['id']}/images",
        data={"file": _file(), "image_type": "hero"},
        content_type="multipart/form-data",
        headers=auth_headers,
    )
    client.post(
        f"/api/v1/events/{event['id']}/images",
        json={"image_type": "gallery", "filename": "g.jpg", "file_path": "https://cdn.example.com/g.jpg"},
        headers=auth_headers,
    )

    body = client.get("/api/v1/events/gitex/images").get_json()

    assert body["event_id"] == event["id"]
    assert len(body["images"]["hero"]) == 1
    assert len(body["images"]["gallery"]) == 1
    assert body["images"]["logo"] == []


def test_company_profile_flow(client, auth_headers):
    uploaded = client.post(
        "/api/v1/company-profile",
        data={"file": _file("profile.pdf", "application/pdf"), "title": "Profile 2025", "is_current": "true"},
        content_type="multipart/form-data",
        headers=auth_headers,
    )
    document = uploaded.get_json()["data"]

    current = client.get("/api/v1/company-profile?current=true").get_json()["data"]
    download = client.post(f"/api/v1/company-profile/{document['id']}/download").get_json()

    assert uploaded.status_code == 201
    assert current["id"] == document["id"]
    assert current["downloadUrl"] == download["downloadUrl"]
    assert download["download_count"] == 1


def test_company_profile_listing_is_admin_only(client, auth_headers):
    assert client.get("/api/v1/company-profile").status_code == 403
    assert client.get("/api/v1/company-profile", headers=auth_headers).status_code == 200
    assert client.get("/api/v1/company-profile?current=true").status_code == 404


def test_company_profile_rejects_non_pdf(client, auth_headers):
    response = client.post(
        "/api/v1/company-profile",
        data={"file": _file("profile.docx", "application/msword"), "title": "Profile"},
        content_type="multipart/form-data",
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "Only PDF files are allowed"
