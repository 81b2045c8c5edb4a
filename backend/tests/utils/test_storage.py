import pytest  # type: ignore[import-not-found]

from standsite.errors import StorageError
from standsite.utils.storage import LocalStorage, storage_path_from_url


def test_local_storage_round_trip(tmp_path):
    storage = LocalStorage(str(tmp_path), "/media")

    storage.upload("portfolio", "general/a.jpg", b"abc", "image/jpeg")

    assert storage.exists("portfolio", "general/a.jpg")
    assert storage.public_url("portfolio", "general/a.jpg") == "/media/portfolio/general/a.jpg"
    [entry] = storage.list("portfolio", "general")
    assert entry["name"] == "a.jpg"
    assert entry["size"] == 3
    assert entry["mime_type"] == "image/jpeg"

    storage.remove("portfolio", ["general/a.jpg", "general/missing.jpg"])
    assert not storage.exists("portfolio", "general/a.jpg")


def test_local_storage_refuses_to_overwrite(tmp_path):
    storage = LocalStorage(str(tmp_path))
    storage.upload("docs", "a.pdf", b"1", "application/pdf")

    with pytest.raises(StorageError) as excinfo:
        storage.upload("docs", "a.pdf", b"2", "application/pdf")
    assert excinfo.value.status_code == 409


def test_local_storage_rejects_path_escape(tmp_path):
    storage = LocalStorage(str(tmp_path))
    with pytest.raises(StorageError):
        storage.upload("docs", "../../etc/passwd", b"x", "text/plain")


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://x.supabase.co/storage/v1/object/public/event-images/abc/gallery/1.jpg", "abc/gallery/1.jpg"),
        ("/media/event-images/general/2%20b.jpg", "general/2 b.jpg"),
        ("general/3.jpg", "general/3.jpg"),
        ("https://example.com/other/4.jpg", None),
        ("/images/static.jpg", None),
        ("", None),
        (None, None),
    ],
)
def test_storage_path_from_url(url, expected):
    assert storage_path_from_url(url, "event-images") == expected
