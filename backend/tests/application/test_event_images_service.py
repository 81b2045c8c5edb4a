"""Event images: single-slot replacement, grouping, deletion."""
import pytest  # type: ignore[import-not-found]

from standsite.application import event_images, events
from standsite.errors import ValidationError
from standsite.utils.storage import get_storage


@pytest.fixture
def event(app):
    return events.create_event({"title": "Gitex Global"})


def test_hero_replaces_previous_hero_and_its_file(event, make_upload):
    first = event_images.add_event_image(event.id, {"image_type": "hero"}, file=make_upload("a.jpg"))
    first_path = first.storage_path
    second = event_images.add_event_image(event.id, {"image_type": "hero"}, file=make_upload("b.jpg"))

    _, heroes = event_images.list_event_images(event.id, image_type="hero")

    assert [img.id for img in heroes] == [second.id]
    assert second.storage_path.startswith(f"{event.id}/hero/")
    assert not get_storage().exists("event-images", first_path)


def test_gallery_images_accumulate(event, make_upload):
    for n in range(3):
        event_images.add_event_image(
            event.id, {"image_type": "gallery", "display_order": str(n)}, file=make_upload()
        )

    _, gallery = event_images.list_event_images(event.id, image_type="gallery")
    _, featured = event_images.list_event_images(event.id, image_type="featured")

    assert [img.display_order for img in gallery] == [0, 1, 2]
    assert featured == []


def test_record_for_existing_upload(event):
    image = event_images.add_event_image(event.id, {
        "image_type": "logo",
        "filename": "logo.png",
        "file_path": "/media/event-images/general/logo.png",
        "mime_type": "image/png",
    })

    assert image.storage_path == "general/logo.png"
    assert image.alt_text == "Event image"


def test_missing_file_reference_and_bad_type(event):
    with pytest.raises(ValidationError) as excinfo:
        event_images.add_event_image(event.id, {"image_type": "gallery"})
    assert excinfo.value.message == "filename and file_path are required"

    with pytest.raises(ValidationError):
        event_images.add_event_image(event.id, {"image_type": "poster", "filename": "x", "file_path": "/x"})


def test_bad_dimensions_do_not_upload(event, make_upload):
    with pytest.raises(ValidationError):
        event_images.add_event_image(event.id, {"width": "wide"}, file=make_upload())

    assert get_storage().list("event-images", f"{event.id}/gallery") == []


def test_oversized_image_is_rejected(event, make_upload):
    big = make_upload("huge.jpg", size=15 * 1024 * 1024)

    with pytest.raises(ValidationError) as excinfo:
        event_images.add_event_image(event.id, {"image_type": "hero"}, file=big)
    assert excinfo.value.message == "Image size must be less than 10MB."


def test_update_and_delete(event, make_upload):
    image = event_images.add_event_image(event.id, {}, file=make_upload())
    path = image.storage_path

    event_images.update_event_images(event.id, [{"id": image.id, "caption": "Hall 4", "is_active": False}])
    assert image.caption == "Hall 4"
    assert image.is_active is False

    deleted = event_images.delete_event_images(event.id, [image.id])

    assert deleted == [{"id": image.id, "image_type": "gallery"}]
    assert not get_storage().exists("event-images", path)


def test_unknown_event_lists_nothing(app):
    assert event_images.list_event_images("no-such-event") == (None, [])
