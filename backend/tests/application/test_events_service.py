"""Event service: slugs, category checks, listing filters, cascade delete."""
from datetime import date

import pytest  # type: ignore[import-not-found]

from standsite.application import event_categories, event_images, events
from standsite.errors import NotFoundError, ValidationError
from standsite.models.event import Event, EventImage
from standsite.models.base import utc_now
from standsite.utils.storage import get_storage

LISTING = "/top-trade-shows-in-uae-saudi-arabia-middle-east"


def _published(title, **extra):
    data = {"title": title, "published_at": utc_now().isoformat()}
    data.update(extra)
    return events.create_event(data)


def test_create_derives_slug_from_title(app, revalidated):
    event = events.create_event({"title": "Trade Show 2025"})

    assert event.slug == "trade-show-2025"
    assert event.is_active is True
    assert revalidated == [LISTING, f"{LISTING}/trade-show-2025"]


def test_unknown_keys_dropped_and_empty_dates_cleared(app):
    event = events.create_event({
        "title": "Gitex",
        "start_date": "",
        "category_id": "",
        "not_a_column": "ignored",
    })

    assert event.start_date is None
    assert event.category_id is None
    assert not hasattr(event, "not_a_column")


def test_missing_title_and_bad_dates(app):
    with pytest.raises(ValidationError) as excinfo:
        events.create_event({"title": "  "})
    assert excinfo.value.message == "Title is required"

    with pytest.raises(ValidationError):
        events.create_event({"title": "Gulfood", "start_date": "not a date"})

    with pytest.raises(ValidationError) as excinfo:
        events.create_event({"title": "Gulfood", "start_date": "2025-02-20", "end_date": "2025-02-17"})
    assert excinfo.value.message == "End date cannot be before start date"


def test_duplicate_slug_is_rejected(app):
    events.create_event({"title": "Arab Health"})

    with pytest.raises(ValidationError) as excinfo:
        events.create_event({"title": "Arab Health 2", "slug": "arab-health"})
    assert excinfo.value.message == "An event with this URL slug already exists"


def test_update_to_a_taken_slug_is_rejected(app):
    events.create_event({"title": "Arab Health"})
    other = events.create_event({"title": "Cityscape"})

    with pytest.raises(ValidationError) as excinfo:
        events.update_event(other.id, {"slug": "arab-health"})
    assert excinfo.value.message == "An event with this URL slug already exists"

    # Re-sending the event's own slug is fine
    assert events.update_event(other.id, {"slug": "cityscape"}).slug == "cityscape"


def test_set_display_order_truncates_numeric_strings(app):
    event = events.create_event({"title": "Gitex"})

    events.patch_event(event.id, "set_display_order", "3.7")
    assert event.display_order == 3

    events.patch_event(event.id, "set_display_order", 5.2)
    assert event.display_order == 5

    events.patch_event(event.id, "set_display_order", "soon")
    assert event.display_order == 0


def test_nonexistent_category_is_a_validation_error(app):
    event = events.create_event({"title": "Big 5"})

    with pytest.raises(ValidationError) as excinfo:
        events.update_event(event.id, {"category_id": "00000000-0000-0000-0000-000000000000"})
    assert excinfo.value.message == "Invalid category selected."

    with pytest.raises(ValidationError):
        events.create_event({"title": "Big 6", "category_id": "missing"})


def test_update_revalidates_old_and_new_slug(app, revalidated):
    event = events.create_event({"title": "Intersec"})
    revalidated.clear()

    events.update_event(event.id, {"slug": "intersec-2026"})

    assert revalidated == [LISTING, f"{LISTING}/intersec", f"{LISTING}/intersec-2026"]


def test_public_listing_needs_active_and_published(app):
    _published("Live")
    events.create_event({"title": "Draft"})
    _published("Hidden", is_active=False)

    public, public_total = events.list_events()
    everything, total = events.list_events(is_active=None)

    assert [e.title for e in public] == ["Live"]
    assert public_total == 1
    assert total == 3
    assert len(everything) == 3


def test_listing_filters_and_total(app):
    category = event_categories.create_category({"name": "Technology"})
    for n in range(3):
        _published(f"Tech {n}", category_id=category.id)
    _published("Food Expo")

    page, total = events.list_events(category_slug="technology", limit=2, sort_by="title", sort_order="asc")

    assert total == 3
    assert [e.title for e in page] == ["Tech 0", "Tech 1"]

    found, found_total = events.list_events(search="food")
    assert found_total == 1
    assert found[0].title == "Food Expo"

    with pytest.raises(ValidationError):
        events.list_events(sort_by="password")


def test_public_lookup_by_slug_hides_drafts(app):
    draft = events.create_event({"title": "Secret Show"})

    with pytest.raises(NotFoundError):
        events.get_event("secret-show")

    assert events.get_event("secret-show", admin=True).id == draft.id
    assert events.get_event(draft.id, admin=True).id == draft.id


def test_patch_and_bulk_actions(app):
    a = events.create_event({"title": "A"})
    b = events.create_event({"title": "B"})

    events.patch_event(a.id, "publish")
    assert a.published_at is not None and a.is_active

    events.patch_event(a.id, "toggle_featured")
    assert a.is_featured is True

    with pytest.raises(ValidationError):
        events.patch_event(a.id, "explode")

    events.bulk_update_events("update", [a.id, b.id], {"venue": "DWTC", "slug": "same"})
    assert (a.venue, b.venue) == ("DWTC", "DWTC")
    assert (a.slug, b.slug) == ("a", "b")

    with pytest.raises(ValidationError):
        events.bulk_update_events("activate", [])


def test_related_events_fall_back_to_active(app):
    main = events.create_event({"title": "Main"})
    other = events.create_event({"title": "Other"})

    assert [e.id for e in events.related_events(main)] == [other.id]

    published = _published("Published")
    assert [e.id for e in events.related_events(main)] == [published.id]


def test_delete_cascades_images_and_removes_files(app, make_upload):
    event = events.create_event({"title": "Cityscape"})
    image = event_images.add_event_image(event.id, {"image_type": "gallery"}, file=make_upload())
    path = image.storage_path

    assert get_storage().exists("event-images", path)

    events.delete_event(event.id)

    assert Event.query.count() == 0
    assert EventImage.query.count() == 0
    assert not get_storage().exists("event-images", path)


def test_statistics(app):
    category = event_categories.create_category({"name": "Energy"})
    _published("Future", category_id=category.id, start_date="2999-01-01", end_date="2999-01-03")
    _published("Past", start_date="2000-01-01", end_date="2000-01-02")
    events.create_event({"title": "Draft", "is_featured": True})

    stats = events.event_statistics(today=date(2026, 1, 1))

    assert stats["total_events"] == 3
    assert stats["published_events"] == 2
    assert stats["draft_events"] == 1
    assert stats["featured_events"] == 1
    assert stats["upcoming_events"] == 1
    assert stats["past_events"] == 1
    assert stats["total_categories"] == 1
    assert stats["events_by_category"] == [{"category": "Energy", "count": 1}]


def test_category_with_events_cannot_be_deleted(app):
    category = event_categories.create_category({"name": "Healthcare"})
    events.create_event({"title": "Arab Health", "category_id": category.id})

    with pytest.raises(ValidationError) as excinfo:
        event_categories.delete_category(category.id)
    assert excinfo.value.message == "Cannot delete category. It has 1 event(s) associated with it."


def test_category_reorder(app):
    first = event_categories.create_category({"name": "One"})
    second = event_categories.create_category({"name": "Two", "display_order": 1})

    event_categories.bulk_update_categories("reorder", None, [
        {"id": first.id, "display_order": 5},
        {"id": second.id, "display_order": 0},
    ])

    assert [c.name for c in event_categories.list_categories()] == ["Two", "One"]
