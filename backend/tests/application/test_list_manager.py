"""List manager: slugs, ordering, hard delete with media cleanup."""
import pytest  # type: ignore[import-not-found]

from standsite.application import collections
from standsite.errors import NotFoundError, ValidationError
from standsite.utils.storage import get_storage


def test_create_derives_slug_and_appends_order(app, revalidated):
    first = collections.create_item("blog-tags", {"name": "Trade Shows"})
    second = collections.create_item("blog-tags", {"name": "Pavilions"})

    assert first.slug == "trade-shows"
    assert first.data["color"] == "#6b7280"
    assert (first.display_order, second.display_order) == (1, 2)
    assert revalidated == ["/blog", "/blog"]


def test_explicit_slug_is_normalized_not_rederived(app):
    item = collections.create_item("blog-tags", {"name": "Trade Shows", "slug": "Events & Expos"})
    assert item.slug == "events-expos"


def test_duplicate_slug_is_rejected(app):
    collections.create_item("blog-tags", {"name": "Stands"})

    with pytest.raises(ValidationError) as excinfo:
        collections.create_item("blog-tags", {"name": "stands!"})
    assert excinfo.value.message == "A tag with this slug already exists"


def test_same_slug_in_other_collection_is_fine(app):
    collections.create_item("blog-tags", {"name": "Dubai"})
    other = collections.create_item("blog-categories", {"name": "Dubai"})
    assert other.slug == "dubai"


def test_list_is_ordered_and_hides_inactive(app):
    collections.create_item("faq-items", {"question": "B?", "answer": "b", "display_order": 5})
    collections.create_item("faq-items", {"question": "A?", "answer": "a", "display_order": 1})
    collections.create_item("faq-items", {"question": "C?", "answer": "c", "is_active": False})

    public = [i.data["question"] for i in collections.list_items("faq-items")]
    everything = collections.list_items("faq-items", include_inactive=True)

    assert public == ["A?", "B?"]
    assert len(everything) == 3


def test_update_keeps_slug_unless_given(app):
    item = collections.create_item("blog-categories", {"name": "Events"})

    collections.update_item("blog-categories", item.id, {"name": "Event News"})
    assert item.slug == "events"
    assert item.data["name"] == "Event News"

    collections.update_item("blog-categories", item.id, {"slug": "event-news"})
    assert item.slug == "event-news"


def test_delete_removes_item_and_storage_object(app):
    storage = get_storage()
    storage.upload("portfolio", "general/stand.jpg", b"img", "image/jpeg")
    url = storage.public_url("portfolio", "general/stand.jpg")

    item = collections.create_item("portfolio-items", {"title": "Stand", "image_url": url})
    collections.delete_item("portfolio-items", item.id)

    assert collections.list_items("portfolio-items", include_inactive=True) == []
    assert not storage.exists("portfolio", "general/stand.jpg")


def test_delete_ignores_media_outside_the_bucket(app):
    item = collections.create_item(
        "portfolio-items", {"title": "External", "image_url": "https://images.example.com/stand.jpg"}
    )
    collections.delete_item("portfolio-items", item.id)
    assert collections.list_items("portfolio-items") == []


def test_reorder(app):
    a = collections.create_item("hero-typing-texts", {"text": "Design"})
    b = collections.create_item("hero-typing-texts", {"text": "Build"})

    updated = collections.reorder_items("hero-typing-texts", [
        {"id": a.id, "display_order": 2},
        {"id": b.id, "display_order": 1},
        {"id": "not-in-this-list", "display_order": 3},
    ])

    assert updated == 2
    assert [i.data["text"] for i in collections.list_items("hero-typing-texts")] == ["Build", "Design"]


def test_unknown_collection_and_item(app):
    with pytest.raises(NotFoundError):
        collections.list_items("widgets")

    tag = collections.create_item("blog-tags", {"name": "x"})
    with pytest.raises(NotFoundError):
        collections.get_item("blog-categories", tag.id)


def test_required_fields(app):
    with pytest.raises(ValidationError) as excinfo:
        collections.create_item("group-companies", {"region": "UAE"})
    assert excinfo.value.message == "Address is required"
