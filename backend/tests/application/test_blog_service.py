"""Blog posts: slugs, publishing, categories and tags from the list manager."""
from datetime import timedelta

import pytest  # type: ignore[import-not-found]

from standsite.application import blog, collections
from standsite.errors import NotFoundError, ValidationError
from standsite.models.base import utc_now


@pytest.fixture
def taxonomy(app):
    design = collections.create_item("blog-categories", {"name": "Design"})
    news = collections.create_item("blog-categories", {"name": "News"})
    tag = collections.create_item("blog-tags", {"name": "Stands"})
    return {"design": design, "news": news, "tag": tag}


def _published(title, **extra):
    data = {"title": title, "status": "published"}
    data.update(extra)
    return blog.create_post(data)


def test_create_derives_unique_slug(app, revalidated):
    first = blog.create_post({"title": "Stand Design Tips"})
    second = blog.create_post({"title": "Stand Design Tips"})

    assert (first.slug, second.slug) == ("stand-design-tips", "stand-design-tips-2")
    assert first.status == "draft" and first.published_at is None
    assert revalidated[:2] == ["/blog", "/blog/stand-design-tips"]


def test_explicit_duplicate_slug_is_rejected(app):
    blog.create_post({"title": "One", "slug": "taken"})

    with pytest.raises(ValidationError) as excinfo:
        blog.create_post({"title": "Two", "slug": "Taken"})
    assert excinfo.value.message == "A post with this URL slug already exists"

    other = blog.create_post({"title": "Three"})
    with pytest.raises(ValidationError):
        blog.update_post(other.id, {"slug": "taken"})


def test_category_and_tags_must_come_from_their_collections(app, taxonomy):
    post = blog.create_post({
        "title": "Pavilions",
        "category_id": taxonomy["design"].id,
        "tag_ids": [taxonomy["tag"].id, taxonomy["tag"].id],
    })
    assert post.category.slug == "design"
    assert [t.slug for t in post.tags] == ["stands"]

    with pytest.raises(ValidationError) as excinfo:
        blog.create_post({"title": "Bad", "category_id": taxonomy["tag"].id})
    assert excinfo.value.message == "Invalid category selected."

    with pytest.raises(ValidationError) as excinfo:
        blog.create_post({"title": "Bad", "tag_ids": [taxonomy["design"].id]})
    assert excinfo.value.message == "Invalid tag selected."


def test_publish_stamps_date_once(app):
    post = blog.create_post({"title": "Draft"})

    blog.update_post(post.slug, {"status": "published"})
    first_date = post.published_at
    assert first_date is not None

    blog.update_post(post.slug, {"excerpt": "Edited"})
    assert post.published_at == first_date


def test_public_listing_and_lookup_hide_drafts(app, taxonomy):
    _published("Live", category_id=taxonomy["design"].id, tag_ids=[taxonomy["tag"].id])
    _published("Other news", category_id=taxonomy["news"].id, is_featured=True)
    blog.create_post({"title": "Draft"})

    posts, total = blog.list_posts()
    assert total == 2
    assert {p.title for p in posts} == {"Live", "Other news"}

    assert [p.title for p in blog.list_posts(category_slug="design")[0]] == ["Live"]
    assert [p.title for p in blog.list_posts(tag_slug="stands")[0]] == ["Live"]
    assert [p.title for p in blog.list_posts(is_featured=True)[0]] == ["Other news"]
    assert blog.list_posts(status=None)[1] == 3
    assert blog.list_posts(status="draft")[1] == 1

    with pytest.raises(NotFoundError):
        blog.get_post("draft")
    assert blog.get_post("draft", admin=True).title == "Draft"


def test_view_count_increments(app):
    post = _published("Counted")

    blog.record_view(post)
    blog.record_view(post)

    assert post.view_count == 2


def test_related_prefers_same_category(app, taxonomy):
    main = _published("Main", category_id=taxonomy["design"].id)
    same = _published("Same", category_id=taxonomy["design"].id)
    other = _published("Other", category_id=taxonomy["news"].id)
    blog.create_post({"title": "Draft", "category_id": taxonomy["design"].id})

    related = blog.related_posts(main, limit=3)

    assert [p.id for p in related] == [same.id, other.id]


def test_deleting_a_category_uncategorises_posts(app, taxonomy):
    post = _published("Orphan", category_id=taxonomy["design"].id)
    post_id = post.id

    collections.delete_item("blog-categories", taxonomy["design"].id)

    assert blog.get_post(post_id, admin=True).category_id is None


def test_scheduled_drafts_publish_when_due(app):
    due = blog.create_post({"title": "Due", "scheduled_publish_at": (utc_now() - timedelta(minutes=5)).isoformat()})
    blog.create_post({"title": "Later", "scheduled_publish_at": (utc_now() + timedelta(days=2)).isoformat()})

    published = blog.publish_scheduled_posts()

    assert [p.id for p in published] == [due.id]
    assert due.status == "published"
    assert blog.list_posts()[1] == 1
