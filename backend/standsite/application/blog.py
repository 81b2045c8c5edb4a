# standsite/application/blog.py
"""Blog posts.

Categories and tags are not tables of their own: they are the
``blog-categories`` and ``blog-tags`` collections of the list manager.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from dateutil.parser import ParserError, parse
from sqlalchemy import or_, update

from standsite.errors import NotFoundError, ValidationError
from standsite.extensions import db
from standsite.models.base import utc_now
from standsite.models.blog_post import BLOG_POST_STATUSES, BlogPost
from standsite.models.collection_item import CollectionItem
from standsite.utils.lookup import lookup_column
from standsite.utils.revalidate import BLOG_LISTING_PATH, blog_post_path, revalidate_paths
from standsite.utils.slug import slugify
from standsite.utils.storage import remove_objects_quietly, storage_path_from_url
from standsite.utils.transaction import transactional

BLOG_IMAGES_BUCKET = "blog-images"
CATEGORY_COLLECTION = "blog-categories"
TAG_COLLECTION = "blog-tags"

TEXT_FIELDS = {
    "title", "slug", "excerpt", "content", "meta_description", "meta_keywords",
    "featured_image_url", "featured_image_alt", "hero_image_url", "hero_image_alt",
    "og_title", "og_description", "og_image_url",
}
IMAGE_FIELDS = ("featured_image_url", "hero_image_url", "og_image_url")
ALLOWED_FIELDS = TEXT_FIELDS | {
    "status", "is_featured", "category_id", "tag_ids", "scheduled_publish_at",
}

SORT_COLUMNS = {
    "published_at": BlogPost.published_at,
    "created_at": BlogPost.created_at,
    "updated_at": BlogPost.updated_at,
    "title": BlogPost.title,
    "view_count": BlogPost.view_count,
}

STORE_MESSAGES = {
    "unique:slug": "A post with this URL slug already exists",
    "foreign_key": "Invalid category selected.",
}

RELATED_LIMIT = 3


def _parse_datetime(name, value):
    try:
        return parse(str(value))
    except (ParserError, ValueError, OverflowError):
        raise ValidationError(f"Invalid date for {name}")


def _collection_items(collection: str, ids: List[str]) -> Dict[str, CollectionItem]:
    return {
        item.id: item
        for item in CollectionItem.query.filter(
            CollectionItem.collection == collection,
            CollectionItem.id.in_(ids),
        ).all()
    }


def _category(category_id) -> Optional[CollectionItem]:
    if category_id in (None, ""):
        return None
    if not isinstance(category_id, str):
        raise ValidationError("Invalid category selected.")
    item = _collection_items(CATEGORY_COLLECTION, [category_id]).get(category_id)
    if item is None:
        raise ValidationError("Invalid category selected.")
    return item


def _tags(tag_ids) -> List[CollectionItem]:
    if tag_ids is None:
        return []
    if not isinstance(tag_ids, list) or not all(isinstance(t, str) for t in tag_ids):
        raise ValidationError("tag_ids must be a list of tag ids")

    wanted = list(dict.fromkeys(tag_ids))
    found = _collection_items(TAG_COLLECTION, wanted)
    if len(found) != len(wanted):
        raise ValidationError("Invalid tag selected.")
    return [found[tag_id] for tag_id in wanted]


def clean_post_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Turn a create/update payload into column values.

    Unknown keys are dropped. ``category_id`` and ``tag_ids`` are resolved
    to collection items and come back as ``category`` and ``tags``.
    """
    if not isinstance(data, dict):
        raise ValidationError("Invalid request body")

    cleaned: Dict[str, Any] = {}
    for name, value in data.items():
        if name not in ALLOWED_FIELDS:
            continue

        if name in TEXT_FIELDS:
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"{name} must be a string")
            cleaned[name] = value
        elif name == "status":
            if value not in BLOG_POST_STATUSES:
                raise ValidationError(f"Invalid status: {value}")
            cleaned[name] = value
        elif name == "is_featured":
            if not isinstance(value, bool):
                raise ValidationError("is_featured must be true or false")
            cleaned[name] = value
        elif name == "scheduled_publish_at":
            cleaned[name] = _parse_datetime(name, value) if value else None
        elif name == "category_id":
            cleaned["category"] = _category(value)
        elif name == "tag_ids":
            cleaned["tags"] = _tags(value)

    return cleaned


def _slug_taken(slug: str, exclude_id: Optional[str] = None) -> bool:
    query = BlogPost.query.filter(BlogPost.slug == slug)
    if exclude_id:
        query = query.filter(BlogPost.id != exclude_id)
    return query.first() is not None


def unique_slug(title: str) -> str:
    """Slug for ``title``, suffixed -2, -3, ... until it is free."""
    base = slugify(title)
    if not base:
        raise ValidationError("Slug cannot be empty")

    slug, n = base, 1
    while _slug_taken(slug):
        n += 1
        slug = f"{base}-{n}"
    return slug


def _revalidate(*slugs: Optional[str]) -> None:
    revalidate_paths(BLOG_LISTING_PATH, *(blog_post_path(s) for s in slugs if s))


def _published_filter(query, now=None):
    now = now or utc_now()
    return query.filter(BlogPost.status == "published", BlogPost.published_at <= now)


def list_posts(
    *,
    page: int = 1,
    limit: int = 10,
    status: Optional[str] = "published",
    category_slug: Optional[str] = None,
    tag_slug: Optional[str] = None,
    is_featured: Optional[bool] = None,
    search: Optional[str] = None,
    sort_by: str = "published_at",
    sort_order: str = "desc",
    exclude_id: Optional[str] = None,
) -> Tuple[List[BlogPost], int]:
    """
    ``status="published"`` (the public default) also hides posts whose
    publish date is still in the future. ``status=None`` lists every post.
    """
    if sort_by not in SORT_COLUMNS:
        raise ValidationError(f"Invalid sort_by: {sort_by}")
    if sort_order not in ("asc", "desc"):
        raise ValidationError("sort_order must be asc or desc")

    query = BlogPost.query

    if status == "published":
        query = _published_filter(query)
    elif status is not None:
        if status not in BLOG_POST_STATUSES:
            raise ValidationError(f"Invalid status: {status}")
        query = query.filter(BlogPost.status == status)

    if category_slug:
        query = query.filter(BlogPost.category.has(slug=category_slug, collection=CATEGORY_COLLECTION))

    if tag_slug:
        query = query.filter(BlogPost.tags.any(slug=tag_slug, collection=TAG_COLLECTION))

    if is_featured is not None:
        query = query.filter(BlogPost.is_featured.is_(is_featured))

    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(BlogPost.title.ilike(pattern), BlogPost.excerpt.ilike(pattern)))

    if exclude_id:
        query = query.filter(BlogPost.id != exclude_id)

    total = query.count()

    column = SORT_COLUMNS[sort_by]
    query = query.order_by(column.asc() if sort_order == "asc" else column.desc(), BlogPost.id.asc())

    return query.offset((page - 1) * limit).limit(limit).all(), total


def get_post(id_or_slug: str, *, admin: bool = False) -> BlogPost:
    """Public callers only see published posts."""
    query = BlogPost.query.filter(lookup_column(BlogPost, id_or_slug) == id_or_slug)
    if not admin:
        query = _published_filter(query)

    post = query.first()
    if post is None:
        raise NotFoundError("Post not found")
    return post


def record_view(post: BlogPost) -> None:
    """Increment in SQL so concurrent readers do not lose counts."""
    with transactional():
        db.session.execute(
            update(BlogPost)
            .where(BlogPost.id == post.id)
            .values(view_count=BlogPost.view_count + 1)
            .execution_options(synchronize_session=False)
        )
    db.session.refresh(post)


def related_posts(post: BlogPost, limit: int = RELATED_LIMIT) -> List[BlogPost]:
    """Newest published posts of the same category, topped up with any other published post."""
    base = _published_filter(BlogPost.query).filter(BlogPost.id != post.id)

    related: List[BlogPost] = []
    if post.category_id:
        related = (
            base.filter(BlogPost.category_id == post.category_id)
            .order_by(BlogPost.published_at.desc())
            .limit(limit)
            .all()
        )

    if len(related) < limit:
        seen = [p.id for p in related]
        query = base.filter(BlogPost.id.notin_(seen)) if seen else base
        related += query.order_by(BlogPost.published_at.desc()).limit(limit - len(related)).all()

    return related


def create_post(data: Dict[str, Any], *, actor_id: Optional[str] = None) -> BlogPost:
    cleaned = clean_post_data(data)

    title = cleaned.get("title")
    if not title or not title.strip():
        raise ValidationError("Title is required")

    if cleaned.get("slug"):
        cleaned["slug"] = slugify(cleaned["slug"])
        if not cleaned["slug"]:
            raise ValidationError("Slug cannot be empty")
        if _slug_taken(cleaned["slug"]):
            raise ValidationError(STORE_MESSAGES["unique:slug"])
    else:
        cleaned["slug"] = unique_slug(title)

    post = BlogPost()
    for name, value in cleaned.items():
        setattr(post, name, value)
    post.author_id = actor_id
    if post.status == "published":
        post.published_at = utc_now()

    with transactional(messages=STORE_MESSAGES):
        db.session.add(post)

    _revalidate(post.slug)
    return post


def update_post(id_or_slug: str, data: Dict[str, Any]) -> BlogPost:
    """
    Partial update. Moving a post to "published" stamps ``published_at``;
    re-saving an already published post keeps its original date.
    """
    post = get_post(id_or_slug, admin=True)
    cleaned = clean_post_data(data)

    if "title" in cleaned and not (cleaned["title"] or "").strip():
        raise ValidationError("Title is required")

    if "slug" in cleaned:
        cleaned["slug"] = slugify(cleaned["slug"] or "")
        if not cleaned["slug"]:
            raise ValidationError("Slug cannot be empty")
        if cleaned["slug"] != post.slug and _slug_taken(cleaned["slug"], exclude_id=post.id):
            raise ValidationError(STORE_MESSAGES["unique:slug"])

    old_slug = post.slug
    was_published = post.status == "published"
    replaced = [
        getattr(post, name)
        for name in IMAGE_FIELDS
        if name in cleaned and cleaned[name] != getattr(post, name)
    ]

    with transactional(messages=STORE_MESSAGES):
        for name, value in cleaned.items():
            setattr(post, name, value)
        if post.status == "published" and not was_published:
            post.published_at = utc_now()

    remove_objects_quietly(BLOG_IMAGES_BUCKET, [storage_path_from_url(u, BLOG_IMAGES_BUCKET) for u in replaced])
    _revalidate(old_slug, post.slug)
    return post


def delete_post(id_or_slug: str) -> BlogPost:
    """Delete the post, then its featured, hero and social images, best-effort."""
    post = get_post(id_or_slug, admin=True)
    paths = [storage_path_from_url(getattr(post, name), BLOG_IMAGES_BUCKET) for name in IMAGE_FIELDS]

    with transactional():
        db.session.delete(post)

    remove_objects_quietly(BLOG_IMAGES_BUCKET, paths)
    _revalidate(post.slug)
    return post


def publish_scheduled_posts(now=None) -> List[BlogPost]:
    """Publish drafts whose ``scheduled_publish_at`` has passed."""
    now = now or utc_now()
    due = BlogPost.query.filter(
        BlogPost.status == "draft",
        BlogPost.scheduled_publish_at.isnot(None),
        BlogPost.scheduled_publish_at <= now,
    ).all()

    if not due:
        return []

    with transactional():
        for post in due:
            post.status = "published"
            post.published_at = post.scheduled_publish_at
            post.scheduled_publish_at = None

    _revalidate(*(p.slug for p in due))
    return due
