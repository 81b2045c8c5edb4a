from .dates import iso

LIST_FIELDS = (
    "id", "title", "slug", "excerpt", "featured_image_url", "featured_image_alt",
    "status", "is_featured", "view_count",
)
DETAIL_FIELDS = LIST_FIELDS + (
    "content", "meta_description", "meta_keywords", "hero_image_url", "hero_image_alt",
    "og_title", "og_description", "og_image_url", "author_id",
)


def normalize_tag(item):
    data = item.data or {}
    return {"id": item.id, "name": data.get("name"), "slug": item.slug, "color": data.get("color")}


def normalize_blog_post(post, detail=False, admin=False):
    fields = DETAIL_FIELDS if detail or admin else LIST_FIELDS
    data = {name: getattr(post, name) for name in fields}
    data["published_at"] = iso(post.published_at)
    data["created_at"] = iso(post.created_at)
    data["updated_at"] = iso(post.updated_at)

    category = post.category
    category_data = (category.data or {}) if category else {}
    data["category_id"] = post.category_id
    data["category_name"] = category_data.get("name")
    data["category_slug"] = category.slug if category else None
    data["category_color"] = category_data.get("color")

    data["tags"] = [normalize_tag(t) for t in post.tags]

    if admin:
        data["tag_ids"] = [t.id for t in post.tags]
        data["scheduled_publish_at"] = iso(post.scheduled_publish_at)

    return data
