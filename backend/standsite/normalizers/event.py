from .dates import iso

DEFAULT_CATEGORY_NAME = "Event"
DEFAULT_CATEGORY_COLOR = "#22c55e"

EVENT_FIELDS = (
    "id", "title", "slug", "description", "detailed_description", "short_description",
    "category_id", "organizer", "organized_by", "venue", "event_type", "industry",
    "audience", "date_range", "featured_image_url", "hero_image_url",
    "hero_image_credit", "logo_image_url", "logo_text", "logo_subtext",
    "meta_title", "meta_description", "meta_keywords",
    "is_active", "is_featured", "display_order",
)


def normalize_category(category, event_count=None):
    data = {
        "id": category.id,
        "name": category.name,
        "slug": category.slug,
        "description": category.description,
        "color": category.color,
        "display_order": category.display_order,
        "is_active": category.is_active,
        "created_at": iso(category.created_at),
        "updated_at": iso(category.updated_at),
    }
    if event_count is not None:
        data["event_count"] = event_count
    return data


def normalize_event(event, admin=False):
    data = {name: getattr(event, name) for name in EVENT_FIELDS}
    data["start_date"] = iso(event.start_date)
    data["end_date"] = iso(event.end_date)
    data["published_at"] = iso(event.published_at)
    data["created_at"] = iso(event.created_at)
    data["updated_at"] = iso(event.updated_at)

    category = event.category
    data["category"] = (
        {"id": category.id, "name": category.name, "slug": category.slug, "color": category.color}
        if category else None
    )
    data["category_name"] = category.name if category else None
    data["category_slug"] = category.slug if category else None
    data["category_color"] = category.color if category else None

    if admin:
        data["created_by"] = event.created_by
        data["updated_by"] = event.updated_by

    return data


def format_date_range(event):
    """Stored ``date_range`` wins, then the formatted dates, then "Date TBD"."""
    if event.date_range:
        return event.date_range
    if event.start_date and event.end_date:
        return f"{event.start_date:%b %d, %Y} - {event.end_date:%b %d, %Y}"
    if event.start_date:
        return f"{event.start_date:%b %d, %Y}"
    return "Date TBD"


def normalize_related_event(event):
    category = event.category
    return {
        "id": event.id,
        "title": event.title,
        "slug": event.slug,
        "short_description": event.short_description,
        "featured_image_url": event.featured_image_url,
        "start_date": iso(event.start_date),
        "end_date": iso(event.end_date),
        "venue": event.venue,
        "category_id": event.category_id,
        "category_name": category.name if category and category.name else DEFAULT_CATEGORY_NAME,
        "category_color": category.color if category and category.color else DEFAULT_CATEGORY_COLOR,
        "date_range": format_date_range(event),
    }


def normalize_event_image(image):
    return {
        "id": image.id,
        "event_id": image.event_id,
        "image_type": image.image_type,
        "display_order": image.display_order,
        "caption": image.caption,
        "is_active": image.is_active,
        "created_at": iso(image.created_at),
        "filename": image.filename,
        "original_filename": image.original_filename,
        "file_path": image.file_path,
        "alt_text": image.alt_text,
        "width": image.width,
        "height": image.height,
        "file_size": image.file_size,
        "mime_type": image.mime_type,
    }
