# standsite/application/events.py
"""Events (trade shows) and their listing, detail and admin operations."""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from dateutil.parser import ParserError, parse
from sqlalchemy import func, or_

from standsite.errors import NotFoundError, ValidationError
from standsite.extensions import db
from standsite.models.base import utc_now
from standsite.models.event import Event, EventCategory, EventImage
from standsite.utils.lookup import lookup_column
from standsite.utils.optimistic_lock import enforce_optimistic_lock
from standsite.utils.revalidate import EVENTS_LISTING_PATH, event_path, revalidate_paths
from standsite.utils.slug import slugify
from standsite.utils.storage import remove_objects_quietly
from standsite.utils.transaction import transactional

EVENT_IMAGES_BUCKET = "event-images"

TEXT_FIELDS = {
    "title", "slug", "description", "detailed_description", "short_description",
    "organizer", "organized_by", "venue", "event_type", "industry", "audience",
    "date_range", "featured_image_url", "hero_image_url", "hero_image_credit",
    "logo_image_url", "logo_text", "logo_subtext",
    "meta_title", "meta_description", "meta_keywords",
}
DATE_FIELDS = {"start_date", "end_date"}
BOOL_FIELDS = {"is_active", "is_featured"}

# Anything outside this set is dropped from create/update payloads
ALLOWED_FIELDS = TEXT_FIELDS | DATE_FIELDS | BOOL_FIELDS | {
    "category_id", "display_order", "published_at",
}

# Empty strings for these mean "no value"
NULLABLE_FIELDS = {"category_id", "start_date", "end_date", "published_at"}

SORT_COLUMNS = {
    "created_at": Event.created_at,
    "updated_at": Event.updated_at,
    "title": Event.title,
    "start_date": Event.start_date,
    "end_date": Event.end_date,
    "display_order": Event.display_order,
    "published_at": Event.published_at,
    "category": EventCategory.name,
}

STORE_MESSAGES = {
    "unique:slug": "An event with this URL slug already exists",
    "unique:title": "An event with this title already exists",
    "foreign_key": "Invalid category selected.",
}

BULK_ACTIONS = ("activate", "deactivate", "feature", "unfeature", "publish", "unpublish", "update")
PATCH_ACTIONS = (
    "toggle_active", "toggle_featured", "set_active", "set_featured",
    "publish", "unpublish", "set_display_order",
)

RELATED_LIMIT = 6


def _parse_date(name, value):
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    try:
        return parse(str(value)).date()
    except (ParserError, ValueError, OverflowError):
        raise ValidationError(f"Invalid date for {name}")


def _parse_datetime(name, value):
    if isinstance(value, datetime):
        return value
    try:
        return parse(str(value))
    except (ParserError, ValueError, OverflowError):
        raise ValidationError(f"Invalid date for {name}")


def clean_event_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Turn a create/update payload into column values.

    - Unknown keys are dropped, not rejected
    - Empty strings become None for the category and date columns
    - Dates are parsed, booleans and display_order type checked
    """
    if not isinstance(data, dict):
        raise ValidationError("Invalid request body")

    cleaned: Dict[str, Any] = {}

    for name, value in data.items():
        if name not in ALLOWED_FIELDS:
            continue

        if name in NULLABLE_FIELDS and (value is None or (isinstance(value, str) and not value.strip())):
            cleaned[name] = None
            continue

        if name in TEXT_FIELDS:
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"{name} must be a string")
            cleaned[name] = value
        elif name in DATE_FIELDS:
            cleaned[name] = _parse_date(name, value)
        elif name == "published_at":
            cleaned[name] = _parse_datetime(name, value)
        elif name in BOOL_FIELDS:
            if not isinstance(value, bool):
                raise ValidationError(f"{name} must be true or false")
            cleaned[name] = value
        elif name == "display_order":
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError("display_order must be an integer")
            cleaned[name] = value
        else:
            cleaned[name] = value

    return cleaned


def assert_category_exists(category_id: Optional[str]) -> None:
    if category_id is None:
        return
    if not isinstance(category_id, str) or db.session.get(EventCategory, category_id) is None:
        raise ValidationError("Invalid category selected.")


def _assert_slug_free(slug: str, exclude_id: Optional[str] = None) -> None:
    query = Event.query.filter(Event.slug == slug)
    if exclude_id:
        query = query.filter(Event.id != exclude_id)
    if query.first() is not None:
        raise ValidationError(STORE_MESSAGES["unique:slug"])


def _assert_dates(event: Event) -> None:
    if event.start_date and event.end_date and event.end_date < event.start_date:
        raise ValidationError("End date cannot be before start date")


def _revalidate(*slugs: Optional[str]) -> None:
    revalidate_paths(EVENTS_LISTING_PATH, *(event_path(s) for s in slugs if s))


def list_events(
    *,
    page: int = 1,
    limit: int = 10,
    category_slug: Optional[str] = None,
    is_featured: Optional[bool] = None,
    search: Optional[str] = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    is_active: Optional[bool] = True,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> Tuple[List[Event], int]:
    """
    Filtered, sorted, paginated event listing.

    ``is_active=True`` (the public default) also requires a publish date.
    ``is_active=None`` lists every event. The total counts the filtered set.
    """
    if sort_by not in SORT_COLUMNS:
        raise ValidationError(f"Invalid sort_by: {sort_by}")
    if sort_order not in ("asc", "desc"):
        raise ValidationError("sort_order must be asc or desc")

    query = Event.query.outerjoin(EventCategory, Event.category_id == EventCategory.id)

    if is_active is not None:
        query = query.filter(Event.is_active.is_(is_active))
        if is_active:
            query = query.filter(Event.published_at.isnot(None))

    if category_slug:
        query = query.filter(EventCategory.slug == category_slug)

    if is_featured is not None:
        query = query.filter(Event.is_featured.is_(is_featured))

    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(
            Event.title.ilike(pattern),
            Event.description.ilike(pattern),
            Event.organizer.ilike(pattern),
        ))

    if start_date:
        query = query.filter(Event.start_date >= _parse_date("start_date", start_date))
    if end_date:
        query = query.filter(Event.end_date <= _parse_date("end_date", end_date))

    total = query.count()

    column = SORT_COLUMNS[sort_by]
    query = query.order_by(column.asc() if sort_order == "asc" else column.desc(), Event.id.asc())

    events = query.offset((page - 1) * limit).limit(limit).all()
    return events, total


def get_event(id_or_slug: str, *, admin: bool = False) -> Event:
    """Public callers only see active, published events."""
    query = Event.query.filter(lookup_column(Event, id_or_slug) == id_or_slug)

    if not admin:
        query = query.filter(Event.is_active.is_(True), Event.published_at.isnot(None))

    event = query.first()
    if event is None:
        raise NotFoundError("Event not found")
    return event


def get_event_by_id(event_id: str) -> Event:
    event = db.session.get(Event, event_id)
    if event is None:
        raise NotFoundError("Event not found")
    return event


def related_events(event: Event, limit: int = RELATED_LIMIT) -> List[Event]:
    """
    Other events to show below the detail page: newest published ones,
    falling back to any active event when none is published.
    """
    base = Event.query.filter(Event.id != event.id, Event.is_active.is_(True))

    related = (
        base.filter(Event.published_at.isnot(None))
        .order_by(Event.created_at.desc())
        .limit(limit)
        .all()
    )
    if related:
        return related

    return base.order_by(Event.created_at.desc()).limit(limit).all()


def create_event(data: Dict[str, Any], *, actor_id: Optional[str] = None) -> Event:
    cleaned = clean_event_data(data)

    title = cleaned.get("title")
    if not title or not title.strip():
        raise ValidationError("Title is required")

    if not cleaned.get("slug"):
        cleaned["slug"] = slugify(title)
    if not cleaned["slug"]:
        raise ValidationError("Slug cannot be empty")
    _assert_slug_free(cleaned["slug"])

    assert_category_exists(cleaned.get("category_id"))

    event = Event()
    for name, value in cleaned.items():
        setattr(event, name, value)
    event.created_by = actor_id
    event.updated_by = actor_id
    _assert_dates(event)

    with transactional(messages=STORE_MESSAGES):
        db.session.add(event)

    _revalidate(event.slug)
    return event


def update_event(event_id: str, data: Dict[str, Any], *, actor_id: Optional[str] = None) -> Event:
    event = get_event_by_id(event_id)
    enforce_optimistic_lock(event)

    cleaned = clean_event_data(data)

    if "title" in cleaned and not (cleaned["title"] or "").strip():
        raise ValidationError("Title is required")
    if "slug" in cleaned and not cleaned["slug"]:
        raise ValidationError("Slug cannot be empty")
    if cleaned.get("slug") and cleaned["slug"] != event.slug:
        _assert_slug_free(cleaned["slug"], exclude_id=event.id)
    if "category_id" in cleaned:
        assert_category_exists(cleaned["category_id"])

    old_slug = event.slug

    with transactional(messages=STORE_MESSAGES):
        for name, value in cleaned.items():
            setattr(event, name, value)
        event.updated_by = actor_id
        _assert_dates(event)

    _revalidate(old_slug, event.slug)
    return event


def patch_event(event_id: str, action: str, value: Any = None, *, actor_id: Optional[str] = None) -> Event:
    """Quick admin actions from the events table."""
    event = get_event_by_id(event_id)

    if action not in PATCH_ACTIONS:
        raise ValidationError("Invalid action")

    with transactional():
        if action == "toggle_active":
            event.is_active = not event.is_active
        elif action == "toggle_featured":
            event.is_featured = not event.is_featured
        elif action == "set_active":
            event.is_active = bool(value)
        elif action == "set_featured":
            event.is_featured = bool(value)
        elif action == "publish":
            event.published_at = utc_now()
            event.is_active = True
        elif action == "unpublish":
            event.published_at = None
        elif action == "set_display_order":
            try:
                event.display_order = int(float(value))
            except (TypeError, ValueError, OverflowError):
                event.display_order = 0
        event.updated_by = actor_id

    _revalidate(event.slug)
    return event


def _bulk_fields(action: str, data: Any) -> Dict[str, Any]:
    if action == "activate":
        return {"is_active": True}
    if action == "deactivate":
        return {"is_active": False}
    if action == "feature":
        return {"is_featured": True}
    if action == "unfeature":
        return {"is_featured": False}
    if action == "publish":
        return {"published_at": utc_now(), "is_active": True}
    if action == "unpublish":
        return {"published_at": None}

    fields = clean_event_data(data or {})
    # Slugs are unique, a shared value can only ever apply to one event
    fields.pop("slug", None)
    if "title" in fields and not (fields["title"] or "").strip():
        raise ValidationError("Title is required")
    if "category_id" in fields:
        assert_category_exists(fields["category_id"])
    if not fields:
        raise ValidationError("No valid fields provided for update")
    return fields


def _assert_id_list(ids) -> List[str]:
    if not isinstance(ids, list) or not ids:
        raise ValidationError("Invalid request data")
    return ids


def bulk_update_events(
    action: str,
    event_ids: List[str],
    data: Any = None,
    *,
    actor_id: Optional[str] = None,
) -> List[Event]:
    _assert_id_list(event_ids)
    if action not in BULK_ACTIONS:
        raise ValidationError("Invalid action")

    fields = _bulk_fields(action, data)
    events = Event.query.filter(Event.id.in_(event_ids)).all()

    with transactional(messages=STORE_MESSAGES):
        for event in events:
            for name, value in fields.items():
                setattr(event, name, value)
            event.updated_by = actor_id
            _assert_dates(event)

    _revalidate(*(e.slug for e in events))
    return events


def _image_paths(event_ids: List[str]) -> List[str]:
    rows = (
        db.session.query(EventImage.storage_path)
        .filter(EventImage.event_id.in_(event_ids))
        .all()
    )
    return [path for (path,) in rows if path]


def delete_event(event_id: str) -> Event:
    """
    Delete an event and its image rows in one transaction, then remove
    the uploaded image files.
    """
    event = get_event_by_id(event_id)
    paths = _image_paths([event.id])

    with transactional():
        # image rows go with it through the cascade
        db.session.delete(event)

    remove_objects_quietly(EVENT_IMAGES_BUCKET, paths)
    _revalidate(event.slug)
    return event


def bulk_delete_events(event_ids: List[str]) -> List[Dict[str, str]]:
    _assert_id_list(event_ids)

    events = Event.query.filter(Event.id.in_(event_ids)).all()
    found_ids = [e.id for e in events]
    deleted = [{"id": e.id, "title": e.title} for e in events]
    slugs = [e.slug for e in events]
    paths = _image_paths(found_ids) if found_ids else []

    with transactional():
        for event in events:
            db.session.delete(event)

    remove_objects_quietly(EVENT_IMAGES_BUCKET, paths)
    _revalidate(*slugs)
    return deleted


def event_statistics(today: Optional[date] = None) -> Dict[str, Any]:
    today = today or utc_now().date()
    week_ago = utc_now() - timedelta(days=7)

    def count(*criteria):
        return Event.query.filter(*criteria).count()

    live = (Event.is_active.is_(True), Event.published_at.isnot(None))

    per_category = (
        db.session.query(EventCategory.name, func.count(Event.id))
        .outerjoin(Event, Event.category_id == EventCategory.id)
        .group_by(EventCategory.id, EventCategory.name)
        .order_by(EventCategory.name.asc())
        .all()
    )

    return {
        "total_events": count(),
        "active_events": count(Event.is_active.is_(True)),
        "featured_events": count(Event.is_featured.is_(True)),
        "published_events": count(*live),
        "draft_events": count(Event.published_at.is_(None)),
        "upcoming_events": count(*live, Event.start_date >= today),
        "past_events": count(*live, Event.end_date < today),
        "recent_events": count(Event.created_at >= week_ago),
        "total_categories": EventCategory.query.count(),
        "events_by_category": [{"category": name, "count": n} for name, n in per_category],
    }
