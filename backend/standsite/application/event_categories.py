# standsite/application/event_categories.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import func

from standsite.domain.invariants.content import COLOR_RE
from standsite.errors import NotFoundError, ValidationError
from standsite.extensions import db
from standsite.models.event import Event, EventCategory
from standsite.utils.revalidate import EVENTS_LISTING_PATH, revalidate_paths
from standsite.utils.slug import slugify
from standsite.utils.transaction import transactional

ALLOWED_FIELDS = {"name", "slug", "description", "color", "display_order", "is_active"}

STORE_MESSAGES = {
    "unique:slug": "A category with this URL slug already exists",
    "unique:name": "A category with this name already exists",
}

BULK_ACTIONS = ("activate", "deactivate", "reorder", "update")


def _clean(data: Dict[str, Any]) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationError("Invalid request body")

    cleaned = {k: v for k, v in data.items() if k in ALLOWED_FIELDS}

    for name in ("name", "slug", "description", "color"):
        if name in cleaned and cleaned[name] is not None and not isinstance(cleaned[name], str):
            raise ValidationError(f"{name} must be a string")

    if cleaned.get("color") and not COLOR_RE.match(cleaned["color"]):
        raise ValidationError("color must be a color such as #a5cd39")

    if "display_order" in cleaned:
        value = cleaned["display_order"]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError("display_order must be an integer")

    if "is_active" in cleaned and not isinstance(cleaned["is_active"], bool):
        raise ValidationError("is_active must be true or false")

    if "slug" in cleaned:
        cleaned["slug"] = slugify(cleaned["slug"])

    return cleaned


def event_counts(category_ids: List[str]) -> Dict[str, int]:
    """Active events per category."""
    if not category_ids:
        return {}
    rows = (
        db.session.query(Event.category_id, func.count(Event.id))
        .filter(Event.category_id.in_(category_ids), Event.is_active.is_(True))
        .group_by(Event.category_id)
        .all()
    )
    return dict(rows)


def list_categories(is_active: Optional[bool] = None) -> List[EventCategory]:
    query = EventCategory.query
    if is_active is not None:
        query = query.filter(EventCategory.is_active.is_(is_active))
    return query.order_by(EventCategory.display_order.asc(), EventCategory.name.asc()).all()


def get_category(category_id: str) -> EventCategory:
    category = db.session.get(EventCategory, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    return category


def create_category(data: Dict[str, Any]) -> EventCategory:
    cleaned = _clean(data)

    name = (cleaned.get("name") or "").strip()
    if not name:
        raise ValidationError("Category name is required")

    cleaned["slug"] = cleaned.get("slug") or slugify(name)
    if not cleaned["slug"]:
        raise ValidationError("Slug cannot be empty")

    category = EventCategory()
    for key, value in cleaned.items():
        setattr(category, key, value)

    with transactional(messages=STORE_MESSAGES):
        db.session.add(category)

    revalidate_paths(EVENTS_LISTING_PATH)
    return category


def update_category(category_id: str, data: Dict[str, Any]) -> EventCategory:
    category = get_category(category_id)
    cleaned = _clean(data)

    if "name" in cleaned and not (cleaned["name"] or "").strip():
        raise ValidationError("Category name is required")
    if "slug" in cleaned and not cleaned["slug"]:
        raise ValidationError("Slug cannot be empty")

    with transactional(messages=STORE_MESSAGES):
        for key, value in cleaned.items():
            setattr(category, key, value)

    revalidate_paths(EVENTS_LISTING_PATH)
    return category


def delete_category(category_id: str) -> EventCategory:
    """Refused while any event, active or not, still points at the category."""
    category = get_category(category_id)

    count = Event.query.filter_by(category_id=category.id).count()
    if count:
        raise ValidationError(
            f"Cannot delete category. It has {count} event(s) associated with it."
        )

    with transactional():
        db.session.delete(category)

    revalidate_paths(EVENTS_LISTING_PATH)
    return category


def bulk_update_categories(action: str, category_ids: Any, data: Any = None) -> List[EventCategory]:
    """
    activate / deactivate / update apply to ``category_ids``; reorder takes
    ``data`` as ``[{id, display_order}, ...]`` and ignores ``category_ids``.
    """
    if action not in BULK_ACTIONS:
        raise ValidationError("Invalid action")

    if action == "reorder":
        if not isinstance(data, list):
            raise ValidationError("Invalid reorder data")
        orders = {}
        for entry in data:
            if not isinstance(entry, dict) or "id" not in entry:
                raise ValidationError("Invalid reorder data")
            value = entry.get("display_order")
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError("Invalid reorder data")
            orders[entry["id"]] = value
        categories = EventCategory.query.filter(EventCategory.id.in_(list(orders))).all()
        updates = {c.id: {"display_order": orders[c.id]} for c in categories}
    else:
        if not isinstance(category_ids, list) or not category_ids:
            raise ValidationError("Invalid request data")
        if action == "activate":
            fields = {"is_active": True}
        elif action == "deactivate":
            fields = {"is_active": False}
        else:
            fields = _clean(data or {})
            # name and slug are unique per category
            fields.pop("slug", None)
            fields.pop("name", None)
            if not fields:
                raise ValidationError("No valid fields provided for update")
        categories = EventCategory.query.filter(EventCategory.id.in_(category_ids)).all()
        updates = {c.id: fields for c in categories}

    with transactional(messages=STORE_MESSAGES):
        for category in categories:
            for key, value in updates[category.id].items():
                setattr(category, key, value)

    revalidate_paths(EVENTS_LISTING_PATH)
    return categories


def bulk_delete_categories(category_ids: Any) -> int:
    if not isinstance(category_ids, list) or not category_ids:
        raise ValidationError("Invalid request data")

    in_use = Event.query.filter(Event.category_id.in_(category_ids)).count()
    if in_use:
        raise ValidationError("Cannot delete categories that have associated events")

    with transactional():
        deleted = (
            EventCategory.query
            .filter(EventCategory.id.in_(category_ids))
            .delete(synchronize_session=False)
        )

    revalidate_paths(EVENTS_LISTING_PATH)
    return deleted
