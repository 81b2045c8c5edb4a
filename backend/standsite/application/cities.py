# standsite/application/cities.py
"""City and country landing pages (``/cities/<slug>``)."""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import or_

from standsite.errors import NotFoundError, ValidationError
from standsite.extensions import db
from standsite.models.city import City
from standsite.utils.lookup import lookup_column
from standsite.utils.revalidate import CITIES_LISTING_PATH, city_path, revalidate_paths
from standsite.utils.slug import slugify
from standsite.utils.transaction import transactional

TEXT_FIELDS = {"name", "slug", "subtitle", "description", "hero_image_url", "timezone"}
COORDINATE_FIELDS = {"latitude": 90, "longitude": 180}
CONTACT_KEYS = ("phone", "email", "address", "working_hours", "emergency_contact")
STAT_KEYS = ("projects_completed", "years_of_operation", "clients_satisfied", "team_size")

ALLOWED_FIELDS = TEXT_FIELDS | set(COORDINATE_FIELDS) | {
    "country_code", "contact_info", "services", "stats", "is_active", "display_order",
}

COUNTRY_CODE_RE = re.compile(r"^[A-Za-z]{2}$")

DUPLICATE_SLUG = "A city with this slug already exists"
STORE_MESSAGES = {"unique:slug": DUPLICATE_SLUG}

BULK_ACTIONS = ("activate", "deactivate", "delete", "update")


def _clean_contact(value) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ValidationError("contact_info must be an object")
    unknown = set(value) - set(CONTACT_KEYS)
    if unknown:
        raise ValidationError(f"Unknown contact field: {sorted(unknown)[0]}")
    for key, item in value.items():
        if item is not None and not isinstance(item, str):
            raise ValidationError(f"contact_info.{key} must be a string")
    return dict(value)


def _clean_services(value) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        raise ValidationError("services must be a list")

    services = []
    for entry in value:
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str) or not entry["name"].strip():
            raise ValidationError("Each service needs a name")
        description = entry.get("description")
        if description is not None and not isinstance(description, str):
            raise ValidationError("Service description must be a string")
        services.append({
            "name": entry["name"],
            "description": description,
            "is_active": entry.get("is_active", True) is not False,
        })
    return services


def _clean_stats(value) -> Dict[str, int]:
    if not isinstance(value, dict):
        raise ValidationError("stats must be an object")
    stats = {}
    for key, item in value.items():
        if key not in STAT_KEYS:
            raise ValidationError(f"Unknown stat: {key}")
        if item is None:
            continue
        if isinstance(item, bool) or not isinstance(item, int) or item < 0:
            raise ValidationError(f"stats.{key} must be a non-negative integer")
        stats[key] = item
    return stats


def clean_city_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Unknown keys are dropped, the rest type checked."""
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
        elif name in COORDINATE_FIELDS:
            if value is None:
                cleaned[name] = None
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)) or abs(value) > COORDINATE_FIELDS[name]:
                raise ValidationError(f"Invalid {name}")
            cleaned[name] = float(value)
        elif name == "country_code":
            if value in (None, ""):
                cleaned[name] = None
                continue
            if not isinstance(value, str) or not COUNTRY_CODE_RE.match(value):
                raise ValidationError("country_code must be a two-letter code")
            cleaned[name] = value.upper()
        elif name == "contact_info":
            cleaned[name] = _clean_contact(value or {})
        elif name == "services":
            cleaned[name] = _clean_services(value or [])
        elif name == "stats":
            cleaned[name] = _clean_stats(value or {})
        elif name == "is_active":
            if not isinstance(value, bool):
                raise ValidationError("is_active must be true or false")
            cleaned[name] = value
        elif name == "display_order":
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError("display_order must be an integer")
            cleaned[name] = value

    return cleaned


def _assert_slug_free(slug: str, exclude_id: Optional[str] = None) -> None:
    query = City.query.filter(City.slug == slug)
    if exclude_id:
        query = query.filter(City.id != exclude_id)
    if query.first() is not None:
        raise ValidationError(DUPLICATE_SLUG)


def _revalidate(*slugs: Optional[str]) -> None:
    revalidate_paths(CITIES_LISTING_PATH, *(city_path(s) for s in slugs if s))


def list_cities(
    *,
    page: int = 1,
    limit: int = 10,
    search: Optional[str] = None,
    is_active: Optional[bool] = True,
    country_code: Optional[str] = None,
) -> Tuple[List[City], int]:
    query = City.query

    if is_active is not None:
        query = query.filter(City.is_active.is_(is_active))

    if country_code:
        query = query.filter(City.country_code == country_code.upper())

    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(
            City.name.ilike(pattern),
            City.description.ilike(pattern),
            City.country_code.ilike(pattern),
        ))

    total = query.count()
    cities = (
        query.order_by(City.display_order.asc(), City.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return cities, total


def get_city(id_or_slug: str, *, admin: bool = False) -> City:
    query = City.query.filter(lookup_column(City, id_or_slug) == id_or_slug)
    if not admin:
        query = query.filter(City.is_active.is_(True))

    city = query.first()
    if city is None:
        raise NotFoundError("City not found")
    return city


def create_city(data: Dict[str, Any]) -> City:
    cleaned = clean_city_data(data)

    name = cleaned.get("name")
    if not name or not name.strip():
        raise ValidationError("City name is required")

    cleaned["slug"] = slugify(cleaned.get("slug") or name)
    if not cleaned["slug"]:
        raise ValidationError("Slug cannot be empty")
    _assert_slug_free(cleaned["slug"])

    city = City()
    for field_name, value in cleaned.items():
        setattr(city, field_name, value)

    with transactional(messages=STORE_MESSAGES):
        db.session.add(city)

    _revalidate(city.slug)
    return city


def update_city(id_or_slug: str, data: Dict[str, Any]) -> City:
    city = get_city(id_or_slug, admin=True)
    cleaned = clean_city_data(data)

    if "name" in cleaned and not (cleaned["name"] or "").strip():
        raise ValidationError("City name is required")

    if "slug" in cleaned:
        cleaned["slug"] = slugify(cleaned["slug"] or "")
        if not cleaned["slug"]:
            raise ValidationError("Slug cannot be empty")
        if cleaned["slug"] != city.slug:
            _assert_slug_free(cleaned["slug"], exclude_id=city.id)

    old_slug = city.slug
    with transactional(messages=STORE_MESSAGES):
        for field_name, value in cleaned.items():
            setattr(city, field_name, value)

    _revalidate(old_slug, city.slug)
    return city


def delete_city(id_or_slug: str) -> City:
    city = get_city(id_or_slug, admin=True)
    with transactional():
        db.session.delete(city)

    _revalidate(city.slug)
    return city


def bulk_city_action(action: str, city_ids: List[str], data: Any = None) -> int:
    """Returns how many cities the action touched."""
    if not isinstance(city_ids, list) or not city_ids:
        raise ValidationError("City IDs are required")
    if action not in BULK_ACTIONS:
        raise ValidationError("Invalid action")

    if action == "update":
        if not data:
            raise ValidationError("Update data is required")
        fields = clean_city_data(data)
        # Slugs are unique, a shared value can only ever apply to one city
        fields.pop("slug", None)
        if "name" in fields and not (fields["name"] or "").strip():
            raise ValidationError("City name is required")
        if not fields:
            raise ValidationError("No valid fields provided for update")
    elif action == "activate":
        fields = {"is_active": True}
    elif action == "deactivate":
        fields = {"is_active": False}
    else:
        fields = {}

    cities = City.query.filter(City.id.in_(city_ids)).all()
    slugs = [c.slug for c in cities]

    with transactional(messages=STORE_MESSAGES):
        for city in cities:
            if action == "delete":
                db.session.delete(city)
                continue
            for field_name, value in fields.items():
                setattr(city, field_name, value)

    _revalidate(*slugs)
    return len(cities)
