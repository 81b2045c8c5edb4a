from .dates import iso

_FIELDS = (
    "id", "name", "slug", "subtitle", "description", "hero_image_url",
    "country_code", "timezone", "is_active", "display_order",
)


def normalize_city(city, admin=False):
    data = {name: getattr(city, name) for name in _FIELDS}
    data["coordinates"] = (
        {"latitude": city.latitude, "longitude": city.longitude}
        if city.latitude is not None and city.longitude is not None
        else None
    )
    data["contact_info"] = city.contact_info or {}
    services = city.services or []
    data["services"] = services if admin else [s for s in services if s.get("is_active", True)]
    data["stats"] = city.stats or {}
    data["created_at"] = iso(city.created_at)
    data["updated_at"] = iso(city.updated_at)
    return data
