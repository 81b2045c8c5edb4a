# standsite/application/collections.py
"""List manager: CRUD over the ordered collections in ``collection_specs``."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import func

from standsite.collection_specs import CollectionSpec, all_collection_specs, get_collection_spec
from standsite.domain.invariants.content import validate_content
from standsite.errors import NotFoundError, ValidationError
from standsite.extensions import db
from standsite.models.collection_item import CollectionItem
from standsite.utils.revalidate import revalidate_paths
from standsite.utils.slug import slugify
from standsite.utils.storage import remove_objects_quietly, storage_path_from_url
from standsite.utils.transaction import transactional


def get_spec_or_404(key: str) -> CollectionSpec:
    spec = get_collection_spec(key)
    if spec is None:
        raise NotFoundError(f"Unknown collection: {key}")
    return spec


def _duplicate_slug_message(spec: CollectionSpec) -> str:
    return f"A {spec.label} with this slug already exists"


def _store_messages(spec: CollectionSpec) -> Dict[str, str]:
    return {"unique": _duplicate_slug_message(spec)}


def _parse_order(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("display_order must be an integer")
    return value


def _parse_active(value) -> bool:
    if not isinstance(value, bool):
        raise ValidationError("is_active must be true or false")
    return value


def _assert_slug_free(spec: CollectionSpec, slug: str, exclude_id: Optional[str] = None) -> None:
    query = CollectionItem.query.filter_by(collection=spec.key, slug=slug)
    if exclude_id:
        query = query.filter(CollectionItem.id != exclude_id)
    if query.first() is not None:
        raise ValidationError(_duplicate_slug_message(spec))


def _next_order(spec: CollectionSpec) -> int:
    current = (
        db.session.query(func.max(CollectionItem.display_order))
        .filter(CollectionItem.collection == spec.key)
        .scalar()
    )
    return (current or 0) + 1


def _split_payload(spec: CollectionSpec, payload: Dict[str, Any]):
    if not isinstance(payload, dict):
        raise ValidationError("Invalid request body")

    data = dict(payload)
    data.pop("id", None)
    meta = {name: data.pop(name) for name in ("slug", "display_order", "is_active") if name in data}

    if "slug" in meta and not spec.has_slug:
        raise ValidationError("Unknown field: slug")

    return data, meta


def list_items(key: str, include_inactive: bool = False) -> List[CollectionItem]:
    spec = get_spec_or_404(key)
    query = CollectionItem.query.filter_by(collection=spec.key)
    if not include_inactive:
        query = query.filter_by(is_active=True)
    return query.order_by(CollectionItem.display_order.asc(), CollectionItem.created_at.asc()).all()


def get_item(key: str, item_id: str) -> CollectionItem:
    spec = get_spec_or_404(key)
    item = db.session.get(CollectionItem, item_id)
    if item is None or item.collection != spec.key:
        raise NotFoundError(f"{spec.label.capitalize()} not found")
    return item


def create_item(key: str, payload: Dict[str, Any]) -> CollectionItem:
    """
    Create a list item.

    When the collection has slugs and none is given, the slug is derived
    from the source field. An explicit slug is only normalized, it is not
    checked against the source field.
    """
    spec = get_spec_or_404(key)
    data, meta = _split_payload(spec, payload)
    content = validate_content(spec.fields, data, spec.defaults())

    slug = None
    if spec.has_slug:
        slug = slugify(meta.get("slug") or content.get(spec.slug_source))
        if not slug:
            raise ValidationError("Slug cannot be empty")
        _assert_slug_free(spec, slug)

    item = CollectionItem()
    item.collection = spec.key
    item.slug = slug
    item.data = content
    item.is_active = _parse_active(meta["is_active"]) if "is_active" in meta else True

    with transactional(messages=_store_messages(spec)):
        item.display_order = (
            _parse_order(meta["display_order"]) if "display_order" in meta else _next_order(spec)
        )
        db.session.add(item)
        db.session.flush()

    revalidate_paths(*spec.revalidate)
    return item


def update_item(key: str, item_id: str, payload: Dict[str, Any]) -> CollectionItem:
    spec = get_spec_or_404(key)
    item = get_item(key, item_id)
    data, meta = _split_payload(spec, payload)

    base = spec.defaults()
    base.update(item.data or {})
    content = validate_content(spec.fields, data, base)

    replaced_media = [
        item.data.get(name)
        for name in spec.media_fields
        if item.data and name in data and data[name] != item.data.get(name)
    ]

    if spec.has_slug and "slug" in meta:
        slug = slugify(meta["slug"])
        if not slug:
            raise ValidationError("Slug cannot be empty")
        if slug != item.slug:
            _assert_slug_free(spec, slug, exclude_id=item.id)
        item.slug = slug

    with transactional(messages=_store_messages(spec)):
        item.data = content
        if "display_order" in meta:
            item.display_order = _parse_order(meta["display_order"])
        if "is_active" in meta:
            item.is_active = _parse_active(meta["is_active"])

    if spec.bucket and replaced_media:
        remove_objects_quietly(spec.bucket, [storage_path_from_url(u, spec.bucket) for u in replaced_media])

    revalidate_paths(*spec.revalidate)
    return item


def delete_item(key: str, item_id: str) -> CollectionItem:
    """
    Hard delete. Storage objects referenced by the item's media fields are
    removed afterwards, best-effort.
    """
    spec = get_spec_or_404(key)
    item = get_item(key, item_id)

    media_paths = [
        storage_path_from_url((item.data or {}).get(name), spec.bucket)
        for name in spec.media_fields
    ] if spec.bucket else []

    with transactional():
        db.session.delete(item)

    if media_paths:
        remove_objects_quietly(spec.bucket, media_paths)

    revalidate_paths(*spec.revalidate)
    return item


def reorder_items(key: str, orders: List[Dict[str, Any]]) -> int:
    """Apply ``[{id, display_order}, ...]``. Ids from other collections are ignored."""
    spec = get_spec_or_404(key)

    if not isinstance(orders, list):
        raise ValidationError("Invalid reorder data")

    for entry in orders:
        if not isinstance(entry, dict) or "id" not in entry or "display_order" not in entry:
            raise ValidationError("Each entry needs id and display_order")
        _parse_order(entry["display_order"])

    ids = [entry["id"] for entry in orders]
    items = {
        item.id: item
        for item in CollectionItem.query.filter(
            CollectionItem.collection == spec.key,
            CollectionItem.id.in_(ids),
        ).all()
    }

    with transactional():
        for entry in orders:
            item = items.get(entry["id"])
            if item is not None:
                item.display_order = entry["display_order"]

    revalidate_paths(*spec.revalidate)
    return len(items)


def list_collections() -> List[Dict[str, Any]]:
    """Every registered collection with its active item count."""
    counts = dict(
        db.session.query(CollectionItem.collection, func.count(CollectionItem.id))
        .filter(CollectionItem.is_active.is_(True))
        .group_by(CollectionItem.collection)
        .all()
    )

    return [
        {
            "key": spec.key,
            "label": spec.label,
            "fields": [f.name for f in spec.fields],
            "has_slug": spec.has_slug,
            "item_count": counts.get(spec.key, 0),
        }
        for spec in all_collection_specs()
    ]
