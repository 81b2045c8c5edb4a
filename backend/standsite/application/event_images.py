# standsite/application/event_images.py
"""Images attached to an event: featured, hero and logo singles plus a gallery."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from standsite.application.events import EVENT_IMAGES_BUCKET, get_event_by_id
from standsite.errors import ValidationError
from standsite.extensions import db
from standsite.models.event import Event, EventImage
from standsite.utils.lookup import lookup_column
from standsite.utils.media import GALLERY_POLICY, IMAGE_POLICY, upload_file
from standsite.utils.revalidate import event_path, revalidate_paths
from standsite.utils.storage import remove_objects_quietly, storage_path_from_url
from standsite.utils.transaction import transactional

IMAGE_TYPES = ("featured", "hero", "logo", "gallery")

_OPTIONAL_INT_FIELDS = ("width", "height")


def empty_groups() -> Dict[str, list]:
    return {image_type: [] for image_type in IMAGE_TYPES}


def _check_type(image_type: Optional[str]) -> str:
    if image_type not in IMAGE_TYPES:
        raise ValidationError(f"image_type must be one of: {', '.join(IMAGE_TYPES)}")
    return image_type


def list_event_images(
    id_or_slug: str,
    *,
    image_type: Optional[str] = None,
    include_inactive: bool = False,
):
    """
    Returns (event_id, images). An unknown event gives (None, []) so the
    public gallery renders empty instead of failing.
    """
    event = Event.query.filter(lookup_column(Event, id_or_slug) == id_or_slug).first()
    if event is None:
        return None, []

    query = EventImage.query.filter_by(event_id=event.id)
    if image_type:
        query = query.filter_by(image_type=_check_type(image_type))
    if not include_inactive:
        query = query.filter_by(is_active=True)

    images = query.order_by(EventImage.image_type.asc(), EventImage.display_order.asc()).all()
    return event.id, images


def _replaced_images(event_id: str, image_type: str) -> List[EventImage]:
    if image_type == "gallery":
        return []
    return EventImage.query.filter_by(event_id=event_id, image_type=image_type).all()


def _int_or_none(name, value):
    """Integers from JSON, or digit strings from a multipart form."""
    if value is None or value == "":
        return None
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer")
    return value


def add_event_image(
    event_id: str,
    data: Dict[str, Any],
    *,
    file=None,
    actor_id: Optional[str] = None,
) -> EventImage:
    """
    Attach an image to an event.

    The image is either uploaded here (``file``) or was uploaded earlier and
    ``data`` carries its ``filename`` and ``file_path``. Featured, hero and
    logo are singles: adding one replaces the previous image of that type,
    and the replaced files are removed once the new row is committed.
    """
    event = get_event_by_id(event_id)
    image_type = _check_type(data.get("image_type") or "gallery")

    display_order = _int_or_none("display_order", data.get("display_order")) or 0
    dimensions = {name: _int_or_none(name, data.get(name)) for name in _OPTIONAL_INT_FIELDS}

    stored = None
    if file is not None:
        policy = GALLERY_POLICY if image_type == "gallery" else IMAGE_POLICY
        stored = upload_file(
            file,
            bucket=EVENT_IMAGES_BUCKET,
            policy=policy,
            folder=f"{event.id}/{image_type}",
        )
        filename = stored.filename
        original_filename = stored.original_filename
        file_path = stored.public_url
        storage_path = stored.path
        file_size = stored.size
        mime_type = stored.mime_type
    else:
        filename = data.get("filename")
        file_path = data.get("file_path")
        if not filename or not file_path:
            raise ValidationError("filename and file_path are required")
        original_filename = data.get("original_filename") or filename
        storage_path = storage_path_from_url(file_path, EVENT_IMAGES_BUCKET)
        file_size = _int_or_none("file_size", data.get("file_size", 0)) or 0
        mime_type = data.get("mime_type") or "image/jpeg"

    replaced = _replaced_images(event.id, image_type)
    replaced_paths = [img.storage_path for img in replaced if img.storage_path != storage_path]

    image = EventImage()
    image.event_id = event.id
    image.filename = filename
    image.original_filename = original_filename
    image.file_path = file_path
    image.storage_path = storage_path
    image.image_type = image_type
    image.display_order = display_order
    image.caption = data.get("caption")
    image.alt_text = data.get("alt_text") or "Event image"
    image.file_size = file_size
    image.mime_type = mime_type
    image.uploaded_by = actor_id
    for name, value in dimensions.items():
        setattr(image, name, value)

    try:
        with transactional():
            for old in replaced:
                db.session.delete(old)
            db.session.add(image)
    except Exception:
        if stored is not None:
            remove_objects_quietly(EVENT_IMAGES_BUCKET, [stored.path])
        raise

    remove_objects_quietly(EVENT_IMAGES_BUCKET, replaced_paths)
    revalidate_paths(event_path(event.slug))
    return image


def update_event_images(event_id: str, updates: Any) -> List[EventImage]:
    """Bulk edit of display_order / caption / is_active."""
    event = get_event_by_id(event_id)

    if not isinstance(updates, list) or not updates:
        raise ValidationError("Updates array is required")

    images = {
        img.id: img
        for img in EventImage.query.filter_by(event_id=event.id).all()
    }

    changed = []
    with transactional():
        for update in updates:
            if not isinstance(update, dict):
                raise ValidationError("Each update must be an object")
            image = images.get(update.get("id"))
            if image is None:
                continue
            if "display_order" in update:
                image.display_order = _int_or_none("display_order", update["display_order"]) or 0
            if "caption" in update:
                image.caption = update["caption"]
            if "is_active" in update:
                if not isinstance(update["is_active"], bool):
                    raise ValidationError("is_active must be true or false")
                image.is_active = update["is_active"]
            changed.append(image)

    revalidate_paths(event_path(event.slug))
    return changed


def delete_event_images(event_id: str, image_ids: Any) -> List[Dict[str, str]]:
    event = get_event_by_id(event_id)

    if not isinstance(image_ids, list) or not image_ids:
        raise ValidationError("image_ids array is required")

    images = (
        EventImage.query
        .filter(EventImage.event_id == event.id, EventImage.id.in_(image_ids))
        .all()
    )
    deleted = [{"id": img.id, "image_type": img.image_type} for img in images]
    paths = [
        img.storage_path or storage_path_from_url(img.file_path, EVENT_IMAGES_BUCKET)
        for img in images
    ]

    with transactional():
        for image in images:
            db.session.delete(image)

    remove_objects_quietly(EVENT_IMAGES_BUCKET, paths)
    revalidate_paths(event_path(event.slug))
    return deleted
