# standsite/application/images.py
"""Media library: browse, upload and delete files in the storage buckets.

The admin forms upload here first and then save the returned URL into a
section, a list item or an event.
"""
from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from standsite.application.events import EVENT_IMAGES_BUCKET, get_event_by_id
from standsite.errors import ValidationError
from standsite.extensions import db
from standsite.models.event import EventImage
from standsite.utils.media import policy_for_kind, upload_file
from standsite.utils.revalidate import event_path, revalidate_paths
from standsite.utils.storage import get_storage, remove_objects_quietly, storage_path_from_url
from standsite.utils.transaction import transactional

SITE_MEDIA_BUCKET = "site-media"

MEDIA_BUCKETS = (
    EVENT_IMAGES_BUCKET,
    SITE_MEDIA_BUCKET,
    "portfolio",
    "contact-images",
    "setup-process-images",
    "instagram-images",
    "blog-images",
    "city-images",
)

# Media library uploads never take the document policy
UPLOAD_KINDS = ("image", "gallery", "video")

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")


def check_bucket(bucket: Optional[str]) -> str:
    bucket = bucket or EVENT_IMAGES_BUCKET
    if bucket not in MEDIA_BUCKETS:
        raise ValidationError(f"Unknown bucket: {bucket}")
    return bucket


def _strip_ext(name: Optional[str]) -> str:
    return os.path.splitext(name or "")[0]


def list_images(
    *,
    bucket: Optional[str] = None,
    folder: str = "",
    page: int = 1,
    limit: int = 20,
    event_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Event images come from ``event_images`` (they carry captions and types),
    every other bucket from the storage listing.
    """
    bucket = check_bucket(bucket)
    offset = (page - 1) * limit

    if bucket == EVENT_IMAGES_BUCKET:
        query = EventImage.query.filter_by(is_active=True)
        if event_id:
            query = query.filter_by(event_id=event_id)
        rows = query.order_by(EventImage.created_at.desc()).offset(offset).limit(limit).all()

        images = [
            {
                "id": img.id,
                "filename": img.filename,
                "file_path": img.file_path,
                "title": _strip_ext(img.original_filename) or img.filename,
                "alt_text": img.alt_text or img.filename,
                "description": img.caption or "",
                "tags": [img.image_type or "gallery"],
                "file_size": img.file_size or 0,
                "mime_type": img.mime_type,
                "created_at": img.created_at.isoformat() if img.created_at else None,
                "database_id": img.id,
                "event_id": img.event_id,
                "bucket_name": bucket,
            }
            for img in rows
        ]
        return {"images": images, "source": "database", "has_more": len(rows) == limit}

    storage = get_storage()
    folder = (folder or "").strip("/")
    entries = storage.list(bucket, folder, limit=limit, offset=offset)

    images = []
    for entry in entries:
        name = entry["name"]
        if not name.lower().endswith(IMAGE_EXTENSIONS):
            continue
        path = f"{folder}/{name}" if folder else name
        images.append({
            "id": name,
            "filename": name,
            "file_path": storage.public_url(bucket, path),
            "title": _strip_ext(name),
            "alt_text": _strip_ext(name),
            "file_size": entry.get("size") or 0,
            "mime_type": entry.get("mime_type") or "image/jpeg",
            "created_at": entry.get("created_at"),
            "updated_at": entry.get("updated_at"),
            "bucket_name": bucket,
            "folder_path": folder,
        })

    return {"images": images, "source": "storage", "has_more": len(entries) == limit}


def upload_image(
    file,
    *,
    bucket: Optional[str] = None,
    folder: Optional[str] = None,
    kind: Optional[str] = None,
    event_id: Optional[str] = None,
    actor_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Upload one file. With ``event_id`` on the event-images bucket the file is
    also recorded as a gallery image of that event.
    """
    bucket = check_bucket(bucket)
    kind = (kind or "image").lower()
    if kind not in UPLOAD_KINDS:
        raise ValidationError(f"Unknown upload kind: {kind}")

    event = get_event_by_id(event_id) if event_id and bucket == EVENT_IMAGES_BUCKET else None

    stored = upload_file(
        file,
        bucket=bucket,
        policy=policy_for_kind(kind),
        folder=folder or "general",
    )

    record = None
    if event is not None:
        record = EventImage()
        record.event_id = event.id
        record.filename = stored.filename
        record.original_filename = stored.original_filename
        record.file_path = stored.public_url
        record.storage_path = stored.path
        record.file_size = stored.size
        record.mime_type = stored.mime_type
        record.alt_text = _strip_ext(stored.original_filename)
        record.image_type = "gallery"
        record.uploaded_by = actor_id
        try:
            with transactional():
                db.session.add(record)
        except Exception:
            remove_objects_quietly(bucket, [stored.path])
            raise
        revalidate_paths(event_path(event.slug))

    result = stored.to_dict()
    result.update({
        "id": record.id if record else stored.filename,
        "file_path": stored.public_url,
        "title": _strip_ext(stored.original_filename),
        "alt_text": _strip_ext(stored.original_filename),
        "bucket_name": bucket,
        "folder_path": stored.path.rsplit("/", 1)[0] if "/" in stored.path else "",
        "database_id": record.id if record else None,
    })
    return result


def delete_images(
    file_paths: Any,
    *,
    bucket: Optional[str] = None,
    image_ids: Any = None,
) -> List[str]:
    """
    Delete files by path or public URL. Unlike the best-effort cleanups
    after row deletes, a storage failure here is the request's failure.
    """
    bucket = check_bucket(bucket)

    if not isinstance(file_paths, list) or not file_paths:
        raise ValidationError("filePaths array is required")

    paths = [storage_path_from_url(p, bucket) if isinstance(p, str) else None for p in file_paths]
    if not all(paths):
        raise ValidationError(f"Every file path must point into the {bucket} bucket")

    get_storage().remove(bucket, paths)

    if isinstance(image_ids, list) and image_ids and bucket == EVENT_IMAGES_BUCKET:
        with transactional():
            EventImage.query.filter(EventImage.id.in_(image_ids)).delete(synchronize_session=False)

    return paths
