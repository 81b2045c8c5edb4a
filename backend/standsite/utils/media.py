import mimetypes
import os
import secrets
import time
from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from standsite.errors import ValidationError
from standsite.utils.storage import get_storage

MB = 1024 * 1024

IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/webp", "image/gif"})
VIDEO_TYPES = frozenset({"video/mp4", "video/webm", "video/quicktime"})
DOCUMENT_TYPES = frozenset({"application/pdf"})


@dataclass(frozen=True)
class UploadPolicy:
    label: str
    allowed_types: FrozenSet[str]
    max_bytes: int
    type_message: str = field(default="")

    @property
    def max_megabytes(self):
        return self.max_bytes // MB

    def type_error(self):
        return self.type_message or f"Invalid file type. Allowed types: {', '.join(sorted(self.allowed_types))}."

    def size_error(self):
        return f"{self.label} size must be less than {self.max_megabytes}MB."


IMAGE_POLICY = UploadPolicy(
    "Image", IMAGE_TYPES, 10 * MB,
    "Invalid file type. Only JPEG, PNG, WebP, and GIF are allowed.",
)
GALLERY_POLICY = UploadPolicy(
    "Image", IMAGE_TYPES, 50 * MB,
    "Invalid file type. Only JPEG, PNG, WebP, and GIF are allowed.",
)
VIDEO_POLICY = UploadPolicy(
    "Video", VIDEO_TYPES, 50 * MB,
    "Invalid file type. Only MP4, WebM, and MOV videos are allowed.",
)
DOCUMENT_POLICY = UploadPolicy(
    "File", DOCUMENT_TYPES, 100 * MB,
    "Only PDF files are allowed",
)

POLICIES_BY_KIND = {
    "image": IMAGE_POLICY,
    "gallery": GALLERY_POLICY,
    "video": VIDEO_POLICY,
    "document": DOCUMENT_POLICY,
}


@dataclass
class StoredObject:
    bucket: str
    path: str
    public_url: str
    filename: str
    original_filename: str
    size: int
    mime_type: str

    def to_dict(self):
        return {
            "bucket": self.bucket,
            "path": self.path,
            "url": self.public_url,
            "filename": self.filename,
            "original_filename": self.original_filename,
            "file_size": self.size,
            "mime_type": self.mime_type,
        }


def file_size(file):
    """Byte size of an uploaded werkzeug FileStorage, without consuming it."""
    stream = file.stream
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def validate_upload(file, policy):
    """
    Reject a file by declared MIME type and byte size.

    Runs before anything touches storage. Returns the byte size.
    """
    if file is None or not file.filename:
        raise ValidationError("File is required")

    if file.mimetype not in policy.allowed_types:
        raise ValidationError(policy.type_error())

    size = file_size(file)
    if size > policy.max_bytes:
        raise ValidationError(policy.size_error())

    return size


def file_extension(original_name, mime_type=None):
    """
    Lowercased extension of the client filename, or one guessed from the
    MIME type. Non-ASCII names keep their extension.
    """
    ext = os.path.splitext(original_name or "")[1].lstrip(".").lower()
    if ext and ext.isascii() and ext.isalnum():
        return ext

    guessed = mimetypes.guess_extension(mime_type or "") if mime_type else None
    return guessed.lstrip(".") if guessed else "bin"


def unique_filename(original_name, prefix="", mime_type=None):
    ext = file_extension(original_name, mime_type)
    stamp = int(time.time() * 1000)
    return f"{prefix}{stamp}_{secrets.token_hex(3)}.{ext}"


def upload_file(file, *, bucket, policy, folder="", prefix=""):
    """
    Validate and store an uploaded file, returning where it landed.

    No retry and no cleanup on failure: a storage error propagates as
    StorageError.
    """
    size = validate_upload(file, policy)

    filename = unique_filename(file.filename, prefix=prefix, mime_type=file.mimetype)
    folder = (folder or "").strip("/")
    path = f"{folder}/{filename}" if folder else filename

    file.stream.seek(0)
    data = file.stream.read()

    storage = get_storage()
    storage.upload(bucket, path, data, file.mimetype)

    return StoredObject(
        bucket=bucket,
        path=path,
        public_url=storage.public_url(bucket, path),
        filename=filename,
        original_filename=file.filename,
        size=size,
        mime_type=file.mimetype,
    )


def policy_for_kind(kind: Optional[str]):
    policy = POLICIES_BY_KIND.get((kind or "image").lower())
    if policy is None:
        raise ValidationError(f"Unknown upload kind: {kind}")
    return policy
