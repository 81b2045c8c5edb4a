# standsite/application/company_profile.py
"""Company profile PDF: uploaded versions, one of which is the current download."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import update

from standsite.errors import NotFoundError, ValidationError
from standsite.extensions import db
from standsite.models.company_profile import CompanyProfileDocument
from standsite.utils.media import DOCUMENT_POLICY, upload_file
from standsite.utils.revalidate import revalidate_paths
from standsite.utils.storage import get_storage, remove_objects_quietly
from standsite.utils.transaction import transactional

BUCKET = "company-profile-documents"
FOLDER = "documents"

# Public pages that link the current PDF
PUBLIC_PATHS = ("/", "/about-us")


def download_url(document: CompanyProfileDocument) -> str:
    return get_storage().public_url(BUCKET, document.file_path)


def _clear_current(except_id: Optional[str]) -> None:
    stmt = (
        update(CompanyProfileDocument)
        .where(CompanyProfileDocument.is_current.is_(True))
        .values(is_current=False)
    )
    if except_id is not None:
        stmt = stmt.where(CompanyProfileDocument.id != except_id)
    db.session.execute(stmt)


def _text(value) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("Text fields must be strings")
    return value.strip() or None


def list_documents() -> List[CompanyProfileDocument]:
    return CompanyProfileDocument.query.order_by(CompanyProfileDocument.created_at.desc()).all()


def get_document(document_id: str) -> CompanyProfileDocument:
    document = db.session.get(CompanyProfileDocument, document_id)
    if document is None:
        raise NotFoundError("Document not found")
    return document


def get_current_document() -> CompanyProfileDocument:
    document = (
        CompanyProfileDocument.query
        .filter_by(is_current=True, is_active=True)
        .order_by(CompanyProfileDocument.updated_at.desc())
        .first()
    )
    if document is None:
        raise NotFoundError("No current company profile document found")
    return document


def create_document(
    file,
    *,
    title: Optional[str],
    description: Optional[str] = None,
    version: Optional[str] = None,
    is_active: bool = False,
    is_current: bool = False,
) -> CompanyProfileDocument:
    """
    Upload a PDF and record it.

    The file is validated before anything is uploaded. If the row cannot be
    written the uploaded object is removed again.
    """
    if file is None or not file.filename:
        raise ValidationError("No file provided")

    title = _text(title)
    if not title:
        raise ValidationError("Title is required")

    stored = upload_file(file, bucket=BUCKET, policy=DOCUMENT_POLICY, folder=FOLDER, prefix="company-profile-")

    document = CompanyProfileDocument()
    document.filename = stored.filename
    document.original_filename = stored.original_filename
    document.file_path = stored.path
    document.file_size = stored.size
    document.mime_type = stored.mime_type
    document.title = title
    document.description = _text(description)
    document.version = _text(version) or "1.0"
    document.is_active = is_active or is_current
    document.is_current = is_current

    try:
        with transactional():
            db.session.add(document)
            db.session.flush()
            if is_current:
                _clear_current(document.id)
    except Exception:
        remove_objects_quietly(BUCKET, [stored.path])
        raise

    revalidate_paths(*PUBLIC_PATHS)
    return document


def update_document(document_id: str, data: Dict[str, Any]) -> CompanyProfileDocument:
    document = get_document(document_id)

    if not isinstance(data, dict):
        raise ValidationError("Invalid request body")

    if "title" in data:
        title = _text(data["title"])
        if not title:
            raise ValidationError("Title cannot be empty")
        data = dict(data, title=title)

    for flag in ("is_active", "is_current"):
        if flag in data and not isinstance(data[flag], bool):
            raise ValidationError(f"{flag} must be true or false")

    with transactional():
        if "title" in data:
            document.title = data["title"]
        if "description" in data:
            document.description = _text(data["description"])
        if "version" in data:
            document.version = _text(data["version"]) or document.version
        if "is_active" in data:
            document.is_active = data["is_active"]
            if not document.is_active:
                document.is_current = False
        if data.get("is_current"):
            if not document.is_active:
                raise ValidationError("Document not found or not active")
            _clear_current(document.id)
            document.is_current = True
        elif data.get("is_current") is False:
            document.is_current = False

    revalidate_paths(*PUBLIC_PATHS)
    return document


def set_current_document(document_id: str) -> CompanyProfileDocument:
    """Make exactly one active document current, in one transaction."""
    document = db.session.get(CompanyProfileDocument, document_id)
    if document is None or not document.is_active:
        raise ValidationError("Document not found or not active")

    with transactional():
        _clear_current(document.id)
        document.is_current = True

    revalidate_paths(*PUBLIC_PATHS)
    return document


def delete_document(document_id: str) -> CompanyProfileDocument:
    document = get_document(document_id)
    path = document.file_path

    with transactional():
        db.session.delete(document)

    remove_objects_quietly(BUCKET, [path])
    revalidate_paths(*PUBLIC_PATHS)
    return document


def record_download(document_id: str) -> CompanyProfileDocument:
    document = get_document(document_id)
    if not document.is_active:
        raise NotFoundError("Document not found")

    with transactional():
        document.download_count = CompanyProfileDocument.download_count + 1

    return document
