from .dates import iso


def normalize_document(document, download_url=None):
    data = {
        "id": document.id,
        "filename": document.filename,
        "original_filename": document.original_filename,
        "file_path": document.file_path,
        "file_size": document.file_size,
        "mime_type": document.mime_type,
        "title": document.title,
        "description": document.description,
        "version": document.version,
        "is_active": document.is_active,
        "is_current": document.is_current,
        "download_count": document.download_count,
        "created_at": iso(document.created_at),
        "updated_at": iso(document.updated_at),
    }
    if download_url is not None:
        data["downloadUrl"] = download_url
    return data
