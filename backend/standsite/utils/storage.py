# standsite/utils/storage.py
"""Object storage backends.

Everything that stores uploaded bytes goes through ``get_storage()``:

- ``LocalStorage`` keeps objects under ``UPLOAD_FOLDER/<bucket>/<path>`` and
  serves them from ``MEDIA_URL_PREFIX`` (development, tests).
- ``SupabaseStorage`` talks to the hosted storage REST API
  (``/storage/v1/object/...``) with the service role key.
"""
from __future__ import annotations

import mimetypes
import os
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import quote, unquote, urlparse

import requests
from flask import current_app
from werkzeug.security import safe_join

from standsite.errors import StorageError

_EXTENSION_KEY = "standsite.storage"


class StorageBackend:
    """Bucket-scoped object storage: upload, remove, list, public URL."""

    def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> None:
        raise NotImplementedError

    def remove(self, bucket: str, paths: List[str]) -> None:
        raise NotImplementedError

    def list(self, bucket: str, folder: str = "", *, limit: int = 100, offset: int = 0) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def public_url(self, bucket: str, path: str) -> str:
        raise NotImplementedError


class LocalStorage(StorageBackend):
    def __init__(self, root: str, url_prefix: str = "/media"):
        self.root = os.path.abspath(root)
        self.url_prefix = url_prefix.rstrip("/")

    def _resolve(self, bucket: str, path: str = "") -> str:
        bucket_root = safe_join(self.root, bucket)
        if bucket_root is None:
            raise StorageError(f"Invalid bucket name: {bucket}", 400)
        if not path:
            return bucket_root
        full_path = safe_join(bucket_root, path)
        if full_path is None:
            raise StorageError(f"Invalid object path: {path}", 400)
        return full_path

    def upload(self, bucket, path, data, content_type):
        full_path = self._resolve(bucket, path)
        if os.path.exists(full_path):
            raise StorageError("The resource already exists", 409)
        os.makedirs(os.path.dirname(full_path), exist_ok=True)
        with open(full_path, "wb") as fh:
            fh.write(data)

    def remove(self, bucket, paths):
        for path in paths:
            full_path = self._resolve(bucket, path)
            if os.path.isfile(full_path):
                os.remove(full_path)

    def list(self, bucket, folder="", *, limit=100, offset=0):
        directory = self._resolve(bucket, folder)
        if not os.path.isdir(directory):
            return []

        entries = []
        with os.scandir(directory) as it:
            for entry in it:
                if not entry.is_file():
                    continue
                stat = entry.stat()
                modified = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc).isoformat()
                entries.append({
                    "name": entry.name,
                    "size": stat.st_size,
                    "mime_type": mimetypes.guess_type(entry.name)[0],
                    "created_at": modified,
                    "updated_at": modified,
                })

        entries.sort(key=lambda e: (e["created_at"], e["name"]), reverse=True)
        return entries[offset:offset + limit]

    def public_url(self, bucket, path):
        return f"{self.url_prefix}/{bucket}/{quote(path)}"

    def exists(self, bucket, path):
        return os.path.isfile(self._resolve(bucket, path))


class SupabaseStorage(StorageBackend):
    def __init__(self, base_url: str, service_key: str, timeout: float = 30):
        self.base_url = base_url.rstrip("/")
        self.service_key = service_key
        self.timeout = timeout

    def _headers(self, content_type: Optional[str] = "application/json") -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.service_key}",
            "apikey": self.service_key,
        }
        if content_type:
            headers["Content-Type"] = content_type
        return headers

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        try:
            response = requests.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise StorageError(f"Storage request failed: {exc}") from exc

        if response.status_code >= 300:
            try:
                message = response.json().get("message") or response.text
            except ValueError:
                message = response.text
            status = 409 if response.status_code == 409 else 500
            raise StorageError(f"Storage error ({response.status_code}): {message}", status)
        return response

    def upload(self, bucket, path, data, content_type):
        headers = self._headers(content_type)
        headers["x-upsert"] = "false"
        headers["cache-control"] = "3600"
        self._request(
            "POST",
            f"{self.base_url}/storage/v1/object/{bucket}/{quote(path)}",
            data=data,
            headers=headers,
        )

    def remove(self, bucket, paths):
        if not paths:
            return
        self._request(
            "DELETE",
            f"{self.base_url}/storage/v1/object/{bucket}",
            json={"prefixes": list(paths)},
            headers=self._headers(),
        )

    def list(self, bucket, folder="", *, limit=100, offset=0):
        response = self._request(
            "POST",
            f"{self.base_url}/storage/v1/object/list/{bucket}",
            json={
                "prefix": folder,
                "limit": limit,
                "offset": offset,
                "sortBy": {"column": "created_at", "order": "desc"},
            },
            headers=self._headers(),
        )

        entries = []
        for item in response.json() or []:
            # Folders come back without an id
            if not item.get("id"):
                continue
            metadata = item.get("metadata") or {}
            entries.append({
                "name": item.get("name"),
                "size": metadata.get("size") or 0,
                "mime_type": metadata.get("mimetype"),
                "created_at": item.get("created_at"),
                "updated_at": item.get("updated_at"),
            })
        return entries

    def public_url(self, bucket, path):
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{quote(path)}"


def build_storage(config) -> StorageBackend:
    backend = (config.get("STORAGE_BACKEND") or "local").lower()

    if backend == "supabase":
        return SupabaseStorage(
            config["SUPABASE_URL"],
            config["SUPABASE_SERVICE_ROLE_KEY"],
            timeout=config.get("STORAGE_TIMEOUT", 30),
        )

    if backend == "local":
        return LocalStorage(
            config.get("UPLOAD_FOLDER", "uploads"),
            config.get("MEDIA_URL_PREFIX", "/media"),
        )

    raise RuntimeError(f"Unknown STORAGE_BACKEND: {backend}")


def init_storage(app) -> StorageBackend:
    storage = build_storage(app.config)
    app.extensions[_EXTENSION_KEY] = storage
    return storage


def get_storage() -> StorageBackend:
    storage = current_app.extensions.get(_EXTENSION_KEY)
    if storage is None:
        storage = init_storage(current_app)
    return storage


def storage_path_from_url(file_url: Optional[str], bucket: str) -> Optional[str]:
    """
    Recover the object path inside ``bucket`` from a stored public URL.

    Bare object paths ("events/x.jpg") are returned unchanged. URLs and site
    paths that do not point into the bucket give None, so callers never
    delete an object the row does not own.
    """
    if not file_url:
        return None

    path = unquote(urlparse(file_url).path) if "://" in file_url else unquote(file_url)
    marker = f"/{bucket}/"
    if marker in path:
        return path.split(marker, 1)[1] or None
    if "://" in file_url or path.startswith("/"):
        return None
    return path


def remove_objects_quietly(bucket: str, paths: Iterable[Optional[str]]) -> bool:
    """
    Best-effort removal: storage failures are logged, never raised.
    """
    targets = [p for p in paths if p]
    if not targets:
        return True

    try:
        get_storage().remove(bucket, targets)
        return True
    except (StorageError, OSError) as exc:
        current_app.logger.warning(
            "Error deleting files from storage bucket %s %s: %s", bucket, targets, exc
        )
        return False
