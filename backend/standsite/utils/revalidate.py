"""Public site cache invalidation.

After a content mutation the public page that renders it must be rebuilt.
The public site exposes a revalidation hook; we POST each path to it.
Failures never fail the request that triggered them: the content change is
already committed, a stale page is the lesser problem.
"""
from __future__ import annotations

from typing import Iterable, List

import requests
from flask import current_app

EVENTS_LISTING_PATH = "/top-trade-shows-in-uae-saudi-arabia-middle-east"
BLOG_LISTING_PATH = "/blog"
CITIES_LISTING_PATH = "/cities"


def event_path(slug: str) -> str:
    return f"{EVENTS_LISTING_PATH}/{slug}"


def blog_post_path(slug: str) -> str:
    return f"{BLOG_LISTING_PATH}/{slug}"


def city_path(slug: str) -> str:
    return f"{CITIES_LISTING_PATH}/{slug}"


def _unique(paths: Iterable[str]) -> List[str]:
    seen = []
    for path in paths:
        if path and path not in seen:
            seen.append(path)
    return seen


def revalidate_paths(*paths: str) -> List[str]:
    """
    Ask the public site to rebuild ``paths``.

    Returns the paths that were revalidated successfully.
    """
    url = current_app.config.get("REVALIDATE_URL")
    targets = _unique(paths)

    if not url:
        current_app.logger.debug("Revalidation skipped, no REVALIDATE_URL: %s", targets)
        return []

    headers = {"Content-Type": "application/json"}
    secret = current_app.config.get("REVALIDATE_SECRET")
    if secret:
        headers["x-revalidate-secret"] = secret

    timeout = current_app.config.get("REVALIDATE_TIMEOUT", 5)
    done = []

    for path in targets:
        try:
            response = requests.post(url, json={"path": path}, headers=headers, timeout=timeout)
            if response.status_code >= 300:
                current_app.logger.warning(
                    "Revalidation of %s returned HTTP %s", path, response.status_code
                )
                continue
            done.append(path)
        except requests.RequestException as exc:
            current_app.logger.warning("Error during revalidation of %s: %s", path, exc)

    return done


__all__ = [
    "revalidate_paths",
    "event_path",
    "blog_post_path",
    "city_path",
    "EVENTS_LISTING_PATH",
    "BLOG_LISTING_PATH",
    "CITIES_LISTING_PATH",
]
