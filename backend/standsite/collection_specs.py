# standsite/collection_specs.py
"""Registry of ordered list collections managed from the admin panel.

Tags, FAQ entries, portfolio items, group companies and similar lists all
share ``collection_items``; a ``CollectionSpec`` says which fields an item
carries, whether it has a slug (and which field derives it), which fields
hold uploaded media and which public paths show the list.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from standsite.sections import Field, color, flag, richtext, text, url


@dataclass(frozen=True)
class CollectionSpec:
    key: str
    label: str  # singular, used in messages
    fields: Tuple[Field, ...]
    slug_source: Optional[str] = None
    media_fields: Tuple[str, ...] = ()
    bucket: Optional[str] = None
    revalidate: Tuple[str, ...] = ()

    @property
    def has_slug(self):
        return self.slug_source is not None

    def defaults(self):
        return {f.name: f.default_value() for f in self.fields}


COLLECTIONS: Tuple[CollectionSpec, ...] = (
    CollectionSpec(
        "blog-tags", "tag",
        (text("name", required=True), color("color", "#6b7280")),
        slug_source="name",
        revalidate=("/blog",),
    ),
    CollectionSpec(
        "blog-categories", "category",
        (text("name", required=True), text("description"), color("color", "#a5cd39")),
        slug_source="name",
        revalidate=("/blog",),
    ),
    CollectionSpec(
        "faq-items", "FAQ item",
        (text("question", required=True), richtext("answer", required=True)),
        revalidate=("/custom-exhibition-stands-dubai-uae",),
    ),
    CollectionSpec(
        "portfolio-items", "portfolio item",
        (
            text("title", required=True),
            url("image_url", required=True),
            text("alt_text"),
            text("category"),
            text("description"),
        ),
        media_fields=("image_url",),
        bucket="portfolio",
        revalidate=("/", "/portfolio"),
    ),
    CollectionSpec(
        "group-companies", "group company",
        (
            text("region", required=True),
            text("description"),
            text("address", required=True),
            text("phone"),
            text("email"),
            url("website"),
            url("logo_url"),
        ),
        media_fields=("logo_url",),
        bucket="contact-images",
        revalidate=("/contact-us",),
    ),
    CollectionSpec(
        "business-stats", "statistic",
        (text("label", required=True), text("value", required=True), text("suffix")),
        revalidate=("/",),
    ),
    CollectionSpec(
        "setup-steps", "setup step",
        (text("title", required=True), richtext("description"), url("icon_url")),
        media_fields=("icon_url",),
        bucket="setup-process-images",
        revalidate=("/",),
    ),
    CollectionSpec(
        "instagram-posts", "Instagram post",
        (url("image_url", required=True), url("post_url"), text("caption"), flag("is_video")),
        media_fields=("image_url",),
        bucket="instagram-images",
        revalidate=("/",),
    ),
    CollectionSpec(
        "hero-typing-texts", "typing text",
        (text("text", required=True),),
        revalidate=("/",),
    ),
)

_BY_KEY: Dict[str, CollectionSpec] = {spec.key: spec for spec in COLLECTIONS}


def get_collection_spec(key) -> Optional[CollectionSpec]:
    return _BY_KEY.get(key)


def all_collection_specs():
    return list(COLLECTIONS)
