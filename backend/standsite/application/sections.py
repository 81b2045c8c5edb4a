# standsite/application/sections.py
"""Section data binder.

One implementation for every editable page section. A section is a set of
rows in ``page_sections`` sharing a ``section_key``; the active row is what
the public site renders.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy import update

from standsite.domain.invariants.content import validate_content
from standsite.errors import NotFoundError, ValidationError
from standsite.extensions import db
from standsite.models.section import PageSection
from standsite.sections import SectionSpec, all_section_specs, get_section_spec
from standsite.utils.optimistic_lock import enforce_optimistic_lock
from standsite.utils.revalidate import revalidate_paths
from standsite.utils.transaction import transactional

# Concurrent activations of the same key collide on the partial unique index
ACTIVATION_MESSAGES = {
    "unique": "This section was changed by another save at the same time, please retry",
}

# Keys the admin form sends back that are not part of the section's copy
_ROW_KEYS = ("id", "is_active", "created_at", "updated_at", "updated_by", "section_key")


@dataclass
class SectionState:
    spec: SectionSpec
    state: str  # "ready" | "empty"
    row: Optional[PageSection]
    content: Dict[str, Any]


def get_spec_or_404(key: str) -> SectionSpec:
    spec = get_section_spec(key)
    if spec is None:
        raise NotFoundError(f"Unknown section: {key}")
    return spec


def _active_row_query(key: str):
    return (
        PageSection.query
        .filter_by(section_key=key, is_active=True)
        .order_by(PageSection.updated_at.desc())
    )


def _deactivate_others(key: str, keep_id: Optional[str]) -> None:
    stmt = (
        update(PageSection)
        .where(PageSection.section_key == key, PageSection.is_active.is_(True))
        .values(is_active=False)
    )
    if keep_id is not None:
        stmt = stmt.where(PageSection.id != keep_id)
    db.session.execute(stmt)


def load_section(key: str) -> SectionState:
    """
    Read the active row of a section.

    With no active row the state is "empty" and the content is the
    section's defaults. Nothing is written on this path; seeding is an
    explicit operation (``seed_section``).
    """
    spec = get_spec_or_404(key)
    row = _active_row_query(key).first()

    if row is None:
        return SectionState(spec, "empty", None, spec.defaults())

    content = spec.defaults()
    content.update(row.content or {})
    return SectionState(spec, "ready", row, content)


def save_section(
    key: str,
    payload: Dict[str, Any],
    *,
    actor_id: Optional[str] = None,
) -> PageSection:
    """
    Validate the form state and make it the section's single active row.

    Deactivating the previous row and writing the new one happen in one
    transaction; the partial unique index turns a concurrent activation into
    a 409 instead of a second active row.
    """
    spec = get_spec_or_404(key)

    if not isinstance(payload, dict):
        raise ValidationError("Invalid request body")

    payload = dict(payload)
    row_id = payload.get("id")
    for row_key in _ROW_KEYS:
        payload.pop(row_key, None)

    if row_id:
        row = db.session.get(PageSection, row_id)
        if row is None or row.section_key != key:
            raise NotFoundError("Section row not found")
    else:
        row = _active_row_query(key).with_for_update().first()

    enforce_optimistic_lock(row)

    base = spec.defaults()
    if row is not None:
        base.update(row.content or {})

    content = validate_content(spec.fields, payload, base)

    with transactional(messages=ACTIVATION_MESSAGES, unique_status=409):
        _deactivate_others(key, row.id if row is not None else None)

        if row is None:
            row = PageSection()
            row.section_key = key
            db.session.add(row)

        row.content = content
        row.is_active = True
        row.updated_by = actor_id
        db.session.flush()

    revalidate_paths(*spec.revalidate)
    return row


def seed_section(key: str, *, actor_id: Optional[str] = None):
    """
    Write the section's defaults as its active row if it has none.

    Returns (row, created).
    """
    spec = get_spec_or_404(key)
    existing = _active_row_query(key).first()
    if existing is not None:
        return existing, False

    with transactional(messages=ACTIVATION_MESSAGES, unique_status=409):
        row = PageSection()
        row.section_key = key
        row.content = spec.defaults()
        row.is_active = True
        row.updated_by = actor_id
        db.session.add(row)
        db.session.flush()

    revalidate_paths(*spec.revalidate)
    return row, True


def activate_section_row(key: str, row_id: str, *, actor_id: Optional[str] = None) -> PageSection:
    """Make a previously saved row the active one (e.g. to roll back copy)."""
    spec = get_spec_or_404(key)
    row = db.session.get(PageSection, row_id)
    if row is None or row.section_key != key:
        raise NotFoundError("Section row not found")

    with transactional(messages=ACTIVATION_MESSAGES, unique_status=409):
        _deactivate_others(key, row.id)
        row.is_active = True
        row.updated_by = actor_id
        db.session.flush()

    revalidate_paths(*spec.revalidate)
    return row


def section_history(key: str) -> List[PageSection]:
    get_spec_or_404(key)
    return (
        PageSection.query
        .filter_by(section_key=key)
        .order_by(PageSection.updated_at.desc(), PageSection.created_at.desc())
        .all()
    )


def list_sections() -> List[Dict[str, Any]]:
    active = {
        row.section_key: row
        for row in PageSection.query.filter_by(is_active=True).all()
    }

    return [
        {
            "key": spec.key,
            "label": spec.label,
            "fields": spec.field_names,
            "has_active_row": spec.key in active,
            "updated_at": active[spec.key].updated_at.isoformat() if spec.key in active else None,
        }
        for spec in all_section_specs()
    ]
