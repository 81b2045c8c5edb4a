# standsite/application/event_submissions.py
"""Enquiries sent from an event's detail page and their admin inbox."""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Tuple

from flask import current_app
from sqlalchemy import or_

from standsite.application.contact import EMAIL_RE, optional_text, required_text
from standsite.errors import NotFoundError, ValidationError
from standsite.extensions import db
from standsite.models.event import Event
from standsite.models.event_submission import EVENT_SUBMISSION_STATUSES, EventSubmission
from standsite.utils.transaction import transactional

SPAM_KEYWORDS = (
    "viagra", "casino", "lottery", "winner", "congratulations",
    "click here", "free money", "make money fast", "work from home",
    "weight loss", "lose weight", "diet pills", "crypto", "bitcoin",
)
SUSPICIOUS_EMAIL_DOMAINS = ("tempmail", "guerrillamail", "10minutemail", "mailinator")
URL_RE = re.compile(r"https?://\S+", re.IGNORECASE)
REPEATED_CHARS_RE = re.compile(r"(.)\1{4,}")
MAX_URLS = 2

OPTIONAL_TEXT_FIELDS = (
    "phone", "message", "company_name", "exhibition_name", "budget",
    "attachment_url", "attachment_filename",
)

SORT_COLUMNS = {
    "created_at": EventSubmission.created_at,
    "name": EventSubmission.name,
    "email": EventSubmission.email,
    "status": EventSubmission.status,
}

# action -> column values
BULK_ACTIONS = {
    "mark_read": {"status": "read"},
    "mark_unread": {"status": "new"},
    "mark_replied": {"status": "replied"},
    "archive": {"status": "archived"},
    "mark_spam": {"is_spam": True, "status": "archived"},
    "mark_not_spam": {"is_spam": False, "status": "new"},
    "update": None,
}


def spam_reasons(name: str, email: str, message: Optional[str]) -> List[str]:
    """Why an enquiry looks like spam; an empty list means it does not."""
    reasons = []
    text = f"{name} {email} {message or ''}".lower()

    for keyword in SPAM_KEYWORDS:
        if keyword in text:
            reasons.append(f"Contains spam keyword: {keyword}")

    if len(URL_RE.findall(message or "")) > MAX_URLS:
        reasons.append("Too many links")

    if REPEATED_CHARS_RE.search(message or ""):
        reasons.append("Contains repeated characters")

    domain = email.rsplit("@", 1)[-1].lower()
    if any(marker in domain for marker in SUSPICIOUS_EMAIL_DOMAINS):
        reasons.append("Disposable email domain")

    return reasons


def _event_or_400(event_id) -> Optional[str]:
    if event_id in (None, ""):
        return None
    if not isinstance(event_id, str) or db.session.get(Event, event_id) is None:
        raise ValidationError("Invalid event selected.")
    return event_id


def submit_event_enquiry(
    data: Dict[str, Any],
    *,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
    referrer: Optional[str] = None,
) -> EventSubmission:
    """
    Store a public enquiry. Spam is kept, flagged and filed as archived so
    it never shows up as new in the inbox.
    """
    if not isinstance(data, dict):
        raise ValidationError("Invalid request body")

    name = required_text(data, "name", "Name")
    email = required_text(data, "email", "Email")
    if not EMAIL_RE.match(email):
        raise ValidationError("Invalid email format")

    submission = EventSubmission()
    submission.event_id = _event_or_400(data.get("event_id"))
    submission.name = name
    submission.email = email.lower()
    for key in OPTIONAL_TEXT_FIELDS:
        setattr(submission, key, optional_text(data, key))

    size = data.get("attachment_size")
    if size is not None and (isinstance(size, bool) or not isinstance(size, int)):
        raise ValidationError("attachment_size must be an integer")
    submission.attachment_size = size or None

    reasons = spam_reasons(name, email, submission.message)
    submission.is_spam = bool(reasons)
    submission.status = "archived" if reasons else "new"
    submission.ip_address = ip_address or "unknown"
    submission.user_agent = (user_agent or "unknown")[:500]
    submission.referrer = referrer or "direct"

    with transactional(messages={"foreign_key": "Invalid event selected."}):
        db.session.add(submission)

    if reasons:
        current_app.logger.info("Spam event enquiry detected: id=%s reasons=%s", submission.id, reasons)

    return submission


def list_event_submissions(
    *,
    page: int = 1,
    limit: int = 20,
    status: Optional[str] = None,
    event_id: Optional[str] = None,
    search: Optional[str] = None,
    is_spam: Optional[bool] = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
) -> Tuple[List[EventSubmission], int]:
    if sort_by not in SORT_COLUMNS:
        raise ValidationError(f"Invalid sort_by: {sort_by}")
    if sort_order not in ("asc", "desc"):
        raise ValidationError("sort_order must be asc or desc")

    query = EventSubmission.query

    if status:
        if status not in EVENT_SUBMISSION_STATUSES:
            raise ValidationError(f"Invalid status: {status}")
        query = query.filter(EventSubmission.status == status)

    if event_id:
        query = query.filter(EventSubmission.event_id == event_id)

    if is_spam is not None:
        query = query.filter(EventSubmission.is_spam.is_(is_spam))

    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(
            EventSubmission.name.ilike(pattern),
            EventSubmission.email.ilike(pattern),
            EventSubmission.company_name.ilike(pattern),
            EventSubmission.message.ilike(pattern),
        ))

    total = query.count()

    column = SORT_COLUMNS[sort_by]
    rows = (
        query.order_by(column.asc() if sort_order == "asc" else column.desc(), EventSubmission.id.asc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return rows, total


def get_event_submission(submission_id: str) -> EventSubmission:
    submission = db.session.get(EventSubmission, submission_id)
    if submission is None:
        raise NotFoundError("Submission not found")
    return submission


def _clean_update(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationError("Invalid request body")

    fields: Dict[str, Any] = {}
    if "status" in data:
        if data["status"] not in EVENT_SUBMISSION_STATUSES:
            raise ValidationError(f"Invalid status: {data['status']}")
        fields["status"] = data["status"]
    if "is_spam" in data:
        if not isinstance(data["is_spam"], bool):
            raise ValidationError("is_spam must be true or false")
        fields["is_spam"] = data["is_spam"]
    if "admin_notes" in data:
        if data["admin_notes"] is not None and not isinstance(data["admin_notes"], str):
            raise ValidationError("admin_notes must be a string")
        fields["admin_notes"] = data["admin_notes"]
    return fields


def update_event_submission(submission_id: str, data: Dict[str, Any]) -> EventSubmission:
    submission = get_event_submission(submission_id)
    fields = _clean_update(data)

    with transactional():
        for name, value in fields.items():
            setattr(submission, name, value)

    return submission


def delete_event_submission(submission_id: str) -> EventSubmission:
    submission = get_event_submission(submission_id)
    with transactional():
        db.session.delete(submission)
    return submission


def _assert_id_list(ids) -> List[str]:
    if not isinstance(ids, list) or not ids:
        raise ValidationError("Submission IDs are required")
    return ids


def bulk_update_event_submissions(action: str, submission_ids: List[str], data: Any = None) -> List[EventSubmission]:
    _assert_id_list(submission_ids)
    if action not in BULK_ACTIONS:
        raise ValidationError("Invalid action")

    fields = BULK_ACTIONS[action]
    if fields is None:
        fields = _clean_update(data or {})
        if not fields:
            raise ValidationError("No valid fields provided for update")

    rows = EventSubmission.query.filter(EventSubmission.id.in_(submission_ids)).all()

    with transactional():
        for row in rows:
            for name, value in fields.items():
                setattr(row, name, value)

    return rows


def bulk_delete_event_submissions(submission_ids: List[str]) -> List[Dict[str, str]]:
    """Delete the given enquiries; returns id, name and email of each one removed."""
    _assert_id_list(submission_ids)
    rows = EventSubmission.query.filter(EventSubmission.id.in_(submission_ids)).all()
    deleted = [{"id": row.id, "name": row.name, "email": row.email} for row in rows]

    with transactional():
        for row in rows:
            db.session.delete(row)

    return deleted
