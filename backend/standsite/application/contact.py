# standsite/application/contact.py
"""Contact form submissions: public submit with spam scoring, admin inbox."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from dateutil.parser import ParserError, parse
from flask import current_app
from sqlalchemy import or_

from standsite.errors import NotFoundError, ValidationError
from standsite.extensions import db
from standsite.models.base import utc_now
from standsite.models.contact_submission import SUBMISSION_STATUSES, ContactSubmission
from standsite.utils.transaction import transactional

EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")

SPAM_KEYWORDS = (
    "viagra", "casino", "lottery", "winner", "congratulations",
    "click here", "free money", "make money fast", "work from home",
    "guaranteed", "no risk", "limited time", "act now",
)
SUSPICIOUS_EMAIL_PATTERNS = (
    re.compile(r"\d{5,}@"),
    re.compile(r"@[^.]+\.(tk|ml|ga|cf)$"),
)
REPEATED_CHARS_RE = re.compile(r"(.)\1{4,}")
SPAM_THRESHOLD = 0.5

OPTIONAL_TEXT_FIELDS = ("exhibition_name", "company_name", "phone")
ATTACHMENT_FIELDS = ("attachment_url", "attachment_filename", "attachment_type")


@dataclass
class SpamResult:
    score: float = 0.0
    reasons: List[str] = field(default_factory=list)

    @property
    def is_spam(self):
        return self.score >= SPAM_THRESHOLD

    def add(self, points, reason):
        self.score += points
        self.reasons.append(reason)


def detect_spam(name: str, email: str, message: str, company_name: Optional[str] = None) -> SpamResult:
    """
    Heuristic score in [0, 1]; 0.5 or more marks the submission as spam.
    """
    result = SpamResult()
    text = f"{name} {message} {company_name or ''}".lower()

    for keyword in SPAM_KEYWORDS:
        if keyword in text:
            result.add(0.3, f"Contains spam keyword: {keyword}")

    if message:
        caps_ratio = sum(1 for c in message if "A" <= c <= "Z") / len(message)
        if caps_ratio > 0.5 and len(message) > 20:
            result.add(0.2, "Excessive use of capital letters")

    for pattern in SUSPICIOUS_EMAIL_PATTERNS:
        if pattern.search(email):
            result.add(0.3, "Suspicious email pattern")

    if len(message) < 10:
        result.add(0.2, "Message too short")
    elif len(message) > 2000:
        result.add(0.1, "Message unusually long")

    if REPEATED_CHARS_RE.search(message):
        result.add(0.2, "Contains repeated characters")

    result.score = round(min(result.score, 1.0), 2)
    return result


def required_text(data, name, label):
    value = data.get(name)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} is required")
    return value.strip()


def optional_text(data, name):
    value = data.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string")
    return value.strip() or None


def submit_contact_form(
    data: Dict[str, Any],
    *,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
    referrer: Optional[str] = None,
) -> Tuple[ContactSubmission, SpamResult]:
    if not isinstance(data, dict):
        raise ValidationError("Invalid request body")

    name = required_text(data, "name", "Name")
    email = required_text(data, "email", "Email")
    message = required_text(data, "message", "Message")

    if not EMAIL_RE.match(email):
        raise ValidationError("Invalid email format")

    spam = detect_spam(name, email, message, optional_text(data, "company_name"))

    submission = ContactSubmission()
    submission.name = name
    submission.email = email.lower()
    submission.message = message
    for key in OPTIONAL_TEXT_FIELDS + ATTACHMENT_FIELDS:
        setattr(submission, key, optional_text(data, key))

    size = data.get("attachment_size")
    if size is not None and (isinstance(size, bool) or not isinstance(size, int)):
        raise ValidationError("attachment_size must be an integer")
    submission.attachment_size = size or None
    submission.agreed_to_terms = bool(data.get("agreed_to_terms"))

    submission.status = "spam" if spam.is_spam else "new"
    submission.is_spam = spam.is_spam
    submission.spam_score = spam.score
    submission.spam_reasons = spam.reasons
    submission.ip_address = ip_address or "unknown"
    submission.user_agent = (user_agent or "unknown")[:500]
    submission.referrer = referrer or "direct"

    with transactional():
        db.session.add(submission)

    if spam.is_spam:
        current_app.logger.info(
            "Spam submission detected: id=%s score=%s reasons=%s",
            submission.id, spam.score, spam.reasons,
        )

    return submission, spam


def _parse_ts(name, value) -> datetime:
    try:
        return parse(value)
    except (ParserError, ValueError, OverflowError):
        raise ValidationError(f"Invalid date for {name}")


def list_submissions(
    *,
    page: int = 1,
    limit: int = 20,
    status: Optional[str] = None,
    search: Optional[str] = None,
    is_spam: Optional[bool] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> Tuple[List[ContactSubmission], int]:
    query = ContactSubmission.query

    if status:
        if status not in SUBMISSION_STATUSES:
            raise ValidationError(f"Invalid status: {status}")
        query = query.filter(ContactSubmission.status == status)

    if is_spam is not None:
        query = query.filter(ContactSubmission.is_spam.is_(is_spam))

    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(
            ContactSubmission.name.ilike(pattern),
            ContactSubmission.email.ilike(pattern),
            ContactSubmission.company_name.ilike(pattern),
            ContactSubmission.message.ilike(pattern),
        ))

    if start_date:
        query = query.filter(ContactSubmission.created_at >= _parse_ts("start_date", start_date))
    if end_date:
        query = query.filter(ContactSubmission.created_at <= _parse_ts("end_date", end_date))

    total = query.count()
    rows = (
        query.order_by(ContactSubmission.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return rows, total


def get_submission(submission_id: str) -> ContactSubmission:
    submission = db.session.get(ContactSubmission, submission_id)
    if submission is None:
        raise NotFoundError("Submission not found")
    return submission


def update_submission(submission_id: str, data: Dict[str, Any]) -> ContactSubmission:
    submission = get_submission(submission_id)

    if not isinstance(data, dict):
        raise ValidationError("Invalid request body")

    status = data.get("status")
    if status is not None and status not in SUBMISSION_STATUSES:
        raise ValidationError(f"Invalid status: {status}")
    if "is_spam" in data and not isinstance(data["is_spam"], bool):
        raise ValidationError("is_spam must be true or false")
    if "admin_notes" in data and data["admin_notes"] is not None and not isinstance(data["admin_notes"], str):
        raise ValidationError("admin_notes must be a string")

    with transactional():
        if status:
            submission.status = status
        if "is_spam" in data:
            submission.is_spam = data["is_spam"]
        if "admin_notes" in data:
            submission.admin_notes = data["admin_notes"]

    return submission


def reply_to_submission(submission_id: str, data: Dict[str, Any]) -> ContactSubmission:
    """
    Record a reply sent to the enquirer. The reply text is kept as the
    admin notes and the submission moves to "replied".
    """
    submission = get_submission(submission_id)

    if not isinstance(data, dict):
        raise ValidationError("Invalid request body")
    message = required_text(data, "message", "Message")

    with transactional():
        submission.status = "replied"
        submission.admin_notes = message

    current_app.logger.info("Contact submission %s marked replied", submission.id)
    return submission


def delete_submission(submission_id: str) -> None:
    submission = get_submission(submission_id)
    with transactional():
        db.session.delete(submission)


def submission_stats(now: Optional[datetime] = None) -> Dict[str, int]:
    now = now or utc_now()
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    week_ago = now - timedelta(days=7)
    month_start = today.replace(day=1)

    stats = {"total": 0, "spam": 0, "today": 0, "this_week": 0, "this_month": 0}
    for status in SUBMISSION_STATUSES:
        if status != "spam":
            stats[status] = 0

    rows = db.session.query(
        ContactSubmission.status,
        ContactSubmission.is_spam,
        ContactSubmission.created_at,
    ).all()

    for status, spam, created_at in rows:
        stats["total"] += 1
        if status in stats and status != "spam":
            stats[status] += 1
        if spam:
            stats["spam"] += 1

        if created_at is None:
            continue
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=now.tzinfo)
        if created_at >= today:
            stats["today"] += 1
        if created_at >= week_ago:
            stats["this_week"] += 1
        if created_at >= month_start:
            stats["this_month"] += 1

    return stats
