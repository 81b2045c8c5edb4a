from .dates import iso

_FIELDS = (
    "id", "name", "exhibition_name", "company_name", "email", "phone", "message",
    "attachment_url", "attachment_filename", "attachment_size", "attachment_type",
    "agreed_to_terms", "status", "is_spam", "spam_score",
)


def normalize_submission(submission, admin=False):
    data = {name: getattr(submission, name) for name in _FIELDS}
    data["created_at"] = iso(submission.created_at)

    if admin:
        data.update({
            "spam_reasons": submission.spam_reasons or [],
            "ip_address": submission.ip_address,
            "user_agent": submission.user_agent,
            "referrer": submission.referrer,
            "admin_notes": submission.admin_notes,
            "updated_at": iso(submission.updated_at),
        })

    return data
