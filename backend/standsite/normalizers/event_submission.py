from .dates import iso

_FIELDS = (
    "id", "event_id", "name", "email", "phone", "message", "company_name",
    "exhibition_name", "budget", "attachment_url", "attachment_filename",
    "attachment_size", "status", "is_spam", "ip_address", "user_agent",
    "referrer", "admin_notes",
)


def normalize_event_submission(submission, detail=False):
    data = {name: getattr(submission, name) for name in _FIELDS}
    data["created_at"] = iso(submission.created_at)
    data["updated_at"] = iso(submission.updated_at)

    event = submission.event
    if event is None:
        data["event"] = None
    elif detail:
        data["event"] = {
            "id": event.id,
            "title": event.title,
            "slug": event.slug,
            "start_date": iso(event.start_date),
            "end_date": iso(event.end_date),
            "venue": event.venue,
        }
    else:
        data["event"] = {"id": event.id, "title": event.title, "slug": event.slug}

    return data
