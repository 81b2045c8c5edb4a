from flask import has_request_context, request
from datetime import timezone
from dateutil.parser import parse, ParserError
from standsite.errors import ConflictError, ValidationError


def normalize_ts(ts):
    """
    Ensure datetime is timezone-aware.
    Defaults to UTC if naive.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def enforce_optimistic_lock(entity):
    """
    Opt-in lost-update guard using the If-Unmodified-Since header.

    Without the header the write is last-write-wins. With it, a row changed
    after the client's timestamp is rejected with 409.
    """
    if not has_request_context():
        return

    client_ts = request.headers.get("If-Unmodified-Since")
    if not client_ts or entity is None or entity.updated_at is None:
        return

    try:
        client_ts = normalize_ts(parse(client_ts))
    except (ParserError, ValueError, OverflowError):
        raise ValidationError("Invalid If-Unmodified-Since header")

    server_ts = normalize_ts(entity.updated_at).replace(microsecond=0)

    if server_ts > client_ts:
        raise ConflictError("Conflict detected. Resource has been modified.")
