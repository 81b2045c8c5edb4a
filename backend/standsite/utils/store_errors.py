# standsite/utils/store_errors.py
from __future__ import annotations

from typing import Mapping, Optional

from standsite.errors import StoreError

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"
INSUFFICIENT_PRIVILEGE = "42501"

# SQLite reports constraint failures only through the message text
_SQLITE_CODES = (
    ("UNIQUE constraint failed", UNIQUE_VIOLATION),
    ("FOREIGN KEY constraint failed", FOREIGN_KEY_VIOLATION),
    ("NOT NULL constraint failed", NOT_NULL_VIOLATION),
)


def error_code(exc: BaseException) -> Optional[str]:
    """
    Extract the SQLSTATE from a SQLAlchemy / DB-API error.

    psycopg2 exposes it as ``pgcode``, psycopg 3 as ``sqlstate``.
    """
    orig = getattr(exc, "orig", exc)

    for attr in ("pgcode", "sqlstate"):
        code = getattr(orig, attr, None)
        if code:
            return str(code)

    message = str(orig)
    for marker, code in _SQLITE_CODES:
        if marker in message:
            return code

    if "row-level security" in message or "permission denied" in message:
        return INSUFFICIENT_PRIVILEGE

    return None


def error_detail(exc: BaseException) -> str:
    orig = getattr(exc, "orig", exc)
    return str(orig).strip().splitlines()[0] if str(orig).strip() else type(orig).__name__


def _pick(messages: Mapping[str, str], kind: str, detail: str) -> Optional[str]:
    """
    Pick a resource-specific message for a violation.

    Keys look like "unique:slug" or "foreign_key:category_id"; the first key
    whose column appears in the error text wins. "unique" / "foreign_key"
    alone act as the per-kind fallback.
    """
    for key, message in messages.items():
        key_kind, _, column = key.partition(":")
        if key_kind == kind and column and column in detail:
            return message
    return messages.get(kind)


def translate_store_error(
    exc: BaseException,
    *,
    messages: Optional[Mapping[str, str]] = None,
    unique_status: int = 400,
) -> StoreError:
    """
    Map a relational error onto an HTTP status and a user-facing message.

    - 23505 unique violation      -> 400 (or ``unique_status``)
    - 23503 foreign key violation -> 400
    - 23502 not null violation    -> 400
    - 42501 / RLS denial          -> 403
    - anything else               -> 500
    """
    messages = messages or {}
    code = error_code(exc)
    detail = error_detail(exc)

    if code == UNIQUE_VIOLATION:
        return StoreError(
            _pick(messages, "unique", detail) or "Duplicate entry detected",
            unique_status,
            code,
        )

    if code == FOREIGN_KEY_VIOLATION:
        return StoreError(
            _pick(messages, "foreign_key", detail) or "Invalid reference data",
            400,
            code,
        )

    if code == NOT_NULL_VIOLATION:
        return StoreError(f"Missing required field: {detail}", 400, code)

    if code == INSUFFICIENT_PRIVILEGE:
        return StoreError("Permission denied", 403, code)

    return StoreError(f"Database error: {detail}", 500, code)


__all__ = [
    "UNIQUE_VIOLATION",
    "FOREIGN_KEY_VIOLATION",
    "NOT_NULL_VIOLATION",
    "INSUFFICIENT_PRIVILEGE",
    "error_code",
    "translate_store_error",
]
