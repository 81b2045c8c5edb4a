from contextlib import contextmanager
from sqlalchemy.exc import DBAPIError
from standsite.extensions import db
from standsite.utils.store_errors import translate_store_error


@contextmanager
def transactional(messages=None, unique_status=400):
    """
    Commit on success, roll back on any error.

    Relational errors (constraint violations, permission errors) are
    translated into a StoreError so the route answers with the right status.
    """
    try:
        yield
        db.session.commit()
    except DBAPIError as exc:
        db.session.rollback()
        raise translate_store_error(exc, messages=messages, unique_status=unique_status) from exc
    except Exception:
        db.session.rollback()
        raise
