"""Event enquiries: spam flags, inbox filters, bulk actions."""
import pytest  # type: ignore[import-not-found]

from standsite.application import event_submissions, events
from standsite.errors import NotFoundError, ValidationError


def _enquiry(**data):
    payload = {"name": "Layla", "email": "Layla@Example.com", "message": "Quote for a 6x3 stand please."}
    payload.update(data)
    return event_submissions.submit_event_enquiry(payload, ip_address="10.0.0.5")


def test_clean_enquiry_is_new(app):
    event = events.create_event({"title": "Gitex"})
    submission = _enquiry(event_id=event.id, budget="AED 50k", attachment_size=2048)

    assert submission.status == "new"
    assert submission.is_spam is False
    assert submission.email == "layla@example.com"
    assert submission.event.slug == "gitex"
    assert submission.budget == "AED 50k"
    assert submission.referrer == "direct"


def test_spam_is_archived_not_rejected(app):
    submission = _enquiry(message="Congratulations, you are a winner")

    assert submission.is_spam is True
    assert submission.status == "archived"


def test_spam_reasons():
    assert event_submissions.spam_reasons("Ali", "ali@example.com", "Need a stand") == []
    assert event_submissions.spam_reasons("Ali", "ali@mailinator.com", "Hi") == ["Disposable email domain"]
    assert "Too many links" in event_submissions.spam_reasons(
        "Ali", "ali@example.com", "http://a.io http://b.io https://c.io",
    )
    assert "Contains repeated characters" in event_submissions.spam_reasons("Ali", "ali@example.com", "heyyyyyy")
    # Keywords are looked for in the name and email too
    assert event_submissions.spam_reasons("Bitcoin Bob", "bob@example.com", None)


def test_validation(app):
    with pytest.raises(ValidationError) as excinfo:
        _enquiry(name=" ")
    assert excinfo.value.message == "Name is required"

    with pytest.raises(ValidationError) as excinfo:
        _enquiry(email="not-an-email")
    assert excinfo.value.message == "Invalid email format"

    with pytest.raises(ValidationError) as excinfo:
        _enquiry(event_id="missing")
    assert excinfo.value.message == "Invalid event selected."


def test_message_is_optional(app):
    assert _enquiry(message=None).message is None


def test_inbox_filters(app):
    gitex = events.create_event({"title": "Gitex"})
    _enquiry(event_id=gitex.id, company_name="Acme Displays")
    _enquiry(name="Omar")
    _enquiry(message="Free money for you")

    rows, total = event_submissions.list_event_submissions(event_id=gitex.id)
    assert total == 1 and rows[0].company_name == "Acme Displays"

    rows, total = event_submissions.list_event_submissions(search="acme")
    assert total == 1

    rows, total = event_submissions.list_event_submissions(is_spam=True)
    assert total == 1 and rows[0].status == "archived"

    rows, total = event_submissions.list_event_submissions(status="new", sort_by="name", sort_order="asc")
    assert [r.name for r in rows] == ["Layla", "Omar"]

    with pytest.raises(ValidationError):
        event_submissions.list_event_submissions(status="spam")


def test_update_and_delete(app):
    submission = _enquiry()

    event_submissions.update_event_submission(submission.id, {"status": "read", "admin_notes": "Called back"})
    assert (submission.status, submission.admin_notes) == ("read", "Called back")

    with pytest.raises(ValidationError):
        event_submissions.update_event_submission(submission.id, {"status": "done"})

    event_submissions.delete_event_submission(submission.id)
    with pytest.raises(NotFoundError):
        event_submissions.get_event_submission(submission.id)


def test_bulk_actions(app):
    a = _enquiry(name="A")
    b = _enquiry(name="B")

    event_submissions.bulk_update_event_submissions("mark_spam", [a.id, b.id])
    assert (a.is_spam, a.status, b.status) == (True, "archived", "archived")

    event_submissions.bulk_update_event_submissions("mark_not_spam", [a.id])
    assert (a.is_spam, a.status) == (False, "new")

    event_submissions.bulk_update_event_submissions("update", [b.id], {"admin_notes": "Duplicate"})
    assert b.admin_notes == "Duplicate"

    with pytest.raises(ValidationError):
        event_submissions.bulk_update_event_submissions("explode", [a.id])
    with pytest.raises(ValidationError):
        event_submissions.bulk_update_event_submissions("update", [a.id], {})

    deleted = event_submissions.bulk_delete_event_submissions([a.id, b.id, "missing"])
    assert sorted(d["name"] for d in deleted) == ["A", "B"]


def test_deleting_the_event_keeps_the_enquiry(app):
    event = events.create_event({"title": "Gitex"})
    submission = _enquiry(event_id=event.id)
    submission_id = submission.id

    events.delete_event(event.id)

    kept = event_submissions.get_event_submission(submission_id)
    assert kept.event_id is None
