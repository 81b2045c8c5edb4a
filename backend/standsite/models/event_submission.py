from standsite.extensions import db
from .base import BaseModel

EVENT_SUBMISSION_STATUSES = ("new", "read", "replied", "archived")


class EventSubmission(BaseModel):
    """An enquiry sent from an event's detail page."""
    __tablename__ = "event_form_submissions"

    event_id = db.Column(
        db.String(36),
        db.ForeignKey("events.id", ondelete="SET NULL", name="fk_event_submissions_event_id"),
        nullable=True,
        index=True,
    )

    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(254), nullable=False, index=True)
    phone = db.Column(db.String(50), nullable=True)
    message = db.Column(db.Text, nullable=True)
    company_name = db.Column(db.String(300), nullable=True)
    exhibition_name = db.Column(db.String(300), nullable=True)
    budget = db.Column(db.String(100), nullable=True)

    attachment_url = db.Column(db.String(1024), nullable=True)
    attachment_filename = db.Column(db.String(300), nullable=True)
    attachment_size = db.Column(db.Integer, nullable=True)

    status = db.Column(db.String(20), nullable=False, default="new", index=True)
    is_spam = db.Column(db.Boolean, nullable=False, default=False)

    ip_address = db.Column(db.String(100), nullable=True)
    user_agent = db.Column(db.String(500), nullable=True)
    referrer = db.Column(db.String(1024), nullable=True)
    admin_notes = db.Column(db.Text, nullable=True)

    event = db.relationship("Event")
