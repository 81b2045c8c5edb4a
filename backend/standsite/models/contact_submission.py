from standsite.extensions import db
from .base import BaseModel

SUBMISSION_STATUSES = ("new", "read", "replied", "archived", "spam")


class ContactSubmission(BaseModel):
    __tablename__ = "contact_submissions"

    name = db.Column(db.String(200), nullable=False)
    exhibition_name = db.Column(db.String(300), nullable=True)
    company_name = db.Column(db.String(300), nullable=True)
    email = db.Column(db.String(254), nullable=False, index=True)
    phone = db.Column(db.String(50), nullable=True)
    message = db.Column(db.Text, nullable=False)

    attachment_url = db.Column(db.String(1024), nullable=True)
    attachment_filename = db.Column(db.String(300), nullable=True)
    attachment_size = db.Column(db.Integer, nullable=True)
    attachment_type = db.Column(db.String(100), nullable=True)
    agreed_to_terms = db.Column(db.Boolean, nullable=False, default=False)

    status = db.Column(db.String(20), nullable=False, default="new", index=True)
    is_spam = db.Column(db.Boolean, nullable=False, default=False)
    spam_score = db.Column(db.Float, nullable=False, default=0.0)
    spam_reasons = db.Column(db.JSON, nullable=False, default=list)

    ip_address = db.Column(db.String(100), nullable=True)
    user_agent = db.Column(db.String(500), nullable=True)
    referrer = db.Column(db.String(1024), nullable=True)
    admin_notes = db.Column(db.Text, nullable=True)
