from standsite.extensions import db
from .base import BaseModel


class PageSection(BaseModel):
    """One stored version of a page section's copy.

    Each ``section_key`` (``home.hero``, ``contact.map``, ...) may have many
    rows but at most one of them is active; the partial unique index below
    enforces that on both PostgreSQL and SQLite.
    """
    __tablename__ = "page_sections"

    section_key = db.Column(db.String(100), nullable=False, index=True)
    is_active = db.Column(db.Boolean, nullable=False, default=False)
    content = db.Column(db.JSON, nullable=False, default=dict)
    updated_by = db.Column(db.String(36), nullable=True)

    __table_args__ = (
        db.Index(
            "uq_page_sections_one_active",
            "section_key",
            unique=True,
            postgresql_where=db.text("is_active"),
            sqlite_where=db.text("is_active = 1"),
        ),
    )
