from standsite.extensions import db
from .base import BaseModel


class EventCategory(BaseModel):
    __tablename__ = "event_categories"

    name = db.Column(db.String(200), nullable=False, unique=True)
    slug = db.Column(db.String(200), nullable=False, unique=True, index=True)
    description = db.Column(db.Text, nullable=True)
    color = db.Column(db.String(20), nullable=True)
    display_order = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    events = db.relationship("Event", back_populates="category")


class Event(BaseModel):
    __tablename__ = "events"

    title = db.Column(db.String(300), nullable=False)
    slug = db.Column(db.String(300), nullable=False, unique=True, index=True)
    description = db.Column(db.Text, nullable=True)
    detailed_description = db.Column(db.Text, nullable=True)
    short_description = db.Column(db.Text, nullable=True)

    category_id = db.Column(
        db.String(36),
        db.ForeignKey("event_categories.id", name="fk_events_category_id"),
        nullable=True,
        index=True,
    )

    organizer = db.Column(db.String(300), nullable=True)
    organized_by = db.Column(db.String(300), nullable=True)
    venue = db.Column(db.String(300), nullable=True)
    event_type = db.Column(db.String(100), nullable=True)
    industry = db.Column(db.String(200), nullable=True)
    audience = db.Column(db.String(200), nullable=True)

    start_date = db.Column(db.Date, nullable=True, index=True)
    end_date = db.Column(db.Date, nullable=True, index=True)
    date_range = db.Column(db.String(100), nullable=True)

    featured_image_url = db.Column(db.String(1024), nullable=True)
    hero_image_url = db.Column(db.String(1024), nullable=True)
    hero_image_credit = db.Column(db.String(300), nullable=True)
    logo_image_url = db.Column(db.String(1024), nullable=True)
    logo_text = db.Column(db.String(200), nullable=True)
    logo_subtext = db.Column(db.String(200), nullable=True)

    meta_title = db.Column(db.String(300), nullable=True)
    meta_description = db.Column(db.Text, nullable=True)
    meta_keywords = db.Column(db.Text, nullable=True)

    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)
    is_featured = db.Column(db.Boolean, nullable=False, default=False)
    display_order = db.Column(db.Integer, nullable=False, default=0)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True, index=True)

    created_by = db.Column(db.String(36), nullable=True)
    updated_by = db.Column(db.String(36), nullable=True)

    category = db.relationship("EventCategory", back_populates="events")
    images = db.relationship(
        "EventImage",
        back_populates="event",
        order_by="EventImage.display_order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_published(self):
        return self.published_at is not None


class EventImage(BaseModel):
    __tablename__ = "event_images"

    event_id = db.Column(
        db.String(36),
        db.ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    filename = db.Column(db.String(300), nullable=False)
    original_filename = db.Column(db.String(300), nullable=True)
    file_path = db.Column(db.String(1024), nullable=False)  # public URL
    storage_path = db.Column(db.String(1024), nullable=True)
    image_type = db.Column(db.String(20), nullable=False, default="gallery")  # featured, hero, logo, gallery
    display_order = db.Column(db.Integer, nullable=False, default=0)
    caption = db.Column(db.Text, nullable=True)
    alt_text = db.Column(db.String(300), nullable=True)
    width = db.Column(db.Integer, nullable=True)
    height = db.Column(db.Integer, nullable=True)
    file_size = db.Column(db.Integer, nullable=False, default=0)
    mime_type = db.Column(db.String(100), nullable=False, default="image/jpeg")
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    uploaded_by = db.Column(db.String(36), nullable=True)

    event = db.relationship("Event", back_populates="images")

    __table_args__ = (
        db.Index("idx_event_image_type_order", "event_id", "image_type", "display_order"),
    )
