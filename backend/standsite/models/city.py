from standsite.extensions import db
from .base import BaseModel


class City(BaseModel):
    """A country or city landing page (``/cities/<slug>``)."""
    __tablename__ = "cities"

    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, unique=True, index=True)
    subtitle = db.Column(db.String(300), nullable=True)
    description = db.Column(db.Text, nullable=True)
    hero_image_url = db.Column(db.String(1024), nullable=True)

    country_code = db.Column(db.String(2), nullable=True, index=True)
    timezone = db.Column(db.String(64), nullable=True)
    latitude = db.Column(db.Float, nullable=True)
    longitude = db.Column(db.Float, nullable=True)

    # {phone, email, address, working_hours, emergency_contact}
    contact_info = db.Column(db.JSON, nullable=False, default=dict)
    # [{name, description, is_active}]
    services = db.Column(db.JSON, nullable=False, default=list)
    # {projects_completed, years_of_operation, clients_satisfied, team_size}
    stats = db.Column(db.JSON, nullable=False, default=dict)

    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)
    display_order = db.Column(db.Integer, nullable=False, default=0)
