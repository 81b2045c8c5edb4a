from standsite.extensions import db
from .base import BaseModel


class CollectionItem(BaseModel):
    __tablename__ = "collection_items"

    collection = db.Column(db.String(100), nullable=False, index=True)
    slug = db.Column(db.String(200), nullable=True)
    display_order = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    data = db.Column(db.JSON, nullable=False, default=dict)

    __table_args__ = (
        db.UniqueConstraint("collection", "slug", name="uq_collection_item_slug"),
        db.Index("idx_collection_item_order", "collection", "display_order"),
    )
