from standsite.extensions import db
from .base import BaseModel

BLOG_POST_STATUSES = ("draft", "published", "archived")

blog_post_tags = db.Table(
    "blog_post_tags",
    db.Column("blog_post_id", db.String(36), db.ForeignKey("blog_posts.id", ondelete="CASCADE"), primary_key=True),
    db.Column("tag_id", db.String(36), db.ForeignKey("collection_items.id", ondelete="CASCADE"), primary_key=True),
)


class BlogPost(BaseModel):
    """A blog article.

    The category is an item of the ``blog-categories`` collection and the
    tags are items of ``blog-tags``.
    """
    __tablename__ = "blog_posts"

    title = db.Column(db.String(300), nullable=False)
    slug = db.Column(db.String(300), nullable=False, unique=True, index=True)
    excerpt = db.Column(db.Text, nullable=True)
    content = db.Column(db.Text, nullable=True)

    meta_description = db.Column(db.Text, nullable=True)
    meta_keywords = db.Column(db.Text, nullable=True)
    featured_image_url = db.Column(db.String(1024), nullable=True)
    featured_image_alt = db.Column(db.String(300), nullable=True)
    hero_image_url = db.Column(db.String(1024), nullable=True)
    hero_image_alt = db.Column(db.String(300), nullable=True)
    og_title = db.Column(db.String(300), nullable=True)
    og_description = db.Column(db.Text, nullable=True)
    og_image_url = db.Column(db.String(1024), nullable=True)

    status = db.Column(db.String(20), nullable=False, default="draft", index=True)
    is_featured = db.Column(db.Boolean, nullable=False, default=False)
    view_count = db.Column(db.Integer, nullable=False, default=0)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True, index=True)
    scheduled_publish_at = db.Column(db.DateTime(timezone=True), nullable=True)

    category_id = db.Column(
        db.String(36),
        db.ForeignKey("collection_items.id", ondelete="SET NULL", name="fk_blog_posts_category_id"),
        nullable=True,
        index=True,
    )
    author_id = db.Column(db.String(36), nullable=True)

    category = db.relationship("CollectionItem", foreign_keys=[category_id])
    tags = db.relationship("CollectionItem", secondary=blog_post_tags, order_by="CollectionItem.display_order")

    @property
    def is_public(self):
        return self.status == "published" and self.published_at is not None
