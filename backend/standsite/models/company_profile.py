from standsite.extensions import db
from .base import BaseModel


class CompanyProfileDocument(BaseModel):
    __tablename__ = "company_profile_documents"

    filename = db.Column(db.String(300), nullable=False)
    original_filename = db.Column(db.String(300), nullable=True)
    file_path = db.Column(db.String(1024), nullable=False)  # storage path inside the bucket
    file_size = db.Column(db.Integer, nullable=False, default=0)
    mime_type = db.Column(db.String(100), nullable=False, default="application/pdf")
    title = db.Column(db.String(300), nullable=False)
    description = db.Column(db.Text, nullable=True)
    version = db.Column(db.String(50), nullable=False, default="1.0")
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    is_current = db.Column(db.Boolean, nullable=False, default=False)
    download_count = db.Column(db.Integer, nullable=False, default=0)
