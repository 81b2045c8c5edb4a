# Import every model so metadata (create_all, migrations) sees all tables
from .user import User, ADMIN_ROLES
from .section import PageSection
from .collection_item import CollectionItem
from .event import Event, EventCategory, EventImage
from .event_submission import EventSubmission, EVENT_SUBMISSION_STATUSES
from .blog_post import BlogPost, BLOG_POST_STATUSES
from .city import City
from .company_profile import CompanyProfileDocument
from .contact_submission import ContactSubmission, SUBMISSION_STATUSES

__all__ = [
    "User",
    "ADMIN_ROLES",
    "PageSection",
    "CollectionItem",
    "Event",
    "EventCategory",
    "EventImage",
    "EventSubmission",
    "EVENT_SUBMISSION_STATUSES",
    "BlogPost",
    "BLOG_POST_STATUSES",
    "City",
    "CompanyProfileDocument",
    "ContactSubmission",
    "SUBMISSION_STATUSES",
]
