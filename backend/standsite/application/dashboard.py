# standsite/application/dashboard.py
from sqlalchemy import func

from standsite.extensions import db
from standsite.models.blog_post import BlogPost
from standsite.models.city import City
from standsite.models.company_profile import CompanyProfileDocument
from standsite.models.contact_submission import SUBMISSION_STATUSES, ContactSubmission
from standsite.models.event import Event, EventCategory
from standsite.models.event_submission import EVENT_SUBMISSION_STATUSES, EventSubmission
from standsite.models.section import PageSection
from standsite.sections import all_section_specs


def dashboard_summary():
    """Counts shown on the admin landing page."""
    by_status = dict(
        db.session.query(ContactSubmission.status, func.count(ContactSubmission.id))
        .group_by(ContactSubmission.status)
        .all()
    )

    enquiries_by_status = dict(
        db.session.query(EventSubmission.status, func.count(EventSubmission.id))
        .group_by(EventSubmission.status)
        .all()
    )
    posts_by_status = dict(
        db.session.query(BlogPost.status, func.count(BlogPost.id))
        .group_by(BlogPost.status)
        .all()
    )

    active_keys = {
        key for (key,) in
        db.session.query(PageSection.section_key).filter(PageSection.is_active.is_(True)).all()
    }
    registry = all_section_specs()

    return {
        "events": {
            "total": Event.query.count(),
            "published": Event.query.filter(
                Event.is_active.is_(True), Event.published_at.isnot(None)
            ).count(),
            "featured": Event.query.filter(Event.is_featured.is_(True)).count(),
        },
        "categories": EventCategory.query.count(),
        "submissions": {status: by_status.get(status, 0) for status in SUBMISSION_STATUSES},
        "event_enquiries": {
            status: enquiries_by_status.get(status, 0) for status in EVENT_SUBMISSION_STATUSES
        },
        "blog_posts": {
            "total": sum(posts_by_status.values()),
            "published": posts_by_status.get("published", 0),
            "draft": posts_by_status.get("draft", 0),
        },
        "cities": City.query.filter(City.is_active.is_(True)).count(),
        "documents": CompanyProfileDocument.query.count(),
        "sections": {
            "total": len(registry),
            "with_content": sum(1 for spec in registry if spec.key in active_keys),
        },
    }
