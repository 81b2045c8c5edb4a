from functools import wraps
from flask import current_app, g
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request
from standsite.errors import PermissionDeniedError
from standsite.extensions import db
from standsite.models.user import ADMIN_ROLES, User


def auth_enforced():
    return current_app.config.get("ADMIN_AUTH_REQUIRED", True)


def roles_required(*allowed_roles):
    """
    Require a valid access token whose role is one of ``allowed_roles``.

    With ADMIN_AUTH_REQUIRED off the check is skipped entirely and
    ``g.current_user`` is None, so writes are recorded without an actor.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            if not auth_enforced():
                g.current_user = None
                return fn(*args, **kwargs)

            verify_jwt_in_request()

            if get_jwt().get("role") not in allowed_roles:
                raise PermissionDeniedError("Insufficient permissions")

            user = db.session.get(User, get_jwt_identity())
            if not user or not user.is_active:
                raise PermissionDeniedError("User account disabled")

            g.current_user = user
            return fn(*args, **kwargs)
        return wrapper
    return decorator


admin_required = roles_required(*ADMIN_ROLES)


def current_actor_id():
    user = getattr(g, "current_user", None)
    return user.id if user else None


def is_admin_request():
    """Non-raising check used by public routes that offer an admin view."""
    if not auth_enforced():
        return True

    verify_jwt_in_request(optional=True)
    identity = get_jwt_identity()
    if not identity:
        return False

    user = db.session.get(User, identity)
    # The stored role wins over a stale token claim
    if not user or not user.is_active or not user.is_admin or get_jwt().get("role") not in ADMIN_ROLES:
        return False

    g.current_user = user
    return True
