# standsite/api/v1/events.py
from flask import jsonify, request

from standsite.application import events as service
from standsite.errors import PermissionDeniedError
from standsite.normalizers.event import (
    normalize_event,
    normalize_event_image,
    normalize_related_event,
)
from standsite.normalizers.pagination import normalize_pagination
from standsite.utils.decorators import admin_required, current_actor_id, is_admin_request
from standsite.utils.pagination import page_args
from standsite.utils.params import bool_arg, json_body
from . import v1_bp


def _is_active_filter():
    """
    Public listings show active, published events. ``is_active=false`` and
    ``is_active=all`` are admin views.
    """
    raw = request.args.get("is_active")
    if raw in (None, "", "true"):
        return True

    if not is_admin_request():
        raise PermissionDeniedError("Insufficient permissions")
    if raw == "all":
        return None
    return bool_arg("is_active")


@v1_bp.route("/events", methods=["GET"])
def list_events():
    page, limit = page_args(default_limit=10)
    is_active = _is_active_filter()

    events, total = service.list_events(
        page=page,
        limit=limit,
        category_slug=request.args.get("category_slug"),
        is_featured=bool_arg("is_featured"),
        search=request.args.get("search"),
        sort_by=request.args.get("sort_by") or "created_at",
        sort_order=request.args.get("sort_order") or "desc",
        is_active=is_active,
        start_date=request.args.get("start_date"),
        end_date=request.args.get("end_date"),
    )

    admin = is_active is not True
    data = normalize_pagination(
        events,
        lambda e: normalize_event(e, admin=admin),
        key="events",
        page=page,
        limit=limit,
        total=total,
    )
    data["success"] = True
    return jsonify(data)


@v1_bp.route("/events", methods=["POST"])
@admin_required
def create_event():
    event = service.create_event(
        request.get_json(silent=True),
        actor_id=current_actor_id(),
    )
    return jsonify({
        "success": True,
        "event": normalize_event(event, admin=True),
    }), 201


@v1_bp.route("/events", methods=["PUT"])
@admin_required
def bulk_update_events():
    data = json_body()
    if not data.get("action"):
        return jsonify({"success": False, "error": "Invalid request data"}), 400

    events = service.bulk_update_events(
        data["action"],
        data.get("event_ids"),
        data.get("data"),
        actor_id=current_actor_id(),
    )
    return jsonify({
        "success": True,
        "updated_count": len(events),
        "events": [normalize_event(e, admin=True) for e in events],
    })


@v1_bp.route("/events", methods=["DELETE"])
@admin_required
def bulk_delete_events():
    data = json_body()
    deleted = service.bulk_delete_events(data.get("event_ids"))
    return jsonify({
        "success": True,
        "deleted_count": len(deleted),
        "deleted_events": deleted,
    })


@v1_bp.route("/events/statistics", methods=["GET"])
@admin_required
def event_statistics():
    return jsonify({"success": True, "statistics": service.event_statistics()})


@v1_bp.route("/events/<id_or_slug>", methods=["GET"])
def get_event(id_or_slug):
    admin = request.args.get("admin") == "true"
    if admin and not is_admin_request():
        raise PermissionDeniedError("Insufficient permissions")

    event = service.get_event(id_or_slug, admin=admin)
    related = service.related_events(event)

    data = normalize_event(event, admin=admin)
    data["gallery_images"] = [
        normalize_event_image(img)
        for img in event.images
        if img.image_type == "gallery" and img.is_active
    ]

    return jsonify({
        "success": True,
        "event": data,
        "related_events": [normalize_related_event(e) for e in related],
    })


@v1_bp.route("/events/<event_id>", methods=["PUT"])
@admin_required
def update_event(event_id):
    event = service.update_event(
        event_id,
        request.get_json(silent=True),
        actor_id=current_actor_id(),
    )
    return jsonify({"success": True, "event": normalize_event(event, admin=True)})


@v1_bp.route("/events/<event_id>", methods=["PATCH"])
@admin_required
def patch_event(event_id):
    data = json_body()
    action = data.get("action")
    event = service.patch_event(event_id, action, data.get("value"), actor_id=current_actor_id())
    return jsonify({
        "success": True,
        "event": normalize_event(event, admin=True),
        "action": action,
        "message": f"Event {action} completed successfully",
    })


@v1_bp.route("/events/<event_id>", methods=["DELETE"])
@admin_required
def delete_event(event_id):
    event = service.delete_event(event_id)
    return jsonify({
        "success": True,
        "message": f'Event "{event.title}" deleted successfully',
    })
