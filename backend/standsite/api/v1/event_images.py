# standsite/api/v1/event_images.py
from flask import jsonify, request

from standsite.application import event_images as service
from standsite.normalizers.event import normalize_event_image
from standsite.utils.decorators import admin_required, current_actor_id, is_admin_request
from standsite.utils.params import bool_arg, json_body
from . import v1_bp


@v1_bp.route("/events/<id_or_slug>/images", methods=["GET"])
def list_event_images(id_or_slug):
    include_inactive = bool_arg("include_inactive", False) and is_admin_request()
    event_id, images = service.list_event_images(
        id_or_slug,
        image_type=request.args.get("type"),
        include_inactive=include_inactive,
    )

    groups = service.empty_groups()
    for image in images:
        groups[image.image_type].append(normalize_event_image(image))

    return jsonify({
        "success": True,
        "event_id": event_id,
        "images": groups,
        "total": len(images),
    })


@v1_bp.route("/events/<event_id>/images", methods=["POST"])
@admin_required
def add_event_image(event_id):
    if request.files:
        data = request.form.to_dict()
        file = request.files.get("file")
        if file is None:
            return jsonify({"success": False, "error": "File is required"}), 400
    else:
        data = json_body()
        file = None

    image = service.add_event_image(event_id, data, file=file, actor_id=current_actor_id())
    return jsonify({
        "success": True,
        "image": normalize_event_image(image),
        "message": "Image added to event successfully",
    }), 201


@v1_bp.route("/events/<event_id>/images", methods=["PUT"])
@admin_required
def update_event_images(event_id):
    data = json_body()
    images = service.update_event_images(event_id, data.get("updates"))
    return jsonify({
        "success": True,
        "updated_count": len(images),
        "images": [normalize_event_image(i) for i in images],
    })


@v1_bp.route("/events/<event_id>/images", methods=["DELETE"])
@admin_required
def delete_event_images(event_id):
    data = json_body()
    deleted = service.delete_event_images(event_id, data.get("image_ids"))
    return jsonify({
        "success": True,
        "deleted_count": len(deleted),
        "deleted_images": deleted,
    })
