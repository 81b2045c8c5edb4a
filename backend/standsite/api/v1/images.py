# standsite/api/v1/images.py
from flask import jsonify, request

from standsite.application import images as service
from standsite.utils.decorators import admin_required, current_actor_id
from standsite.utils.pagination import page_args
from standsite.utils.params import json_body
from . import v1_bp


@v1_bp.route("/images", methods=["GET"])
@admin_required
def list_images():
    page, limit = page_args(default_limit=20)
    result = service.list_images(
        bucket=request.args.get("bucket"),
        folder=request.args.get("folder") or "",
        page=page,
        limit=limit,
        event_id=request.args.get("event_id"),
    )
    return jsonify({
        "success": True,
        "images": result["images"],
        "total": len(result["images"]),
        "page": page,
        "limit": limit,
        "has_more": result["has_more"],
        "source": result["source"],
    })


@v1_bp.route("/images", methods=["POST"])
@admin_required
def upload_image():
    image = service.upload_image(
        request.files.get("file"),
        bucket=request.form.get("bucket"),
        folder=request.form.get("category") or request.form.get("folder"),
        kind=request.form.get("kind"),
        event_id=request.form.get("event_id"),
        actor_id=current_actor_id(),
    )
    return jsonify({
        "success": True,
        "image": image,
        "message": "Image uploaded successfully",
    }), 201


@v1_bp.route("/images", methods=["DELETE"])
@admin_required
def delete_images():
    data = json_body()
    paths = service.delete_images(
        data.get("filePaths"),
        bucket=data.get("bucket"),
        image_ids=data.get("imageIds"),
    )
    return jsonify({
        "success": True,
        "deleted_count": len(paths),
        "deleted_files": paths,
    })
