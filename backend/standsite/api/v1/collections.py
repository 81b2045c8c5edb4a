# standsite/api/v1/collections.py
from flask import jsonify, request

from standsite.application import collections as service
from standsite.normalizers.collection import normalize_collection_item
from standsite.utils.decorators import admin_required, is_admin_request
from standsite.utils.params import bool_arg, json_body
from . import v1_bp


@v1_bp.route("/collections", methods=["GET"])
def list_collections():
    return jsonify({"success": True, "collections": service.list_collections()})


@v1_bp.route("/collections/<key>", methods=["GET"])
def list_collection(key):
    include_inactive = bool_arg("include_inactive", False) and is_admin_request()
    items = service.list_items(key, include_inactive=include_inactive)
    return jsonify({
        "success": True,
        "collection": key,
        "items": [normalize_collection_item(i, admin=include_inactive) for i in items],
        "total": len(items),
    })


@v1_bp.route("/collections/<key>", methods=["POST"])
@admin_required
def create_collection_item(key):
    item = service.create_item(key, request.get_json(silent=True))
    return jsonify({
        "success": True,
        "item": normalize_collection_item(item, admin=True),
    }), 201


@v1_bp.route("/collections/<key>/reorder", methods=["POST"])
@admin_required
def reorder_collection(key):
    data = json_body()
    updated = service.reorder_items(key, data.get("items"))
    return jsonify({
        "success": True,
        "updated_count": updated,
        "message": "Items reordered successfully",
    })


@v1_bp.route("/collections/<key>/<item_id>", methods=["GET"])
@admin_required
def get_collection_item(key, item_id):
    item = service.get_item(key, item_id)
    return jsonify({"success": True, "item": normalize_collection_item(item, admin=True)})


@v1_bp.route("/collections/<key>/<item_id>", methods=["PUT"])
@admin_required
def update_collection_item(key, item_id):
    item = service.update_item(key, item_id, request.get_json(silent=True))
    return jsonify({"success": True, "item": normalize_collection_item(item, admin=True)})


@v1_bp.route("/collections/<key>/<item_id>", methods=["DELETE"])
@admin_required
def delete_collection_item(key, item_id):
    service.delete_item(key, item_id)
    return jsonify({
        "success": True,
        "message": "Item deleted successfully",
    })
