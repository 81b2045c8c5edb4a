# standsite/api/v1/event_categories.py
from flask import jsonify

from standsite.application import event_categories as service
from standsite.normalizers.event import normalize_category
from standsite.utils.decorators import admin_required
from standsite.utils.params import bool_arg, json_body
from . import v1_bp


@v1_bp.route("/events/categories", methods=["GET"])
def list_categories():
    categories = service.list_categories(is_active=bool_arg("is_active"))

    counts = None
    if bool_arg("include_counts", False):
        counts = service.event_counts([c.id for c in categories])

    return jsonify({
        "success": True,
        "categories": [
            normalize_category(c, counts.get(c.id, 0) if counts is not None else None)
            for c in categories
        ],
    })


@v1_bp.route("/events/categories", methods=["POST"])
@admin_required
def create_category():
    category = service.create_category(json_body())
    return jsonify({"success": True, "category": normalize_category(category)}), 201


@v1_bp.route("/events/categories", methods=["PUT"])
@admin_required
def bulk_update_categories():
    data = json_body()
    action = data.get("action")
    categories = service.bulk_update_categories(action, data.get("category_ids"), data.get("data"))

    response = {
        "success": True,
        "updated_count": len(categories),
        "categories": [normalize_category(c) for c in categories],
    }
    if action == "reorder":
        response["message"] = "Categories reordered successfully"
    return jsonify(response)


@v1_bp.route("/events/categories", methods=["DELETE"])
@admin_required
def bulk_delete_categories():
    data = json_body()
    deleted = service.bulk_delete_categories(data.get("category_ids"))
    return jsonify({"success": True, "deleted_count": deleted})


@v1_bp.route("/events/categories/<category_id>", methods=["GET"])
def get_category(category_id):
    category = service.get_category(category_id)
    count = service.event_counts([category.id]).get(category.id, 0)
    return jsonify({"success": True, "category": normalize_category(category, count)})


@v1_bp.route("/events/categories/<category_id>", methods=["PUT"])
@admin_required
def update_category(category_id):
    category = service.update_category(category_id, json_body())
    return jsonify({"success": True, "category": normalize_category(category)})


@v1_bp.route("/events/categories/<category_id>", methods=["DELETE"])
@admin_required
def delete_category(category_id):
    category = service.delete_category(category_id)
    return jsonify({
        "success": True,
        "message": f'Category "{category.name}" deleted successfully',
    })
