# standsite/api/v1/cities.py
from flask import jsonify, request

from standsite.application import cities as service
from standsite.errors import PermissionDeniedError
from standsite.normalizers.city import normalize_city
from standsite.normalizers.pagination import normalize_pagination
from standsite.utils.decorators import admin_required, is_admin_request
from standsite.utils.pagination import page_args
from standsite.utils.params import bool_arg, json_body
from . import v1_bp


def _is_active_filter():
    raw = request.args.get("is_active")
    if raw in (None, "", "true"):
        return True

    if not is_admin_request():
        raise PermissionDeniedError("Insufficient permissions")
    if raw == "all":
        return None
    return bool_arg("is_active")


@v1_bp.route("/cities", methods=["GET"])
def list_cities():
    page, limit = page_args(default_limit=10)
    is_active = _is_active_filter()

    cities, total = service.list_cities(
        page=page,
        limit=limit,
        search=request.args.get("search"),
        is_active=is_active,
        country_code=request.args.get("country_code"),
    )

    admin = is_active is not True
    data = normalize_pagination(
        cities,
        lambda c: normalize_city(c, admin=admin),
        key="cities",
        page=page,
        limit=limit,
        total=total,
    )
    data["success"] = True
    return jsonify(data)


@v1_bp.route("/cities", methods=["POST"])
@admin_required
def create_city():
    city = service.create_city(request.get_json(silent=True))
    return jsonify({"success": True, "city": normalize_city(city, admin=True)}), 201


@v1_bp.route("/cities", methods=["PUT"])
@admin_required
def bulk_update_cities():
    data = json_body()
    action = data.get("action")
    affected = service.bulk_city_action(action, data.get("city_ids"), data.get("data"))
    return jsonify({
        "success": True,
        "message": f"Successfully {action}d {affected} cities",
        "affected": affected,
    })


@v1_bp.route("/cities", methods=["DELETE"])
@admin_required
def bulk_delete_cities():
    ids = [i for i in (request.args.get("ids") or "").split(",") if i]
    affected = service.bulk_city_action("delete", ids)
    return jsonify({
        "success": True,
        "message": f"Successfully deleted {affected} cities",
        "affected": affected,
    })


@v1_bp.route("/cities/<id_or_slug>", methods=["GET"])
def get_city(id_or_slug):
    admin = request.args.get("admin") == "true"
    if admin and not is_admin_request():
        raise PermissionDeniedError("Insufficient permissions")

    city = service.get_city(id_or_slug, admin=admin)
    return jsonify({"success": True, "city": normalize_city(city, admin=admin)})


@v1_bp.route("/cities/<id_or_slug>", methods=["PUT"])
@admin_required
def update_city(id_or_slug):
    city = service.update_city(id_or_slug, request.get_json(silent=True))
    return jsonify({"success": True, "city": normalize_city(city, admin=True)})


@v1_bp.route("/cities/<id_or_slug>", methods=["DELETE"])
@admin_required
def delete_city(id_or_slug):
    city = service.delete_city(id_or_slug)
    return jsonify({"success": True, "message": f'City "{city.name}" deleted successfully'})
