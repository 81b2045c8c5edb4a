# standsite/api/v1/sections.py
from flask import jsonify, request

from standsite.application import sections as service
from standsite.normalizers.section import normalize_section_row, normalize_section_state
from standsite.utils.decorators import admin_required, current_actor_id, is_admin_request
from . import v1_bp


@v1_bp.route("/sections", methods=["GET"])
def list_sections():
    return jsonify({"success": True, "sections": service.list_sections()})


@v1_bp.route("/sections/<key>", methods=["GET"])
def get_section(key):
    state = service.load_section(key)
    admin = request.args.get("admin") == "true" and is_admin_request()
    data = normalize_section_state(state, admin=admin)
    data["success"] = True
    return jsonify(data)


@v1_bp.route("/sections/<key>", methods=["PUT"])
@admin_required
def save_section(key):
    row = service.save_section(
        key,
        request.get_json(silent=True),
        actor_id=current_actor_id(),
    )
    return jsonify({
        "success": True,
        "section": normalize_section_row(row, admin=True),
        "message": "Section saved successfully",
    })


@v1_bp.route("/sections/<key>/seed", methods=["POST"])
@admin_required
def seed_section(key):
    row, created = service.seed_section(key, actor_id=current_actor_id())
    return jsonify({
        "success": True,
        "created": created,
        "section": normalize_section_row(row, admin=True),
    }), 201 if created else 200


@v1_bp.route("/sections/<key>/history", methods=["GET"])
@admin_required
def section_history(key):
    rows = service.section_history(key)
    return jsonify({
        "success": True,
        "rows": [normalize_section_row(r, admin=True) for r in rows],
    })


@v1_bp.route("/sections/<key>/rows/<row_id>/activate", methods=["POST"])
@admin_required
def activate_section_row(key, row_id):
    row = service.activate_section_row(key, row_id, actor_id=current_actor_id())
    return jsonify({
        "success": True,
        "section": normalize_section_row(row, admin=True),
    })
