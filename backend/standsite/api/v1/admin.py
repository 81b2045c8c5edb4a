from flask import jsonify

from standsite.application.dashboard import dashboard_summary
from standsite.utils.decorators import admin_required
from . import v1_bp


@v1_bp.route("/admin/dashboard", methods=["GET"])
@admin_required
def admin_dashboard():
    return jsonify({
        "success": True,
        "dashboard": dashboard_summary(),
    })
