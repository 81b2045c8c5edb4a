from flask import current_app, jsonify
from sqlalchemy import text

from standsite.extensions import db
from . import v1_bp


@v1_bp.route("/health", methods=["GET"])
def health_check():
    try:
        db.session.execute(text("SELECT 1"))
        database = "ok"
    except Exception as exc:
        db.session.rollback()
        current_app.logger.error("Health check database error: %s", exc)
        database = "unavailable"

    status = 200 if database == "ok" else 503
    return jsonify({
        "status": "ok" if status == 200 else "degraded",
        "service": "standsite-api",
        "database": database,
    }), status
