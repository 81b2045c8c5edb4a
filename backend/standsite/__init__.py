from flask import Flask, send_file, send_from_directory, current_app, abort
from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .commands import register_commands
from .errors import error_response, register_error_handlers
from .utils.logging import configure_logging
from .utils.storage import LocalStorage, init_storage
from flask_swagger_ui import get_swaggerui_blueprint
import os

from . import models  # noqa: F401  (registers every table on db.metadata)


def create_app(config_name: str = "development", config_overrides=None) -> Flask:
    app = Flask(__name__)
    config = config_by_name[config_name]
    config.validate()
    app.config.from_object(config)
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(app)

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    storage = init_storage(app)

    register_jwt_handlers()

    if not app.config["ADMIN_AUTH_REQUIRED"]:
        app.logger.warning(
            "ADMIN_AUTH_REQUIRED is off: admin endpoints accept unauthenticated requests"
        )

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)
    register_commands(app)

    # -------------------------------------------------
    # Uploaded media (local storage backend only)
    # -------------------------------------------------
    if isinstance(storage, LocalStorage):
        media_prefix = app.config.get("MEDIA_URL_PREFIX", "/media").rstrip("/")

        @app.route(f"{media_prefix}/<bucket>/<path:path>", methods=["GET"], endpoint="media")
        def serve_media(bucket, path):
            bucket_root = os.path.join(storage.root, bucket)
            if not os.path.isdir(bucket_root):
                abort(404)
            return send_from_directory(bucket_root, path)

    # -------------------------------------------------
    # Serve OpenAPI YAML
    # -------------------------------------------------
    @app.route("/openapi/standsite.yaml", methods=["GET"], endpoint="openapi_standsite")
    def serve_openapi():
        spec_path = os.path.join(
            current_app.root_path,
            "api",
            "v1",
            "openapi.yaml",
        )

        if not os.path.exists(spec_path):
            abort(404)

        return send_file(
            spec_path,
            mimetype="application/yaml",
            as_attachment=False,
        )

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/standsite.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Standsite API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    return app


def register_jwt_handlers():
    """Token failures answer with the same envelope as every other error."""

    @jwt.unauthorized_loader
    def missing_token(reason):
        return error_response("Authentication required", 401)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return error_response(f"Invalid token: {reason}", 401)

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return error_response("Token has expired", 401)

    @jwt.revoked_token_loader
    def revoked_token(jwt_header, jwt_payload):
        return error_response("Token has been revoked", 401)
