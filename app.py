# app.py
from datetime import timedelta

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from config.config import Config
from db.memory_storage import MemStorage
from db.seed import ensure_admin, seed_storage
from db.sql_storage import SqlStorage
from routes.auth import bp as auth_bp
from routes.contact import bp as contact_bp
from routes.content import blog_posts_bp, projects_bp, timeline_bp
from routes.profile import bp as profile_bp
from routes.uploads import bp as uploads_bp
from routes.users import bp as users_bp
from utils.email_service import init_mail
from utils.errors import ConflictError, NotFoundError
from utils.sessions import StorageSessionInterface


def build_storage(config):
    backend = config["STORAGE_BACKEND"]
    if backend == "memory":
        return MemStorage()
    if backend == "sql":
        return SqlStorage(config["DATABASE_URL"])
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")


def register_error_handlers(app):
    @app.errorhandler(NotFoundError)
    def not_found(e):
        return jsonify({"message": str(e)}), 404

    @app.errorhandler(ConflictError)
    def conflict(e):
        return jsonify({"message": str(e)}), 400

    @app.errorhandler(RequestEntityTooLarge)
    def too_large(e):
        if request.endpoint == "uploads.upload":
            return jsonify({"message": "File too large"}), 400
        return jsonify({"message": "Request body too large"}), 400

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({"message": e.description}), e.code

    @app.errorhandler(Exception)
    def unexpected(e):
        # details stay in the server log
        app.logger.exception("Unhandled error")
        return jsonify({"message": "Internal server error"}), 500


def create_app(config=None, storage=None):
    app = Flask(__name__)

    # Load config values from Config, then explicit overrides (tests)
    app.config.from_object(Config)
    app.config.update(config or {})
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(days=app.config["SESSION_LIFETIME_DAYS"])
    # multipart overhead on top of the per-file limit enforced in utils.uploads
    app.config["MAX_CONTENT_LENGTH"] = app.config["MAX_UPLOAD_BYTES"] + 1024 * 1024

    # CORS
    CORS(app, origins=app.config["ALLOWED_ORIGINS"], supports_credentials=True)

    # Storage is built once here and handed to the routes through app.extensions
    if storage is None:
        storage = build_storage(app.config)
    app.extensions["storage"] = storage
    app.session_interface = StorageSessionInterface(storage.session_store)

    pruned = storage.session_store.prune()
    if pruned:
        app.logger.info("Pruned %d expired sessions", pruned)

    if app.config["SEED_DATA"]:
        try:
            seed_storage(storage)
        except Exception:
            app.logger.exception("Seeding sample content failed")
    ensure_admin(
        storage,
        app.config.get("ADMIN_USERNAME"),
        app.config.get("ADMIN_PASSWORD"),
        name=app.config.get("ADMIN_NAME"),
        email=app.config.get("ADMIN_EMAIL"),
    )

    # init mail
    init_mail(app)

    # register blueprints
    for bp in (auth_bp, projects_bp, blog_posts_bp, timeline_bp, contact_bp, profile_bp, users_bp, uploads_bp):
        app.register_blueprint(bp)
    register_error_handlers(app)

    @app.route("/", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    @app.route("/health/db", methods=["GET"])
    def health_db():
        """Simple storage health check endpoint.
        Returns 200 if the backing store answers, otherwise returns 503.
        """
        try:
            storage.ping()
            return jsonify({"db": "ok"})
        except Exception:
            app.logger.exception("DB health check failed")
            return jsonify({"db": "error"}), 503

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host=Config.APP_HOST, port=Config.APP_PORT, debug=Config.DEBUG)
