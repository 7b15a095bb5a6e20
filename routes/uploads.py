# routes/uploads.py
from flask import Blueprint, current_app, jsonify, request, send_from_directory

from controllers.auth_controller import admin_required
from utils.uploads import UploadError, save_upload

bp = Blueprint("uploads", __name__)


@bp.route("/api/upload", methods=["POST"])
@admin_required
def upload():
    try:
        url = save_upload(
            request.files.get("file"),
            current_app.config["UPLOAD_FOLDER"],
            current_app.config["MAX_UPLOAD_BYTES"],
        )
    except UploadError as e:
        return jsonify({"message": str(e)}), 400
    current_app.logger.info("Stored upload %s", url)
    return jsonify({"url": url})


@bp.route("/uploads/<path:filename>", methods=["GET"])
def uploaded_file(filename):
    return send_from_directory(current_app.config["UPLOAD_FOLDER"], filename)
