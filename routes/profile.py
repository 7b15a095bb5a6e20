# routes/profile.py
from flask import Blueprint, jsonify
from pydantic import ValidationError

from controllers.auth_controller import admin_required
from controllers.content_controller import get_storage, invalid_payload, serialize, validate_payload
from models.schemas import InsertProfile

bp = Blueprint("profile", __name__, url_prefix="/api")


@bp.route("/profile", methods=["GET"])
def get_profile():
    profile = get_storage().get_profile()
    if profile is None:
        return jsonify({"message": "Profile not found"}), 404
    return jsonify(serialize(profile))


@bp.route("/profile", methods=["POST"])
@admin_required
def upsert_profile():
    try:
        data = validate_payload(InsertProfile)
    except ValidationError as ve:
        return invalid_payload("profile", ve)
    return jsonify(serialize(get_storage().upsert_profile(data)))
