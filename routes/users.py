# routes/users.py
from flask import Blueprint, jsonify
from pydantic import ValidationError

from controllers.auth_controller import admin_required
from controllers.content_controller import get_storage, invalid_payload, serialize_user, validate_payload
from models.schemas import RoleUpdateSchema

bp = Blueprint("users", __name__, url_prefix="/api/users")


@bp.route("", methods=["GET"])
@admin_required
def list_users():
    return jsonify([serialize_user(u) for u in get_storage().get_all_users()])


@bp.route("/<int:user_id>", methods=["GET"])
@admin_required
def get_user(user_id):
    user = get_storage().get_user(user_id)
    if user is None:
        return jsonify({"message": "User not found"}), 404
    return jsonify(serialize_user(user))


@bp.route("/<int:user_id>/role", methods=["PUT"])
@admin_required
def update_role(user_id):
    try:
        data = validate_payload(RoleUpdateSchema)
    except ValidationError as ve:
        return invalid_payload("role", ve)
    user = get_storage().update_user_role(user_id, data.role)
    return jsonify(serialize_user(user))


@bp.route("/<int:user_id>", methods=["DELETE"])
@admin_required
def delete_user(user_id):
    if not get_storage().delete_user(user_id):
        return jsonify({"message": "User not found"}), 404
    return "", 204
