# routes/contact.py
from flask import Blueprint, current_app, jsonify
from pydantic import ValidationError

from controllers.auth_controller import admin_required
from controllers.contact_controller import process_contact_message
from controllers.content_controller import get_storage, invalid_payload, serialize

bp = Blueprint("contact", __name__, url_prefix="/api")


@bp.route("/contact", methods=["POST"])
def contact():
    try:
        message = process_contact_message(current_app)
    except ValidationError as ve:
        return invalid_payload("contact message", ve)
    return jsonify(serialize(message)), 201


@bp.route("/contact-messages", methods=["GET"])
@admin_required
def list_messages():
    messages = get_storage().get_all_contact_messages()
    return jsonify([serialize(m) for m in messages])


@bp.route("/contact-messages/<int:message_id>/read", methods=["PUT"])
@admin_required
def mark_read(message_id):
    message = get_storage().mark_contact_message_as_read(message_id)
    return jsonify(serialize(message))


@bp.route("/contact-messages/<int:message_id>", methods=["DELETE"])
@admin_required
def delete_message(message_id):
    if not get_storage().delete_contact_message(message_id):
        return jsonify({"message": "Contact message not found"}), 404
    return "", 204
