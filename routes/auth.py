# routes/auth.py
from flask import Blueprint, current_app, jsonify
from pydantic import ValidationError

from controllers.auth_controller import (
    authenticate,
    current_user,
    login_session,
    logout_session,
    register_user,
)
from controllers.content_controller import invalid_payload, serialize_user
from utils.errors import ConflictError

bp = Blueprint("auth", __name__, url_prefix="/api")


@bp.route("/login", methods=["POST"])
def login():
    try:
        user = authenticate()
    except ValidationError as ve:
        return invalid_payload("login", ve)

    if user is None:
        return jsonify({"message": "Invalid username or password"}), 401

    login_session(user)
    current_app.logger.info("User %s logged in", user.username)
    return jsonify(serialize_user(user))


@bp.route("/register", methods=["POST"])
def register():
    try:
        user = register_user()
    except ValidationError as ve:
        return invalid_payload("registration", ve)
    except ConflictError:
        return jsonify({"message": "Username already exists"}), 400

    login_session(user)
    current_app.logger.info("Registered user %s", user.username)
    return jsonify(serialize_user(user)), 201


@bp.route("/logout", methods=["POST"])
def logout():
    logout_session()
    return jsonify({"message": "Logged out"})


@bp.route("/user", methods=["GET"])
def me():
    user = current_user()
    if user is None:
        return jsonify({"message": "Not logged in"}), 401
    return jsonify(serialize_user(user))
