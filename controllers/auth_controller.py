# controllers/auth_controller.py
from functools import wraps
from typing import Optional

from flask import current_app, g, jsonify, session
from werkzeug.security import check_password_hash, generate_password_hash

from controllers.content_controller import get_storage, validate_payload
from models.schemas import InsertUser, LoginSchema, RegisterSchema, User


def current_user() -> Optional[User]:
    """The user bound to this request's session, looked up once per request."""
    if "current_user" not in g:
        user_id = session.get("user_id")
        g.current_user = get_storage().get_user(user_id) if user_id is not None else None
    return g.current_user


def admin_required(view):
    """Decorator for route handlers that only an admin may call."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        user = current_user()
        if user is None or user.role != "admin":
            return jsonify({"message": "Unauthorized"}), 401
        return view(*args, **kwargs)
    return wrapped


def login_session(user: User):
    session.clear()
    current_app.session_interface.regenerate(session)
    session["user_id"] = user.id
    session.permanent = True
    g.current_user = user


def logout_session():
    session.clear()
    g.current_user = None


def authenticate(payload=None) -> Optional[User]:
    """
    Check username/password. Returns the user, or None on bad credentials.
    May raise pydantic.ValidationError.
    """
    credentials = validate_payload(LoginSchema, payload)
    user = get_storage().get_user_by_username(credentials.username)
    if user is None or not check_password_hash(user.password, credentials.password):
        return None
    return user


def register_user(payload=None) -> User:
    """
    Create a regular (non-admin) account with a hashed password.
    May raise pydantic.ValidationError or ConflictError.
    """
    data = validate_payload(RegisterSchema, payload)
    new_user = InsertUser(
        username=data.username,
        password=generate_password_hash(data.password),
        name=data.name,
        email=data.email,
        role="user",
    )
    return get_storage().create_user(new_user)
