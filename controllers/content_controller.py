# controllers/content_controller.py
from flask import current_app, jsonify, request
from pydantic import BaseModel, ValidationError

from db.storage import Storage


def get_storage() -> Storage:
    return current_app.extensions["storage"]


def validate_payload(schema, payload=None):
    """
    Validate a request body against ``schema``.
    Reads the JSON body of the current request when ``payload`` is omitted;
    a missing or malformed body fails validation like any other bad input.
    May raise pydantic.ValidationError.
    """
    if payload is None:
        payload = request.get_json(silent=True)
    return schema.model_validate(payload)


def serialize(model: BaseModel, exclude=None) -> dict:
    """camelCase JSON-ready dict with ISO-8601 timestamps."""
    return model.model_dump(mode="json", by_alias=True, exclude=exclude)


def serialize_user(user) -> dict:
    return serialize(user, exclude={"password"})


def invalid_payload(label: str, ve: ValidationError):
    return jsonify({
        "message": f"Invalid {label} data",
        "errors": ve.errors(include_url=False, include_context=False, include_input=False),
    }), 400
