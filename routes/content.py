# routes/content.py
"""Projects, blog posts and timeline entries: public reads, admin writes."""
from flask import Blueprint, jsonify
from pydantic import ValidationError

from controllers.auth_controller import admin_required
from controllers.content_controller import (
    get_storage,
    invalid_payload,
    serialize,
    validate_payload,
)
from models.schemas import InsertBlogPost, InsertProject, InsertTimelineEntry


def crud_blueprint(name, url_prefix, schema, label, entity, plural):
    """
    Build a blueprint exposing list/get/create/update/delete for one entity.

    ``entity`` and ``plural`` name the storage methods, e.g. ``project`` and
    ``projects`` map to ``get_all_projects``, ``get_project``,
    ``create_project``, ``update_project`` and ``delete_project``.
    """
    bp = Blueprint(name, __name__, url_prefix=url_prefix)

    def storage_op(verb):
        return getattr(get_storage(), verb)

    @bp.route("", methods=["GET"])
    def list_items():
        items = storage_op(f"get_all_{plural}")()
        return jsonify([serialize(item) for item in items])

    @bp.route("/<int:item_id>", methods=["GET"])
    def get_item(item_id):
        item = storage_op(f"get_{entity}")(item_id)
        if item is None:
            return jsonify({"message": f"{label.capitalize()} not found"}), 404
        return jsonify(serialize(item))

    @bp.route("", methods=["POST"])
    @admin_required
    def create_item():
        try:
            data = validate_payload(schema)
        except ValidationError as ve:
            return invalid_payload(label, ve)
        item = storage_op(f"create_{entity}")(data)
        return jsonify(serialize(item)), 201

    @bp.route("/<int:item_id>", methods=["PUT"])
    @admin_required
    def update_item(item_id):
        try:
            data = validate_payload(schema)
        except ValidationError as ve:
            return invalid_payload(label, ve)
        # NotFoundError -> 404 via the app error handler
        item = storage_op(f"update_{entity}")(item_id, data)
        return jsonify(serialize(item))

    @bp.route("/<int:item_id>", methods=["DELETE"])
    @admin_required
    def delete_item(item_id):
        if not storage_op(f"delete_{entity}")(item_id):
            return jsonify({"message": f"{label.capitalize()} not found"}), 404
        return "", 204

    return bp


projects_bp = crud_blueprint(
    "projects", "/api/projects", InsertProject, "project", "project", "projects"
)
blog_posts_bp = crud_blueprint(
    "blog_posts", "/api/blog-posts", InsertBlogPost, "blog post", "blog_post", "blog_posts"
)
timeline_bp = crud_blueprint(
    "timeline_entries", "/api/timeline-entries", InsertTimelineEntry, "timeline entry",
    "timeline_entry", "timeline_entries"
)
