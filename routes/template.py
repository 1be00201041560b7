"""
Template API routes.

The template is the ordered list of interview categories. Saving it does
not touch interviews; /api/template/apply normalizes them explicitly.
"""

from flask import jsonify, request
from pydantic import TypeAdapter

import notebook
from models import TemplateCategory
from repositories import get_repository
from . import template_bp
from .helpers import error, json_body

_categories_adapter = TypeAdapter(list[TemplateCategory])


def _request_data():
    data = request.get_json(silent=True)
    return data if isinstance(data, list) else json_body()


def _parse_categories(data):
    if isinstance(data, dict):
        data = data.get("categories")
    if not isinstance(data, list):
        return None
    return _categories_adapter.validate_python(data)


@template_bp.route("/api/template")
def get_template():
    return jsonify([c.to_record() for c in get_repository().templates.get()])


@template_bp.route("/api/template", methods=["PUT"])
def save_template():
    """Replace the template. Body: list of categories or {"categories": [...]}."""
    categories = _parse_categories(_request_data())
    if categories is None:
        return error("categories must be a list")

    get_repository().templates.save(categories)
    return jsonify([c.to_record() for c in categories])


@template_bp.route("/api/template/apply", methods=["POST"])
def apply_template():
    """
    Normalize stored interviews against the template.

    Body may carry "categories" (saved first) and "projectId" to limit
    the update to one project.
    """
    data = json_body()
    repo = get_repository()

    if "categories" in data:
        categories = _parse_categories(data)
        if categories is None:
            return error("categories must be a list")
        repo.templates.save(categories)

    template = repo.templates.get()
    project_id = data.get("projectId")
    interviews = (repo.interviews.get_for_project(project_id) if project_id
                  else repo.interviews.list())

    changed = notebook.apply_template(interviews, template, project_id=project_id)
    for interview in changed:
        repo.interviews.save(interview)
    return jsonify({"updated": len(changed)})
