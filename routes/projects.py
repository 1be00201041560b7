"""
Project management API routes.

Handles CRUD for research projects. Deleting a project cascades to its
interviews.
"""

from flask import jsonify

from models import Project
from repositories import get_repository
from . import projects_bp
from .helpers import error, json_body, load_project


def _project_summary(project: Project) -> dict:
    data = project.to_record()
    data["interviewCount"] = get_repository().interviews.count(project.id)
    return data


@projects_bp.route("/api/projects")
def list_projects():
    """List all projects, most recently updated first."""
    projects = get_repository().projects.list()
    return jsonify([_project_summary(p) for p in projects])


@projects_bp.route("/api/projects", methods=["POST"])
def create_project():
    """Create a new project."""
    data = json_body()
    name = str(data.get("name", "")).strip()
    if not name:
        return error("Name required")

    project = Project(name=name, description=str(data.get("description", "")))
    get_repository().projects.save(project)
    return jsonify(_project_summary(project)), 201


@projects_bp.route("/api/projects/<project_id>")
def get_project(project_id):
    """Get a single project."""
    return jsonify(_project_summary(load_project(project_id)))


@projects_bp.route("/api/projects/<project_id>", methods=["PATCH"])
def update_project(project_id):
    """Update name and/or description."""
    project = load_project(project_id)
    data = json_body()

    if "name" in data:
        project.rename(str(data["name"]))
    if "description" in data:
        project.describe(str(data["description"]))

    get_repository().projects.save(project)
    return jsonify(_project_summary(project))


@projects_bp.route("/api/projects/<project_id>", methods=["DELETE"])
def delete_project(project_id):
    """Delete a project and all of its interviews."""
    if not get_repository().delete_project(project_id):
        return error("Project not found", 404)
    return jsonify({"success": True})
