"""
Shared helpers for API routes.
"""

from flask import abort, jsonify, request

from models import Interview, Project
from repositories import get_repository


def error(message: str, status: int = 400):
    """JSON error response."""
    return jsonify({"error": message}), status


def abort_json(message: str, status: int = 400):
    """Stop the request with a JSON error body."""
    response = jsonify({"error": message})
    response.status_code = status
    abort(response)


def json_body() -> dict:
    """Request JSON as a dict; anything else is a 400."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        abort_json("Expected a JSON object")
    return data


def load_project(project_id: str) -> Project:
    project = get_repository().projects.get(project_id)
    if project is None:
        abort_json("Project not found", 404)
    return project


def load_interview(interview_id: str) -> Interview:
    interview = get_repository().interviews.get(interview_id)
    if interview is None:
        abort_json("Interview not found", 404)
    return interview
