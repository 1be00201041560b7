"""
Interview API routes.

Interview CRUD, question editing, generated-note import and export.
Every mutation re-saves the whole interview record.
"""

from flask import Response, jsonify, request

import notebook
from repositories import get_repository
from tagging import is_leading_question, suggest_tags
from . import interviews_bp
from .helpers import error, json_body, load_interview, load_project


def _question_payload(question, category_id, added_tags=None) -> dict:
    data = question.to_record()
    data["addedTags"] = added_tags or []
    if notebook.tags_enabled(get_repository().templates.get(), category_id):
        data["suggestedTags"] = suggest_tags(question.notes, exclude=question.tags)
    else:
        data["suggestedTags"] = []
    data["leadingQuestion"] = is_leading_question(question.prompt)
    return data


@interviews_bp.route("/api/projects/<project_id>/interviews")
def list_interviews(project_id):
    """All interviews of a project, newest first."""
    load_project(project_id)
    interviews = get_repository().interviews.get_for_project(project_id)
    return jsonify([i.to_record() for i in interviews])


@interviews_bp.route("/api/projects/<project_id>/interviews", methods=["POST"])
def create_interview(project_id):
    """Start a new interview from the current template."""
    load_project(project_id)
    repo = get_repository()

    interview = notebook.create_interview(
        project_id,
        repo.templates.get(),
        existing_count=repo.interviews.count(project_id),
    )
    repo.interviews.save(interview)
    return jsonify(interview.to_record()), 201


@interviews_bp.route("/api/interviews/<interview_id>")
def get_interview(interview_id):
    return jsonify(load_interview(interview_id).to_record())


@interviews_bp.route("/api/interviews/<interview_id>", methods=["PATCH"])
def update_interview(interview_id):
    """Update interview metadata (participant, date, city, mode, duration)."""
    interview = load_interview(interview_id)
    data = json_body()
    updates = data.get("metadata", data)
    if not isinstance(updates, dict):
        return error("metadata must be an object")

    notebook.update_metadata(interview, updates)
    get_repository().interviews.save(interview)
    return jsonify(interview.to_record())


@interviews_bp.route("/api/interviews/<interview_id>", methods=["DELETE"])
def delete_interview(interview_id):
    if not get_repository().interviews.delete(interview_id):
        return error("Interview not found", 404)
    return jsonify({"success": True})


@interviews_bp.route("/api/interviews/<interview_id>/sections/<category_id>/questions",
                     methods=["POST"])
def add_question(interview_id, category_id):
    interview = load_interview(interview_id)
    repo = get_repository()

    question = notebook.add_question(interview, category_id, repo.templates.get())
    repo.interviews.save(interview)
    return jsonify(_question_payload(question, category_id)), 201


@interviews_bp.route("/api/interviews/<interview_id>/sections/<category_id>/questions/<question_id>",
                     methods=["PATCH"])
def update_question(interview_id, category_id, question_id):
    """
    Partial question update.

    When notes change, auto-tags are merged in unless ``autoTag`` is false.
    The response carries live tag suggestions and the leading-question flag.
    """
    interview = load_interview(interview_id)
    repo = get_repository()
    data = json_body()
    auto_tag = data.pop("autoTag", True)
    if not isinstance(auto_tag, bool):
        return error("autoTag must be true or false")

    question = notebook.update_question(interview, category_id, question_id, data)
    added = []
    if "notes" in data and auto_tag:
        added = notebook.update_notes(interview, category_id, question_id, question.notes,
                                      repo.catalog(), repo.templates.get())
        question = notebook.get_question(interview, category_id, question_id)

    repo.interviews.save(interview)
    return jsonify(_question_payload(question, category_id, added))


@interviews_bp.route("/api/interviews/<interview_id>/sections/<category_id>/questions/<question_id>",
                     methods=["DELETE"])
def delete_question(interview_id, category_id, question_id):
    interview = load_interview(interview_id)
    notebook.delete_question(interview, category_id, question_id)
    get_repository().interviews.save(interview)
    return jsonify({"success": True})


@interviews_bp.route(
    "/api/interviews/<interview_id>/sections/<category_id>/questions/<question_id>/duplicate",
    methods=["POST"])
def duplicate_question(interview_id, category_id, question_id):
    interview = load_interview(interview_id)
    copy = notebook.duplicate_question(interview, category_id, question_id)
    get_repository().interviews.save(interview)
    return jsonify(_question_payload(copy, category_id)), 201


@interviews_bp.route(
    "/api/interviews/<interview_id>/sections/<category_id>/questions/<question_id>/tags/<tag_id>/toggle",
    methods=["POST"])
def toggle_question_tag(interview_id, category_id, question_id, tag_id):
    """Apply or remove a tag by hand. Tags are never toggled on tag-disabled categories."""
    interview = load_interview(interview_id)
    repo = get_repository()
    if not notebook.tags_enabled(repo.templates.get(), category_id):
        return error("Tags are disabled for this category")
    question = notebook.get_question(interview, category_id, question_id)
    # Stale or auto-tagger-only ids can still be removed.
    if tag_id not in question.tags and tag_id not in repo.catalog():
        return error(f"Unknown tag: {tag_id}", 404)

    applied = notebook.toggle_tag(interview, category_id, question_id, tag_id)
    repo.interviews.save(interview)
    data = _question_payload(question, category_id)
    data["applied"] = applied
    return jsonify(data)


@interviews_bp.route("/api/interviews/<interview_id>/sections/<category_id>/generated-notes",
                     methods=["POST"])
def import_generated_notes(interview_id, category_id):
    """
    Merge notes produced outside the notebook (e.g. from a transcript).

    Body: {"notes": {question_id: text}} or
          {"notes": [{"questionId": ..., "note": ...}, ...]}
    """
    interview = load_interview(interview_id)
    repo = get_repository()
    notes = json_body().get("notes")

    if isinstance(notes, list):
        try:
            notes = {str(n["questionId"]): str(n.get("note", "")) for n in notes}
        except (KeyError, TypeError):
            return error("Each note needs a questionId")
    if not isinstance(notes, dict):
        return error("notes must be an object or a list")

    added = notebook.apply_generated_notes(interview, category_id, notes,
                                           repo.catalog(), repo.templates.get())
    repo.interviews.save(interview)
    return jsonify({"updated": list(added), "addedTags": added,
                    "interview": interview.to_record()})


@interviews_bp.route("/api/interviews/<interview_id>/export")
def export_interview(interview_id):
    """Download as JSON (default) or as a text summary (?format=text)."""
    interview = load_interview(interview_id)
    fmt = request.args.get("format", "json")

    if fmt == "json":
        body = notebook.export_interview_json(interview)
        mimetype, filename = "application/json", f"interview_{interview.id}.json"
    elif fmt == "text":
        body = notebook.build_text_summary(interview, get_repository().templates.get())
        mimetype, filename = "text/plain", f"summary_{interview.id}.txt"
    else:
        return error(f"Unknown export format: {fmt}")

    return Response(body, mimetype=mimetype,
                    headers={"Content-Disposition": f"attachment; filename={filename}"})
