"""
Tag API routes - catalog listing, custom tags, auto-tagging and suggestions.
"""

from flask import jsonify, request

from models import TagCategory
from repositories import get_repository
from tagging import auto_tag_note, is_leading_question, suggest_tags
from . import tags_bp
from .helpers import error, json_body


@tags_bp.route("/api/tags")
def list_tags():
    """Predefined then custom tags; ?q= filters by name, ?category= by category."""
    catalog = get_repository().catalog()
    tags = catalog.search(request.args["q"]) if request.args.get("q") else list(catalog)

    category = request.args.get("category")
    if category:
        tags = [t for t in tags if t.category.value == category]
    return jsonify([t.to_record() for t in tags])


@tags_bp.route("/api/tags", methods=["POST"])
def create_tag():
    """
    Create a custom tag.

    Names are normalized (lowercase, spaces to hyphens). Creating a name
    that already exists returns the existing tag with 200.
    """
    data = json_body()
    name = str(data.get("name", ""))
    try:
        category = TagCategory(data.get("category", TagCategory.BEHAVIOUR.value))
    except ValueError:
        return error(f"Unknown tag category: {data.get('category')}")

    repo = get_repository()
    catalog = repo.catalog()
    updated, tag = catalog.with_custom(name, category)
    if updated is catalog:
        return jsonify(tag.to_record())

    repo.tags.append(tag)
    return jsonify(tag.to_record()), 201


@tags_bp.route("/api/tags/auto-tag", methods=["POST"])
def auto_tag():
    """Tag ids the auto-tagger would add for {text}."""
    text = str(json_body().get("text", ""))
    tag_ids = auto_tag_note(text, get_repository().catalog())
    return jsonify({"tagIds": sorted(tag_ids)})


@tags_bp.route("/api/tags/suggest", methods=["POST"])
def suggest():
    """
    Live suggestions for {text}, minus {exclude}.

    When {prompt} is given the response also flags leading questions.
    """
    data = json_body()
    exclude = data.get("exclude") or []
    if not isinstance(exclude, list):
        return error("exclude must be a list")

    result = {"tagIds": suggest_tags(str(data.get("text", "")), exclude=exclude)}
    if "prompt" in data:
        result["leadingQuestion"] = is_leading_question(str(data["prompt"]))
    return jsonify(result)
