"""
Notebook - interview editing operations and export.
"""

from .interviews import (
    add_question,
    apply_generated_notes,
    apply_template,
    create_interview,
    delete_question,
    duplicate_question,
    get_question,
    get_section,
    tags_enabled,
    toggle_tag,
    update_metadata,
    update_notes,
    update_question,
)
from .export import build_text_summary, export_interview_json

__all__ = [
    "add_question",
    "apply_generated_notes",
    "apply_template",
    "create_interview",
    "delete_question",
    "duplicate_question",
    "get_question",
    "get_section",
    "tags_enabled",
    "toggle_tag",
    "update_metadata",
    "update_notes",
    "update_question",
    "build_text_summary",
    "export_interview_json",
]
