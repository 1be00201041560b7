"""
Notebook operations on interviews.

These mutate the in-memory records; callers persist the result through the
repository. Unknown interview sections or questions raise KeyError.
"""

import logging
from typing import Iterable, Mapping, Optional

from models import (
    Interview,
    InterviewMetadata,
    InterviewSection,
    Question,
    TemplateCategory,
    find_category,
)
from tagging import TagCatalog, auto_tag_note

logger = logging.getLogger(__name__)

# Fields a caller may change on a question.
QUESTION_FIELDS = {"prompt", "notes", "stress_level", "tags"}


def create_interview(project_id: str, template: list[TemplateCategory],
                     existing_count: int = 0) -> Interview:
    """
    New interview with one blank question per template category.

    The participant id continues the project's numbering (P1, P2, ...).
    """
    sections = [
        InterviewSection(category_id=cat.id, questions=[Question.for_category(cat)])
        for cat in template
    ]
    interview = Interview(
        project_id=project_id,
        metadata=InterviewMetadata(participant_id=f"P{existing_count + 1}"),
        sections=sections,
    )
    logger.info("Created interview %s in project %s", interview.id, project_id)
    return interview


def get_section(interview: Interview, category_id: str) -> InterviewSection:
    section = interview.section_for(category_id)
    if section is None:
        raise KeyError(f"Interview {interview.id} has no section for category {category_id}")
    return section


def get_question(interview: Interview, category_id: str, question_id: str) -> Question:
    question = get_section(interview, category_id).get_question(question_id)
    if question is None:
        raise KeyError(f"Question not found: {question_id}")
    return question


def add_question(interview: Interview, category_id: str,
                 template: list[TemplateCategory]) -> Question:
    """Append a blank question to a section."""
    section = get_section(interview, category_id)
    question = Question.for_category(find_category(template, category_id))
    section.questions.append(question)
    interview.touch()
    return question


def update_question(interview: Interview, category_id: str, question_id: str,
                    updates: Mapping) -> Question:
    """
    Apply a partial update to a question.

    Accepts snake_case or camelCase keys; unknown keys are ignored.
    Raises pydantic.ValidationError for out-of-range values.
    """
    section = get_section(interview, category_id)
    current = get_question(interview, category_id, question_id)

    data = current.model_dump()
    for key, value in updates.items():
        name = Question.field_name_for(key)
        if name in QUESTION_FIELDS:
            data[name] = value
    data["id"] = current.id

    updated = Question.model_validate(data)
    section.questions = [updated if q.id == question_id else q for q in section.questions]
    interview.touch()
    return updated


def delete_question(interview: Interview, category_id: str, question_id: str) -> None:
    if not get_section(interview, category_id).remove_question(question_id):
        raise KeyError(f"Question not found: {question_id}")
    interview.touch()


def duplicate_question(interview: Interview, category_id: str, question_id: str) -> Question:
    """Copy a question (notes, stress and tags included) right after itself."""
    copy = get_section(interview, category_id).duplicate_question(question_id)
    if copy is None:
        raise KeyError(f"Question not found: {question_id}")
    interview.touch()
    return copy


def toggle_tag(interview: Interview, category_id: str, question_id: str, tag_id: str) -> bool:
    """Apply or remove one tag by hand. Returns True if the tag is now applied."""
    applied = get_question(interview, category_id, question_id).toggle_tag(tag_id)
    interview.touch()
    return applied


def update_metadata(interview: Interview, updates: Mapping) -> InterviewMetadata:
    """Partial metadata update; validates mode and field types."""
    data = interview.metadata.model_dump()
    for key, value in updates.items():
        name = InterviewMetadata.field_name_for(key)
        if name:
            data[name] = value
    interview.metadata = InterviewMetadata.model_validate(data)
    interview.touch()
    return interview.metadata


def apply_template(interviews: Iterable[Interview], template: list[TemplateCategory],
                   project_id: Optional[str] = None) -> list[Interview]:
    """
    Normalize interviews against an edited template.

    Only interviews of ``project_id`` are touched when it is given.
    Returns the interviews that changed.
    """
    changed = []
    for interview in interviews:
        if project_id and interview.project_id != project_id:
            continue
        if interview.normalize(template):
            changed.append(interview)
    logger.info("Template applied: %d interviews updated", len(changed))
    return changed


def tags_enabled(template: Optional[list[TemplateCategory]], category_id: str) -> bool:
    """Whether a category accepts tags. Categories missing from the template do not."""
    if template is None:
        return True
    category = find_category(template, category_id)
    return category is not None and category.enable_tags


def update_notes(interview: Interview, category_id: str, question_id: str, notes: str,
                 catalog: TagCatalog,
                 template: Optional[list[TemplateCategory]] = None) -> list[str]:
    """
    Store new note text and merge in auto-tags.

    Auto-tags only add; manually applied tags are never removed. Nothing is
    tagged when the category has tags disabled. Returns the tag ids added.
    """
    question = get_question(interview, category_id, question_id)
    question.notes = notes

    added: list[str] = []
    if tags_enabled(template, category_id):
        added = question.merge_tags(sorted(auto_tag_note(notes, catalog)))
    interview.touch()
    return added


def apply_generated_notes(interview: Interview, category_id: str, notes: Mapping[str, str],
                          catalog: TagCatalog,
                          template: Optional[list[TemplateCategory]] = None) -> dict[str, list[str]]:
    """
    Merge externally generated notes (e.g. from a transcript) into a section.

    Args:
        notes: question id -> generated note text. Blank notes are skipped.

    Returns:
        question id -> tag ids added, for every question that was updated.
    """
    section = get_section(interview, category_id)
    results: dict[str, list[str]] = {}

    for question_id, text in notes.items():
        if not text or not text.strip():
            continue
        if section.get_question(question_id) is None:
            logger.warning("Generated note for unknown question %s skipped", question_id)
            continue
        results[question_id] = update_notes(interview, category_id, question_id, text,
                                            catalog, template)
    return results
