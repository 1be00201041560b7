"""
Interview records - metadata plus per-category sections of questions.
"""

from datetime import date
from enum import Enum
from typing import Iterable, Iterator, Optional
from pydantic import ConfigDict, Field, field_validator

from .base import BaseEntity, RecordModel, new_id
from .template import TemplateCategory


def _today() -> str:
    return date.today().isoformat()


class InterviewMode(str, Enum):
    """How the interview was captured."""
    LIVE = "Live"
    TRANSCRIPT = "Transcript"


class Question(RecordModel):
    """
    A single prompt within a section, with the researcher's notes.

    ``tags`` keeps insertion order (the order the UI shows them in).
    """
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: new_id("q"))
    prompt: str = ""
    notes: str = ""
    stress_level: Optional[int] = Field(default=None, ge=1, le=5)
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def _drop_duplicate_tags(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))

    @classmethod
    def for_category(cls, category: Optional[TemplateCategory]) -> "Question":
        """Blank question; stress defaults to 3 only where the category tracks it."""
        stress = 3 if category is not None and category.enable_stress else None
        return cls(stress_level=stress)

    def toggle_tag(self, tag_id: str) -> bool:
        """Add or remove a tag. Returns True if the tag is now applied."""
        if tag_id in self.tags:
            self.tags = [t for t in self.tags if t != tag_id]
            return False
        self.tags = [*self.tags, tag_id]
        return True

    def merge_tags(self, tag_ids: Iterable[str]) -> list[str]:
        """Add tags without removing any. Returns the ids actually added."""
        added = [t for t in dict.fromkeys(tag_ids) if t and t not in self.tags]
        if added:
            self.tags = [*self.tags, *added]
        return added

    def duplicate(self) -> "Question":
        """Copy of this question under a fresh id."""
        return self.model_copy(update={"id": new_id("q")}, deep=True)


class InterviewSection(RecordModel):
    """The realization of one template category inside an interview."""
    category_id: str
    questions: list[Question] = Field(default_factory=list)

    def get_question(self, question_id: str) -> Optional[Question]:
        for q in self.questions:
            if q.id == question_id:
                return q
        return None

    def remove_question(self, question_id: str) -> bool:
        """Delete a question. Returns True if it existed."""
        before = len(self.questions)
        self.questions = [q for q in self.questions if q.id != question_id]
        return len(self.questions) < before

    def duplicate_question(self, question_id: str) -> Optional[Question]:
        """Insert a copy directly after the original."""
        for index, q in enumerate(self.questions):
            if q.id == question_id:
                copy = q.duplicate()
                self.questions.insert(index + 1, copy)
                return copy
        return None


class InterviewMetadata(RecordModel):
    """Who, when, where and how."""
    participant_id: str = ""
    date: str = Field(default_factory=_today)
    city: str = ""
    mode: InterviewMode = InterviewMode.LIVE
    duration: str = ""


class Interview(BaseEntity):
    """
    One interview, owned by exactly one project.

    Sections are normally one per template category; a category added to the
    template later has no section until ``normalize`` runs.
    """
    id: str = Field(default_factory=lambda: new_id("int"))
    project_id: str
    metadata: InterviewMetadata = Field(default_factory=InterviewMetadata)
    sections: list[InterviewSection] = Field(default_factory=list)

    def section_for(self, category_id: str) -> Optional[InterviewSection]:
        for section in self.sections:
            if section.category_id == category_id:
                return section
        return None

    def iter_questions(self) -> Iterator[Question]:
        for section in self.sections:
            yield from section.questions

    def tag_ids(self) -> set[str]:
        """Union of every tag id used anywhere in the interview."""
        return {t for q in self.iter_questions() for t in q.tags}

    def stress_levels(self) -> list[int]:
        return [q.stress_level for q in self.iter_questions() if q.stress_level is not None]

    def normalize(self, template: list[TemplateCategory]) -> bool:
        """
        Align sections with the template.

        One section per category in template order. Existing sections keep
        their questions, missing ones are created empty, and sections whose
        category left the template are dropped. Returns True if anything
        changed.
        """
        sections = []
        for cat in template:
            existing = self.section_for(cat.id)
            sections.append(existing if existing is not None else InterviewSection(category_id=cat.id))

        changed = [s.category_id for s in sections] != [s.category_id for s in self.sections]
        if changed:
            self.sections = sections
            self.touch()
        return changed
