"""
Unit test fixtures.

All unit tests should be:
- Fast (< 100ms)
- Isolated (no file system, no app)
- Deterministic (same result every time)
"""

import pytest

from models import (
    Interview,
    InterviewSection,
    Question,
    Tag,
    TagCategory,
    TemplateCategory,
)
from tagging import TagCatalog


@pytest.fixture
def catalog():
    """Predefined tags only."""
    return TagCatalog()


@pytest.fixture
def template():
    """Two-category template: one plain, one stress-tracking."""
    return [
        TemplateCategory(id="cat_a", name="Alpha", enable_stress=False),
        TemplateCategory(id="cat_b", name="Beta", enable_stress=True),
    ]


@pytest.fixture
def make_interview():
    """
    Build an interview from {category_id: [(stress, [tags]), ...]}.

    Usage:
        interview = make_interview({"cat_b": [(4, ["f_time"])]})
    """
    def build(sections, project_id="proj_1", **metadata):
        return Interview(
            project_id=project_id,
            metadata=metadata,
            sections=[
                InterviewSection(
                    category_id=cat_id,
                    questions=[Question(stress_level=s, tags=list(t)) for s, t in questions],
                )
                for cat_id, questions in sections.items()
            ],
        )
    return build


@pytest.fixture
def custom_tag():
    return Tag(id="c_dark", name="dark-mode", category=TagCategory.BEHAVIOUR, is_custom=True)
