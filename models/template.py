"""
Interview template - the ordered categories every interview is split into.
"""

from typing import Optional

from .base import RecordModel


class TemplateCategory(RecordModel):
    """A named section of the interview template and its active facets."""
    id: str
    name: str
    enable_stress: bool = False
    enable_tags: bool = True


DEFAULT_TEMPLATE_CATEGORIES: tuple[TemplateCategory, ...] = (
    TemplateCategory(id="cat_context", name="Context", enable_stress=False, enable_tags=True),
    TemplateCategory(id="cat_decisions", name="Decisions", enable_stress=False, enable_tags=True),
    TemplateCategory(id="cat_stress", name="Stress", enable_stress=True, enable_tags=True),
    TemplateCategory(id="cat_coping", name="Coping", enable_stress=True, enable_tags=True),
    TemplateCategory(id="cat_impact", name="Impact", enable_stress=True, enable_tags=True),
)


def default_template() -> list[TemplateCategory]:
    """Fresh copies of the built-in template categories."""
    return [cat.model_copy() for cat in DEFAULT_TEMPLATE_CATEGORIES]


def find_category(template: list[TemplateCategory], category_id: str) -> Optional[TemplateCategory]:
    """Look up a template category by id (None if it was removed)."""
    for cat in template:
        if cat.id == category_id:
            return cat
    return None
