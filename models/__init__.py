"""
Domain models - single source of truth for all records.

Design principles:
- Every record defined once
- Validation at the boundary (stress range, tag categories, modes)
- Stored with camelCase keys, used with snake_case attributes
- Backend-agnostic (repository handles persistence)
"""

from .base import BaseEntity, RecordModel, TimestampMixin, new_id
from .tag import Tag, TagCategory
from .template import TemplateCategory, DEFAULT_TEMPLATE_CATEGORIES, default_template, find_category
from .interview import Interview, InterviewMetadata, InterviewMode, InterviewSection, Question
from .project import Project
from .insights import CategoryStress, InsightsResult, SegmentCount, TagFrequency, UNKNOWN_CATEGORY

__all__ = [
    # Base
    "BaseEntity",
    "RecordModel",
    "TimestampMixin",
    "new_id",
    # Tags
    "Tag",
    "TagCategory",
    # Template
    "TemplateCategory",
    "DEFAULT_TEMPLATE_CATEGORIES",
    "default_template",
    "find_category",
    # Interviews
    "Interview",
    "InterviewMetadata",
    "InterviewMode",
    "InterviewSection",
    "Question",
    # Project
    "Project",
    # Insights
    "CategoryStress",
    "InsightsResult",
    "SegmentCount",
    "TagFrequency",
    "UNKNOWN_CATEGORY",
]
