"""
Insights - aggregate statistics across the interviews of one project.

Computed on demand by ``insights.compute_insights``; never stored.
"""

from typing import Optional
from pydantic import BaseModel, Field


UNKNOWN_CATEGORY = "Unknown"


class CategoryStress(BaseModel):
    """Average stress for one stress-enabled template category."""
    category_id: str
    name: str
    avg_stress: float = 0.0  # Rounded to 1 decimal
    samples: int = 0


class TagFrequency(BaseModel):
    """
    One row of the tag frequency table.

    ``percent`` is occurrences over interview count, so it can exceed 100.
    """
    id: str
    name: str
    category: str = UNKNOWN_CATEGORY  # TagCategory value or "Unknown"
    count: int = 0
    percent: int = 0


class SegmentCount(BaseModel):
    """How many interviews fall into a rule-based segment."""
    name: str
    description: str = ""
    count: int = 0


class InsightsResult(BaseModel):
    """Everything the insights view renders for a project."""
    total_interviews: int = 0
    overall_avg_stress: float = 0.0
    category_stress: list[CategoryStress] = Field(default_factory=list)
    highest_stress_category: Optional[CategoryStress] = None
    tag_frequency: list[TagFrequency] = Field(default_factory=list)
    top_behaviour_tag: Optional[TagFrequency] = None
    top_friction_tag: Optional[TagFrequency] = None
    segments: list[SegmentCount] = Field(default_factory=list)

    @property
    def segment_counts(self) -> dict[str, int]:
        return {s.name: s.count for s in self.segments}

    @property
    def has_data(self) -> bool:
        return self.total_interviews > 0

    @property
    def any_segment_detected(self) -> bool:
        return any(s.count > 0 for s in self.segments)

    def to_dict(self) -> dict:
        """JSON-ready dict including the derived segment counts."""
        data = self.model_dump(mode="json")
        data["segment_counts"] = self.segment_counts
        return data
