"""
Insights - cross-interview statistics for a project.
"""

from .aggregator import compute_insights, compute_project_insights, round_half_up
from .segments import SEGMENT_RULES, InterviewProfile, SegmentRule, detect_segments
from .cache import InsightsCache, content_hash

__all__ = [
    "compute_insights",
    "compute_project_insights",
    "round_half_up",
    "SEGMENT_RULES",
    "InterviewProfile",
    "SegmentRule",
    "detect_segments",
    "InsightsCache",
    "content_hash",
]
