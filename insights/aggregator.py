"""
Insights aggregation across the interviews of a project.

Pure function of (interviews, tag catalog, template). Every mean is
zero-guarded; unknown tag ids and orphaned sections degrade instead of
raising.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from models import (
    CategoryStress,
    InsightsResult,
    Interview,
    Tag,
    TagCategory,
    TagFrequency,
    TemplateCategory,
    UNKNOWN_CATEGORY,
)
from .segments import SEGMENT_RULES, SegmentRule, detect_segments

logger = logging.getLogger(__name__)


def round_half_up(value: float, places: int = 0) -> float:
    """
    Round half up on the exact binary value, like a JS toFixed display.

    2.25 -> 2.3 and 12.5 -> 13, but 23 / 20 (stored as 1.1499...) -> 1.1.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def _index_tags(tags: Iterable[Tag]) -> dict[str, Tag]:
    lookup: dict[str, Tag] = {}
    for tag in tags:
        tag_id = getattr(tag, "id", None)
        if tag_id:
            lookup.setdefault(tag_id, tag)
    return lookup


def _top_in_category(tag_counts: dict[str, int], lookup: dict[str, Tag],
                     category: TagCategory) -> Optional[str]:
    # Strict greater-than: the first tag encountered keeps a tie.
    top_id, top_count = None, 0
    for tag_id, count in tag_counts.items():
        tag = lookup.get(tag_id)
        if tag is None or tag.category != category:
            continue
        if count > top_count:
            top_id, top_count = tag_id, count
    return top_id


def compute_insights(
    interviews: Iterable[Interview],
    tags: Iterable[Tag],
    template_categories: Iterable[TemplateCategory],
    segment_rules: Iterable[SegmentRule] = SEGMENT_RULES,
) -> InsightsResult:
    """
    Aggregate statistics for the insights view.

    Args:
        interviews: Interviews of one project (already filtered).
        tags: Full tag catalog, predefined + custom.
        template_categories: Template in display order.
        segment_rules: Segment decision table.

    Returns:
        InsightsResult. Empty input gives zero values, never NaN.
    """
    interviews = list(interviews)
    template = list(template_categories)
    lookup = _index_tags(tags)
    total = len(interviews)

    stressed = [cat for cat in template if cat.enable_stress]
    cat_sum = {cat.id: 0 for cat in stressed}
    cat_count = {cat.id: 0 for cat in stressed}

    stress_sum = 0
    stress_count = 0
    tag_counts: dict[str, int] = {}

    for interview in interviews:
        for section in interview.sections:
            # Sections without a stress-enabled category still count overall.
            keyed = section.category_id in cat_sum
            for question in section.questions:
                if question.stress_level is not None:
                    stress_sum += question.stress_level
                    stress_count += 1
                    if keyed:
                        cat_sum[section.category_id] += question.stress_level
                        cat_count[section.category_id] += 1
                for tag_id in question.tags:
                    if tag_id:
                        tag_counts[tag_id] = tag_counts.get(tag_id, 0) + 1

    overall = round_half_up(stress_sum / stress_count, 1) if stress_count else 0.0

    category_stress = []
    highest: Optional[CategoryStress] = None
    highest_avg = 0.0
    for cat in stressed:
        samples = cat_count[cat.id]
        avg = cat_sum[cat.id] / samples if samples else 0.0
        entry = CategoryStress(
            category_id=cat.id,
            name=cat.name,
            avg_stress=round_half_up(avg, 1),
            samples=samples,
        )
        category_stress.append(entry)
        if avg > highest_avg:
            highest_avg = avg
            highest = entry

    rows: dict[str, TagFrequency] = {}
    for tag_id, count in tag_counts.items():
        tag = lookup.get(tag_id)
        percent = int(round_half_up(count / total * 100)) if total else 0
        rows[tag_id] = TagFrequency(
            id=tag_id,
            name=tag.name if tag else tag_id,
            category=tag.category.value if tag else UNKNOWN_CATEGORY,
            count=count,
            percent=percent,
        )
    # sorted() is stable, so equal counts keep encounter order.
    tag_frequency = sorted(rows.values(), key=lambda r: -r.count)

    top_behaviour = _top_in_category(tag_counts, lookup, TagCategory.BEHAVIOUR)
    top_friction = _top_in_category(tag_counts, lookup, TagCategory.FRICTION)

    result = InsightsResult(
        total_interviews=total,
        overall_avg_stress=overall,
        category_stress=category_stress,
        highest_stress_category=highest,
        tag_frequency=tag_frequency,
        top_behaviour_tag=rows[top_behaviour] if top_behaviour else None,
        top_friction_tag=rows[top_friction] if top_friction else None,
        segments=detect_segments(interviews, segment_rules),
    )
    logger.debug("insights over %d interviews: %d stress samples, %d distinct tags",
                 total, stress_count, len(tag_counts))
    return result


def compute_project_insights(
    project_id: str,
    interviews: Iterable[Interview],
    tags: Iterable[Tag],
    template_categories: Iterable[TemplateCategory],
) -> InsightsResult:
    """Same as compute_insights, restricted to interviews of one project."""
    scoped = [i for i in interviews if i.project_id == project_id]
    return compute_insights(scoped, tags, template_categories)
