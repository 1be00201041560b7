"""
Tag catalog - predefined tags plus the researcher's custom tags.

The catalog is a plain value passed into the tagger and the aggregator.
Nothing here reads or writes storage.
"""

import re
from typing import Iterable, Iterator, Optional

from models import Tag, TagCategory, new_id


def _tag(id: str, name: str, category: TagCategory) -> Tag:
    return Tag(id=id, name=name, category=category)


B, M, F, I = (TagCategory.BEHAVIOUR, TagCategory.MOTIVATION,
              TagCategory.FRICTION, TagCategory.IMPACT)

PREDEFINED_TAGS: tuple[Tag, ...] = (
    # Behaviour
    _tag("b_routine", "routine-driven", B),
    _tag("b_adaptive", "adaptive", B),
    _tag("b_proactive", "proactive", B),
    _tag("b_reactive", "reactive", B),
    _tag("b_workaround", "workaround-heavy", B),
    _tag("b_comparison", "comparison-oriented", B),
    _tag("b_habit", "habit-based", B),
    _tag("b_tool_switch", "tool-switching", B),

    # Motivation
    _tag("m_convenience", "convenience-seeking", M),
    _tag("m_efficiency", "efficiency-focused", M),
    _tag("m_cost", "cost-sensitive", M),
    _tag("m_quality", "quality-focused", M),
    _tag("m_risk_averse", "risk-averse", M),
    _tag("m_control", "control-seeking", M),
    _tag("m_flexibility", "flexibility-valuing", M),
    _tag("m_safety", "safety-conscious", M),

    # Friction
    _tag("f_time", "time-friction", F),
    _tag("f_info", "information-gap", F),
    _tag("f_coordination", "coordination-friction", F),
    _tag("f_usability", "usability-friction", F),
    _tag("f_access", "access-barrier", F),
    _tag("f_trust", "trust-friction", F),
    _tag("f_reliability", "reliability-issue", F),
    _tag("f_overload", "overload", F),
    _tag("f_uncertainty", "uncertainty", F),
    _tag("f_inconsistency", "inconsistency", F),

    # Impact
    _tag("i_mental", "mental-fatigue", I),
    _tag("i_decision", "decision-fatigue", I),
    _tag("i_stress", "stress-elevation", I),
    _tag("i_disengage", "disengagement", I),
    _tag("i_reduced", "reduced-performance", I),
    _tag("i_avoidance", "avoidance-behaviour", I),
    _tag("i_satisfaction", "satisfaction", I),
    _tag("i_neutral", "neutral-impact", I),
)


def normalize_tag_name(name: str) -> str:
    """'Dark Mode ' -> 'dark-mode'."""
    return re.sub(r"\s+", "-", name.strip().lower())


class TagCatalog:
    """
    Ordered view over predefined + custom tags.

    Iteration yields predefined tags first, then custom tags in creation
    order. If an id appears twice the first definition wins for lookups.
    """

    def __init__(self, predefined: Iterable[Tag] = PREDEFINED_TAGS, custom: Iterable[Tag] = ()):
        self._predefined = tuple(predefined)
        self._custom = tuple(custom)
        self._by_id: dict[str, Tag] = {}
        for tag in self:
            self._by_id.setdefault(tag.id, tag)

    @property
    def predefined(self) -> tuple[Tag, ...]:
        return self._predefined

    @property
    def custom(self) -> tuple[Tag, ...]:
        return self._custom

    def __iter__(self) -> Iterator[Tag]:
        yield from self._predefined
        yield from self._custom

    def __len__(self) -> int:
        return len(self._predefined) + len(self._custom)

    def __contains__(self, tag_id: object) -> bool:
        return tag_id in self._by_id

    def get(self, tag_id: str) -> Optional[Tag]:
        return self._by_id.get(tag_id)

    def find_by_name(self, name: str) -> Optional[Tag]:
        normalized = normalize_tag_name(name)
        for tag in self:
            if tag.name == normalized:
                return tag
        return None

    def by_category(self, category: TagCategory) -> list[Tag]:
        return [t for t in self if t.category == category]

    def search(self, query: str) -> list[Tag]:
        """Tags whose name contains the query (case-insensitive)."""
        q = query.lower()
        return [t for t in self if q in t.name.lower()]

    def with_custom(self, name: str, category: TagCategory = TagCategory.BEHAVIOUR) -> tuple["TagCatalog", Tag]:
        """
        Return a new catalog with a custom tag appended, plus that tag.

        Re-creating an existing name returns the existing tag and this
        catalog unchanged.
        """
        normalized = normalize_tag_name(name)
        if not normalized:
            raise ValueError("Tag name cannot be empty")

        existing = self.find_by_name(normalized)
        if existing is not None:
            return self, existing

        tag_id = new_id("c")
        while tag_id in self:
            tag_id = new_id("c")

        tag = Tag(id=tag_id, name=normalized, category=category, is_custom=True)
        return TagCatalog(self._predefined, (*self._custom, tag)), tag
