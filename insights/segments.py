"""
Rule-based segment detection.

A segment is a cohort of interviews sharing a tag/stress pattern. Each rule
looks at one interview at a time: the union of its tag ids and its mean
stress. Add a segment by appending to SEGMENT_RULES.
"""

from dataclasses import dataclass
from typing import Callable, Iterable

from models import Interview, SegmentCount

# Mean stress used for interviews with no stress samples at all.
NEUTRAL_STRESS = 3.0


@dataclass(frozen=True)
class InterviewProfile:
    """What the segment rules see of an interview."""
    tag_ids: frozenset[str]
    mean_stress: float

    @classmethod
    def from_interview(cls, interview: Interview) -> "InterviewProfile":
        levels = interview.stress_levels()
        mean = sum(levels) / len(levels) if levels else NEUTRAL_STRESS
        return cls(tag_ids=frozenset(interview.tag_ids()), mean_stress=mean)

    def has(self, tag_id: str) -> bool:
        return tag_id in self.tag_ids

    def has_any(self, *tag_ids: str) -> bool:
        return any(t in self.tag_ids for t in tag_ids)


@dataclass(frozen=True)
class SegmentRule:
    name: str
    description: str
    predicate: Callable[[InterviewProfile], bool]

    def matches(self, profile: InterviewProfile) -> bool:
        return bool(self.predicate(profile))


SEGMENT_RULES: tuple[SegmentRule, ...] = (
    SegmentRule(
        name="Efficiency Seekers",
        description="Efficiency focused + Routine driven",
        predicate=lambda p: p.has("m_efficiency") and p.has_any("b_routine", "b_habit"),
    ),
    SegmentRule(
        name="High-Friction Users",
        description="Usability/Time friction + High stress",
        predicate=lambda p: p.has_any("f_time", "f_usability") and p.mean_stress > 3,
    ),
    SegmentRule(
        name="Workaround Experts",
        description="Workaround heavy + Control seeking",
        predicate=lambda p: p.has("b_workaround") and p.has("m_control"),
    ),
)


def detect_segments(interviews: Iterable[Interview],
                    rules: Iterable[SegmentRule] = SEGMENT_RULES) -> list[SegmentCount]:
    """Count matching interviews per rule. An interview may match several rules or none."""
    rules = tuple(rules)
    counts = [0] * len(rules)

    for interview in interviews:
        profile = InterviewProfile.from_interview(interview)
        for index, rule in enumerate(rules):
            if rule.matches(profile):
                counts[index] += 1

    return [
        SegmentCount(name=rule.name, description=rule.description, count=count)
        for rule, count in zip(rules, counts)
    ]
