"""
Live suggestions while a note is being typed, and prompt bias checks.

Uses its own, smaller mapping and matches whole tokens only. Do not merge
with the auto-tagger's KEYWORD_MAP: the tables differ on purpose.
"""

import re
from typing import Iterable

# Keyword -> tag ids it suggests.
AUTO_SUGGEST_MAPPING: dict[str, list[str]] = {
    "slow": ["f_time"],
    "confusing": ["f_usability"],
    "hard": ["f_usability", "f_time"],
    "error": ["f_reliability"],
    "bug": ["f_reliability"],
    "down": ["f_reliability"],
    "wait": ["f_time"],
    "expensive": ["m_cost"],
    "cheap": ["m_cost"],
    "price": ["m_cost"],
    "tired": ["i_mental"],
    "stress": ["i_stress"],
    "quit": ["i_avoidance"],
    "stop": ["i_avoidance"],
    "always": ["b_routine", "b_habit"],
    "switch": ["b_tool_switch"],
    "compare": ["b_comparison"],
    "alternative": ["b_comparison"],
}

LEADING_QUESTION_KEYWORDS: tuple[str, ...] = (
    "would you like",
    "don't you think",
    "isn't it better",
    "do you think this feature",
)


def tokenize(text: str) -> set[str]:
    """Lowercased tokens split on non-word characters."""
    return {t for t in re.split(r"\W+", text.lower()) if t}


def suggest_tags(text: str, exclude: Iterable[str] = ()) -> list[str]:
    """
    Tag ids to offer as one-click suggestions.

    Args:
        text: Current note text.
        exclude: Tag ids already on the question.

    Returns:
        Ordered, de-duplicated tag ids (mapping order).
    """
    tokens = tokenize(text)
    if not tokens:
        return []

    skip = set(exclude)
    suggestions: dict[str, None] = {}
    for keyword, tag_ids in AUTO_SUGGEST_MAPPING.items():
        if keyword in tokens:
            for tag_id in tag_ids:
                if tag_id not in skip:
                    suggestions[tag_id] = None
    return list(suggestions)


def is_leading_question(prompt: str) -> bool:
    """True if the prompt contains a known leading phrase."""
    lowered = prompt.lower()
    return any(keyword in lowered for keyword in LEADING_QUESTION_KEYWORDS)
