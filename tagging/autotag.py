"""
Auto-tagger - offline keyword tagging of free-text notes.

Runs on every note change and on bulk notes produced by transcript
processing. Only ever proposes tags; callers merge them in.
"""

import logging
import re
from functools import lru_cache
from typing import Iterable

from models import Tag

logger = logging.getLogger(__name__)

# Minimum name length (exclusive) for a catalog tag to match itself in text.
MIN_SELF_MATCH_NAME_LENGTH = 3

# Tag id -> trigger phrases, checked in order. Ids need not exist in the
# catalog; unknown ids show up as "Unknown" in insights.
KEYWORD_MAP: dict[str, list[str]] = {
    "b_routine": ["every day", "daily", "routine", "usually", "always", "habit"],
    "b_workaround": ["excel", "spreadsheet", "manually", "copy paste", "hack", "workaround"],
    "m_efficiency": ["faster", "save time", "quick", "speed up"],
    "m_control": ["export", "see everything", "control", "customize"],
    "m_safety": ["backup", "safe", "lose data", "secure", "privacy"],
    "f_time": ["took too long", "slow", "wait", "hours", "waste of time"],
    "f_usability": ["confusing", "hard to find", "clunky", "where is", "complicated", "difficult"],
    "f_cost": ["expensive", "too much", "price", "budget", "cost"],
    "i_churn": ["cancel", "stop using", "alternative", "switch"],
    "i_support": ["call support", "help desk", "ticket", "contact support"],
}


@lru_cache(maxsize=2048)
def _phrase_pattern(phrase: str) -> re.Pattern:
    # Boundaries only at the outer edges; inner spaces/hyphens are literal.
    return re.compile(rf"\b{re.escape(phrase)}\b", re.IGNORECASE)


def phrase_in_text(phrase: str, text: str) -> bool:
    """Whole-word/phrase match: 'wait' matches 'please wait' but not 'waiting'."""
    if not phrase:
        return False
    return _phrase_pattern(phrase.lower()).search(text) is not None


def auto_tag_note(note_text: str, existing_tags: Iterable[Tag]) -> set[str]:
    """
    Tag ids suggested for a note.

    Args:
        note_text: Free-form note text.
        existing_tags: Full catalog (predefined + custom). Any tag whose
            name is longer than 3 characters matches itself.

    Returns:
        Set of matched tag ids (empty for empty text).
    """
    if not note_text:
        return set()

    text = note_text.lower()
    matched: set[str] = set()

    for tag_id, phrases in KEYWORD_MAP.items():
        for phrase in phrases:
            if phrase_in_text(phrase, text):
                matched.add(tag_id)
                break

    for tag in existing_tags:
        tag_id = getattr(tag, "id", None)
        name = getattr(tag, "name", None)
        if not tag_id or not name:
            continue
        if len(name) > MIN_SELF_MATCH_NAME_LENGTH and phrase_in_text(name.lower(), text):
            matched.add(tag_id)

    logger.debug("auto-tagged %d chars -> %s", len(note_text), sorted(matched))
    return matched
