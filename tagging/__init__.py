"""
Tagging - tag catalog, keyword auto-tagger and live suggestions.

Usage:
    from tagging import TagCatalog, auto_tag_note

    catalog = TagCatalog(custom=repo.tags.list())
    tag_ids = auto_tag_note(question.notes, catalog)
"""

from .catalog import PREDEFINED_TAGS, TagCatalog, normalize_tag_name
from .autotag import KEYWORD_MAP, auto_tag_note, phrase_in_text
from .suggest import AUTO_SUGGEST_MAPPING, LEADING_QUESTION_KEYWORDS, is_leading_question, suggest_tags

__all__ = [
    "PREDEFINED_TAGS",
    "TagCatalog",
    "normalize_tag_name",
    "KEYWORD_MAP",
    "auto_tag_note",
    "phrase_in_text",
    "AUTO_SUGGEST_MAPPING",
    "LEADING_QUESTION_KEYWORDS",
    "is_leading_question",
    "suggest_tags",
]
