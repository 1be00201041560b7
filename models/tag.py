"""
Tags - short categorical labels attached to question notes.
"""

from enum import Enum
from pydantic import ConfigDict

from .base import RecordModel


class TagCategory(str, Enum):
    """Semantic group a tag belongs to."""
    BEHAVIOUR = "Behaviour"
    MOTIVATION = "Motivation"
    FRICTION = "Friction"
    IMPACT = "Impact"


class Tag(RecordModel):
    """
    A tag definition.

    Identity is ``id``; it never changes once created. Predefined tags ship
    with the catalog, custom tags are created by the researcher.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: TagCategory
    is_custom: bool = False
