"""
Project - the root aggregate. Owns zero or more interviews.
"""

from pydantic import Field

from .base import BaseEntity, new_id


class Project(BaseEntity):
    """A research project."""

    id: str = Field(default_factory=lambda: new_id("proj"))
    name: str
    description: str = ""

    def rename(self, name: str) -> None:
        """Change the display name."""
        normalized = name.strip()
        if not normalized:
            raise ValueError("Project name cannot be empty")
        self.name = normalized
        self.touch()

    def describe(self, description: str) -> None:
        self.description = description
        self.touch()
