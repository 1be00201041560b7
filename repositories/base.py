"""
Repository base classes - define the interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional

from models import Project, Interview, Tag, TemplateCategory
from tagging import TagCatalog

T = TypeVar("T")


class BaseRepository(ABC, Generic[T]):
    """Abstract base for entity repositories."""

    @abstractmethod
    def get(self, id: str) -> Optional[T]:
        """Get entity by ID."""
        pass

    @abstractmethod
    def save(self, entity: T) -> None:
        """Save entity."""
        pass

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Delete entity by ID. Returns True if deleted."""
        pass

    @abstractmethod
    def list(self) -> list[T]:
        """List all entities."""
        pass

    @abstractmethod
    def exists(self, id: str) -> bool:
        """Check if entity exists."""
        pass


class ProjectRepository(BaseRepository[Project]):
    """Repository for projects."""


class InterviewRepository(BaseRepository[Interview]):
    """Repository for interviews."""

    @abstractmethod
    def get_for_project(self, project_id: str) -> list[Interview]:
        """Get all interviews of a project."""
        pass

    @abstractmethod
    def count(self, project_id: str) -> int:
        """Count interviews of a project."""
        pass

    @abstractmethod
    def delete_for_project(self, project_id: str) -> int:
        """Delete every interview of a project. Returns how many were removed."""
        pass


class CustomTagRepository(ABC):
    """Repository for custom tags (append-only)."""

    @abstractmethod
    def list(self) -> list[Tag]:
        """All custom tags in creation order."""
        pass

    @abstractmethod
    def append(self, tag: Tag) -> None:
        """Persist a new custom tag."""
        pass

    def get(self, id: str) -> Optional[Tag]:
        for tag in self.list():
            if tag.id == id:
                return tag
        return None


class TemplateRepository(ABC):
    """Repository for the interview template."""

    @abstractmethod
    def get(self) -> list[TemplateCategory]:
        """Current template (falls back to the default template)."""
        pass

    @abstractmethod
    def save(self, categories: list[TemplateCategory]) -> None:
        """Replace the template."""
        pass


class Repository(ABC):
    """
    Aggregate repository - provides access to all entity repositories.

    This is what consumers use. Backend implementations provide
    concrete versions of each sub-repository.
    """

    @property
    @abstractmethod
    def projects(self) -> ProjectRepository:
        """Access project repository."""
        pass

    @property
    @abstractmethod
    def interviews(self) -> InterviewRepository:
        """Access interview repository."""
        pass

    @property
    @abstractmethod
    def tags(self) -> CustomTagRepository:
        """Access custom tag repository."""
        pass

    @property
    @abstractmethod
    def templates(self) -> TemplateRepository:
        """Access template repository."""
        pass

    def catalog(self) -> TagCatalog:
        """Predefined tags plus every persisted custom tag."""
        return TagCatalog(custom=self.tags.list())

    def delete_project(self, project_id: str) -> bool:
        """Delete a project and cascade to its interviews."""
        if not self.projects.exists(project_id):
            return False
        self.interviews.delete_for_project(project_id)
        return self.projects.delete(project_id)
