"""
JSON file backend - stores records as JSON files.

Directory structure:
    {data_dir}/
        projects/{project_id}/
            project.json                 - Project metadata
            interviews/{interview_id}.json
        custom_tags.json                 - Custom tags (append-only)
        template.json                    - Interview template
"""

from __future__ import annotations

import json
import logging
import re
import shutil
import threading
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

import config
from models import Project, Interview, Tag, TemplateCategory
from .base import (
    Repository,
    ProjectRepository,
    InterviewRepository,
    CustomTagRepository,
    TemplateRepository,
)

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]+$")


def _check_id(id: str) -> str:
    if not id or not _SAFE_ID.match(id):
        raise ValueError(f"Invalid record id: {id!r}")
    return id


def _is_safe(id: str) -> bool:
    return bool(id) and bool(_SAFE_ID.match(id))


class WriteQueue:
    """Thread-safe write serialization."""

    def __init__(self):
        self._lock = threading.Lock()

    def write_json(self, path: Path, data: Any) -> None:
        """Atomic JSON write."""
        with self._lock:
            path.parent.mkdir(parents=True, exist_ok=True)
            temp = path.with_suffix(".json.tmp")
            with open(temp, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, default=str)
            temp.replace(path)


_write_queue = WriteQueue()


def _read_json(path: Path) -> Optional[Any]:
    """Read a JSON file; corrupt or missing files read as None."""
    if not path.exists():
        return None
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Corrupt JSON in %s: %s", path, e)
        return None


class JsonProjectRepository(ProjectRepository):
    """JSON file implementation of project repository."""

    def __init__(self, base_path: Path):
        self._base_path = base_path / "projects"

    def _project_dir(self, id: str) -> Path:
        return self._base_path / id

    def _project_file(self, id: str) -> Path:
        return self._project_dir(id) / "project.json"

    def get(self, id: str) -> Optional[Project]:
        if not _is_safe(id):
            return None
        data = _read_json(self._project_file(id))
        if data is None:
            return None
        try:
            return Project.model_validate(data)
        except ValidationError as e:
            logger.warning("Invalid project.json for %s: %s", id, e)
            return None

    def save(self, entity: Project) -> None:
        _check_id(entity.id)
        entity.touch()
        _write_queue.write_json(self._project_file(entity.id), entity.to_record())
        logger.info("Saved project %s", entity.id)

    def delete(self, id: str) -> bool:
        if not _is_safe(id):
            return False
        project_dir = self._project_dir(id)
        if not project_dir.exists():
            return False
        shutil.rmtree(project_dir)
        logger.info("Deleted project %s", id)
        return True

    def list(self) -> list[Project]:
        if not self._base_path.exists():
            return []

        projects = []
        for d in self._base_path.iterdir():
            if d.is_dir():
                project = self.get(d.name)
                if project:
                    projects.append(project)

        return sorted(projects, key=lambda p: p.updated_at, reverse=True)

    def exists(self, id: str) -> bool:
        return _is_safe(id) and self._project_file(id).exists()


class JsonInterviewRepository(InterviewRepository):
    """JSON file implementation of interview repository."""

    def __init__(self, base_path: Path):
        self._base_path = base_path / "projects"

    def _interview_dir(self, project_id: str) -> Path:
        return self._base_path / project_id / "interviews"

    def _find_file(self, id: str) -> Optional[Path]:
        if not _is_safe(id) or not self._base_path.exists():
            return None
        for path in self._base_path.glob(f"*/interviews/{id}.json"):
            return path
        return None

    def _load(self, path: Path) -> Optional[Interview]:
        data = _read_json(path)
        if data is None:
            return None
        try:
            return Interview.model_validate(data)
        except ValidationError as e:
            logger.warning("Invalid interview file %s: %s", path, e)
            return None

    def get(self, id: str) -> Optional[Interview]:
        path = self._find_file(id)
        return self._load(path) if path else None

    def save(self, entity: Interview) -> None:
        _check_id(entity.id)
        _check_id(entity.project_id)

        # An interview never moves between projects, but clean up if it did.
        existing = self._find_file(entity.id)
        target = self._interview_dir(entity.project_id) / f"{entity.id}.json"
        if existing is not None and existing != target:
            existing.unlink()

        entity.touch()
        _write_queue.write_json(target, entity.to_record())
        logger.debug("Saved interview %s (project %s)", entity.id, entity.project_id)

    def delete(self, id: str) -> bool:
        path = self._find_file(id)
        if path is None:
            return False
        path.unlink()
        logger.info("Deleted interview %s", id)
        return True

    def list(self) -> list[Interview]:
        if not self._base_path.exists():
            return []
        interviews = []
        for d in self._base_path.iterdir():
            if d.is_dir():
                interviews.extend(self.get_for_project(d.name))
        return sorted(interviews, key=lambda i: i.created_at, reverse=True)

    def exists(self, id: str) -> bool:
        return self._find_file(id) is not None

    def get_for_project(self, project_id: str) -> list[Interview]:
        if not _is_safe(project_id):
            return []
        directory = self._interview_dir(project_id)
        if not directory.exists():
            return []

        interviews = []
        for path in directory.glob("*.json"):
            interview = self._load(path)
            if interview:
                interviews.append(interview)
        # Newest first, like the notebook list.
        return sorted(interviews, key=lambda i: i.created_at, reverse=True)

    def count(self, project_id: str) -> int:
        if not _is_safe(project_id):
            return 0
        directory = self._interview_dir(project_id)
        if not directory.exists():
            return 0
        return sum(1 for _ in directory.glob("*.json"))

    def delete_for_project(self, project_id: str) -> int:
        if not _is_safe(project_id):
            return 0
        directory = self._interview_dir(project_id)
        if not directory.exists():
            return 0
        removed = self.count(project_id)
        shutil.rmtree(directory)
        logger.info("Deleted %d interviews of project %s", removed, project_id)
        return removed


class JsonCustomTagRepository(CustomTagRepository):
    """Custom tags stored as one JSON list."""

    def __init__(self, base_path: Path):
        self._path = base_path / "custom_tags.json"
        self._lock = threading.Lock()

    def list(self) -> list[Tag]:
        data = _read_json(self._path)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning("Ignoring %s: expected a list of tags", self._path)
            return []

        tags = []
        for item in data:
            try:
                tags.append(Tag.model_validate({**item, "isCustom": True}))
            except (ValidationError, TypeError) as e:
                logger.warning("Skipping invalid custom tag %r: %s", item, e)
        return tags

    def append(self, tag: Tag) -> None:
        with self._lock:
            tags = self.list()
            if any(t.id == tag.id for t in tags):
                raise ValueError(f"Tag id already exists: {tag.id}")
            tags.append(tag)
            _write_queue.write_json(self._path, [t.to_record() for t in tags])
        logger.info("Added custom tag %s (%s)", tag.id, tag.name)


class JsonTemplateRepository(TemplateRepository):
    """Interview template stored as one JSON list."""

    def __init__(self, base_path: Path):
        self._path = base_path / "template.json"

    def get(self) -> list[TemplateCategory]:
        data = _read_json(self._path)
        if not isinstance(data, list):
            return config.load_default_template()
        try:
            return [TemplateCategory.model_validate(item) for item in data]
        except ValidationError as e:
            logger.warning("Invalid template.json, using default: %s", e)
            return config.load_default_template()

    def save(self, categories: list[TemplateCategory]) -> None:
        ids = [c.id for c in categories]
        if len(ids) != len(set(ids)):
            raise ValueError("Template category ids must be unique")
        _write_queue.write_json(self._path, [c.to_record() for c in categories])
        logger.info("Saved template with %d categories", len(categories))


class JsonRepository(Repository):
    """JSON file backend implementation."""

    def __init__(self, base_path: Path = None):
        self._base_path = Path(base_path) if base_path else config.DATA_DIR
        self._projects = JsonProjectRepository(self._base_path)
        self._interviews = JsonInterviewRepository(self._base_path)
        self._tags = JsonCustomTagRepository(self._base_path)
        self._templates = JsonTemplateRepository(self._base_path)

    @property
    def base_path(self) -> Path:
        return self._base_path

    @property
    def projects(self) -> ProjectRepository:
        return self._projects

    @property
    def interviews(self) -> InterviewRepository:
        return self._interviews

    @property
    def tags(self) -> CustomTagRepository:
        return self._tags

    @property
    def templates(self) -> TemplateRepository:
        return self._templates
