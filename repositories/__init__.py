"""
Repository layer - abstracts persistence.

Usage:
    from repositories import get_repository

    repo = get_repository()  # Returns configured backend
    project = repo.projects.get("proj_1718000000000_3fa9c2d1")
    repo.projects.save(project)

Backends are swappable via config.
"""

from .base import Repository
from .json_backend import JsonRepository

# Default backend - can be changed via configure_backend
_backend: str = "json"
_options: dict = {}
_instance: Repository = None


def get_repository() -> Repository:
    """Get the configured repository instance."""
    global _instance

    if _instance is None:
        if _backend == "json":
            _instance = JsonRepository(**_options)
        else:
            raise ValueError(f"Unknown backend: {_backend}")

    return _instance


def configure_backend(backend: str, **kwargs) -> None:
    """Configure the repository backend (e.g. base_path for the JSON store)."""
    global _backend, _options, _instance
    _backend = backend
    _options = kwargs
    _instance = None  # Force re-initialization


__all__ = ["get_repository", "configure_backend", "Repository", "JsonRepository"]
