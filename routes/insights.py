"""
Insights API route.
"""

import logging

from flask import jsonify

from insights import InsightsCache
from repositories import get_repository
from . import insights_bp
from .helpers import load_project

logger = logging.getLogger(__name__)

# Shared across requests; keyed by content so edits invalidate naturally.
_cache = InsightsCache()


@insights_bp.route("/api/projects/<project_id>/insights")
def project_insights(project_id):
    """Stress averages, tag frequency and segments for one project."""
    load_project(project_id)
    repo = get_repository()

    result = _cache.get(
        repo.interviews.get_for_project(project_id),
        repo.catalog(),
        repo.templates.get(),
    )
    logger.debug("insights cache for %s: %d hits, %d misses",
                 project_id, _cache.hits, _cache.misses)
    return jsonify(result.to_dict())
