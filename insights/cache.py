"""
Content-hash memoization for insights.

Results are only reused when the full input (interviews, catalog and
template) serializes to the same bytes, so a hit equals a recomputation.
"""

import hashlib
import json
import threading
from collections import OrderedDict
from typing import Iterable

from models import InsightsResult, Interview, Tag, TemplateCategory
from .aggregator import compute_insights


def content_hash(interviews: Iterable[Interview], tags: Iterable[Tag],
                 template_categories: Iterable[TemplateCategory]) -> str:
    """SHA-256 over the canonical JSON of every input."""
    payload = {
        "interviews": [i.model_dump(mode="json", exclude={"created_at", "updated_at"}) for i in interviews],
        "tags": [t.model_dump(mode="json") for t in tags],
        "template": [c.model_dump(mode="json") for c in template_categories],
    }
    raw = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


class InsightsCache:
    """Small LRU of insights keyed by input content hash."""

    def __init__(self, max_entries: int = 32):
        self._max_entries = max_entries
        self._entries: OrderedDict[str, InsightsResult] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, interviews: Iterable[Interview], tags: Iterable[Tag],
            template_categories: Iterable[TemplateCategory]) -> InsightsResult:
        interviews = list(interviews)
        tags = list(tags)
        template = list(template_categories)
        key = content_hash(interviews, tags, template)

        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._entries.move_to_end(key)
                self.hits += 1
                return cached.model_copy(deep=True)

        result = compute_insights(interviews, tags, template)

        with self._lock:
            self.misses += 1
            self._entries[key] = result
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)
        return result.model_copy(deep=True)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
