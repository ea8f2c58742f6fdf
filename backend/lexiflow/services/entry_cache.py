from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from lexiflow.models import CachedEntry


CACHE_KEY_VERSION = "md1"


def entry_cache_key(term: str, language: str, flavor: str, model: str) -> str:
    return f"{language}:{flavor}:{term}:{model}:{CACHE_KEY_VERSION}"


class EntryCacheService:
    """Rendered entries keyed by ``entry_cache_key``."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, cache_key: str) -> Optional[CachedEntry]:
        return self.session.execute(
            select(CachedEntry).where(CachedEntry.cache_key == cache_key)
        ).scalar_one_or_none()

    def store(
        self,
        cache_key: str,
        *,
        term: str,
        language: str,
        flavor: str,
        model: str,
        markdown: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> CachedEntry:
        cached = self.get(cache_key)
        if cached is None:
            cached = CachedEntry(cache_key=cache_key)
        cached.term = term
        cached.language = language
        cached.flavor = flavor
        cached.model = model
        cached.markdown = markdown
        cached.payload = payload
        self.session.add(cached)
        self.session.flush()
        return cached

    def invalidate(self, cache_key: str) -> bool:
        result = self.session.execute(
            delete(CachedEntry).where(CachedEntry.cache_key == cache_key)
        )
        return bool(result.rowcount)
