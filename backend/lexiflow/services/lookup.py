from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from lexiflow.database import default_model
from lexiflow.parsing.streaming import (
    ChunkInterpreter,
    ChunkOperation,
    StreamingMarkdownBuffer,
    create_chunk_interpreter,
)
from lexiflow.services.entry_cache import EntryCacheService, entry_cache_key


LOGGER = logging.getLogger(__name__)

STATUS_IDLE = "idle"
STATUS_CACHED = "cached"
STATUS_COMPLETED = "completed"


@dataclass(slots=True)
class LookupResult:
    status: str
    term: str
    queried_term: str
    markdown: str = ""
    entry: Optional[Dict[str, Any]] = None
    cache_key: Optional[str] = None
    from_cache: bool = False
    previews: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def coerce_resolved_term(entry: Any, queried_term: str) -> str:
    """Display term: the entry's own ``term`` when usable, else what was asked for."""

    if isinstance(entry, dict):
        term = entry.get("term")
        if isinstance(term, str) and term.strip():
            return term.strip()
    return queried_term


class DictionaryLookupService:
    def __init__(
        self,
        session: Session,
        *,
        interpreter_factory: Callable[..., ChunkInterpreter] = create_chunk_interpreter,
    ) -> None:
        self.session = session
        self.cache = EntryCacheService(session)
        self.interpreter_factory = interpreter_factory

    def lookup(
        self,
        term: Optional[str],
        *,
        language: str = "en",
        flavor: str = "default",
        model: Optional[str] = None,
        chunks: Optional[Iterable[Any]] = None,
        force_new: bool = False,
        on_preview: Optional[Callable[[str], None]] = None,
    ) -> LookupResult:
        queried = (term or "").strip()
        if not queried:
            return LookupResult(status=STATUS_IDLE, term="", queried_term="")

        model = model or default_model()
        cache_key = entry_cache_key(queried, language, flavor, model)
        buffer = StreamingMarkdownBuffer()
        previews: List[str] = []

        def _report(preview: Optional[str]) -> None:
            if preview is None:
                return
            previews.append(preview)
            if on_preview is not None:
                on_preview(preview)

        if force_new:
            self.cache.invalidate(cache_key)
        else:
            cached = self.cache.get(cache_key)
            if cached is not None:
                LOGGER.info("Cache hit for %s", cache_key)
                _report(buffer.replace(cached.markdown).preview)
                final = buffer.finalize()
                return LookupResult(
                    status=STATUS_CACHED,
                    term=coerce_resolved_term(cached.payload, queried),
                    queried_term=queried,
                    markdown=final.markdown,
                    entry=cached.payload,
                    cache_key=cache_key,
                    from_cache=True,
                    previews=previews,
                )

        if chunks is None:
            raise ValueError(f"No stream supplied for uncached lookup {cache_key}")

        LOGGER.info("Streaming lookup for %s", cache_key)
        interpreter = self.interpreter_factory(logger=LOGGER)
        entry: Optional[Dict[str, Any]] = None
        for chunk in chunks:
            interpreted = interpreter.interpret(chunk)
            if interpreted.operation is ChunkOperation.REPLACE:
                update = buffer.replace(interpreted.text)
                entry = interpreted.entry
            else:
                update = buffer.append(interpreted.text)
                if interpreted.text:
                    # appended text invalidates an entity that came from a replace
                    entry = buffer.get_snapshot().entry
            _report(update.preview)

        final = buffer.finalize()
        if final.entry is not None:
            entry = final.entry
        resolved = coerce_resolved_term(entry, queried)
        if final.markdown:
            self.cache.store(
                cache_key,
                term=resolved,
                language=language,
                flavor=flavor,
                model=model,
                markdown=final.markdown,
                payload=entry,
            )
        LOGGER.info("Lookup for %s finished with %d preview(s)", cache_key, len(previews))
        return LookupResult(
            status=STATUS_COMPLETED,
            term=resolved,
            queried_term=queried,
            markdown=final.markdown,
            entry=entry,
            cache_key=cache_key,
            from_cache=False,
            previews=previews,
        )
