from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from lexiflow.database import default_model, get_session, init_db
from lexiflow.parsing import (
    extract_markdown_preview,
    get_template_registry,
    normalize_dictionary_markdown,
)
from lexiflow.services.entry_cache import EntryCacheService, entry_cache_key
from lexiflow.services.lookup import DictionaryLookupService


app = FastAPI(
    title="Lexiflow API",
    description="Dictionary entry rendering and markdown normalisation",
    version="0.1.0",
)


class MarkdownRequest(BaseModel):
    markdown: Optional[str] = None


class MarkdownResponse(BaseModel):
    markdown: str


class PreviewRequest(BaseModel):
    payload: Optional[str] = None


class PreviewResponse(BaseModel):
    preview: Optional[str]


class RenderRequest(BaseModel):
    entry: Any = None


class RenderResponse(BaseModel):
    markdown: str
    template: str


class LookupRequest(BaseModel):
    term: Optional[str] = None
    language: str = "en"
    flavor: str = "default"
    model: Optional[str] = None
    chunks: Optional[List[Any]] = Field(
        default=None,
        description="Raw stream chunks to replay when the entry is not cached.",
    )
    force_new: bool = False


class LookupResponse(BaseModel):
    status: str
    term: str
    queried_term: str
    markdown: str
    entry: Optional[Dict[str, Any]] = None
    cache_key: Optional[str] = None
    from_cache: bool
    previews: List[str]


class CachedEntryResponse(BaseModel):
    cache_key: str
    term: str
    language: str
    flavor: str
    model: str
    markdown: str
    payload: Optional[Any] = None


@app.on_event("startup")
def on_startup() -> None:
    init_db()


@app.post("/markdown/normalize", response_model=MarkdownResponse)
def normalize_markdown(payload: MarkdownRequest) -> MarkdownResponse:
    return MarkdownResponse(markdown=normalize_dictionary_markdown(payload.markdown))


@app.post("/markdown/preview", response_model=PreviewResponse)
def preview_markdown(payload: PreviewRequest) -> PreviewResponse:
    return PreviewResponse(preview=extract_markdown_preview(payload.payload))


@app.post("/entries/render", response_model=RenderResponse)
def render_entry(payload: RenderRequest) -> RenderResponse:
    template, markdown = get_template_registry().render(payload.entry)
    return RenderResponse(markdown=markdown, template=template)


@app.post("/entries/lookup", response_model=LookupResponse)
def lookup_entry(
    payload: LookupRequest,
    session: Session = Depends(get_session),
) -> LookupResponse:
    service = DictionaryLookupService(session)
    try:
        result = service.lookup(
            payload.term,
            language=payload.language,
            flavor=payload.flavor,
            model=payload.model,
            chunks=payload.chunks,
            force_new=payload.force_new,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return LookupResponse(**result.to_dict())


@app.get("/entries/cached", response_model=CachedEntryResponse)
def cached_entry(
    term: str = Query(..., min_length=1),
    language: str = Query("en"),
    flavor: str = Query("default"),
    model: Optional[str] = Query(None),
    session: Session = Depends(get_session),
) -> CachedEntryResponse:
    key = entry_cache_key(term.strip(), language, flavor, model or default_model())
    cached = EntryCacheService(session).get(key)
    if cached is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Entry not cached")
    return CachedEntryResponse(
        cache_key=cached.cache_key,
        term=cached.term,
        language=cached.language,
        flavor=cached.flavor,
        model=cached.model,
        markdown=cached.markdown,
        payload=cached.payload,
    )
