"""FastAPI application exposing the component library."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel

from ..config import load_config
from ..extractors import EXTRACTORS, run_extractor
from ..library import ComponentLibrary
from ..logging import get_logger
from ..presenter import Presenter, to_payload
from ..sources import SourceError, SourceNotFoundError

_LOGGER = get_logger("service")

T = TypeVar("T")


class HealthResponse(BaseModel):
    status: str


class ComponentListResponse(BaseModel):
    components: List[str]


class SourceResponse(BaseModel):
    name: str
    source: str


class ExtractRequest(BaseModel):
    text: str
    name: str = ""


def _default_library() -> ComponentLibrary:
    return ComponentLibrary.from_config(load_config(Path.cwd()))


async def _run(func: Callable[[], T]) -> T:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:  # pragma: no cover - fallback path when not in async context
        return func()
    return await loop.run_in_executor(None, func)


def create_app(
    library_factory: Callable[[], ComponentLibrary] = _default_library,
    *,
    presenter: Optional[Presenter] = None,
) -> FastAPI:
    """Create the FastAPI application exposing uidocs operations."""

    app = FastAPI(title="uidocs", version="1.0.0")
    renderer = presenter or Presenter()

    async def get_library(request: Request) -> ComponentLibrary:
        # One library per app so the provider cache is shared across requests.
        library = getattr(request.app.state, "library", None)
        if library is None:
            library = library_factory()
            request.app.state.library = library
        return library

    def _respond(record: Any, output_format: str) -> Response:
        if output_format == "markdown":
            return PlainTextResponse(renderer.render_markdown(record), media_type="text/markdown")
        return JSONResponse(content=to_payload(record))

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/components", response_model=ComponentListResponse)
    async def list_components(
        library: ComponentLibrary = Depends(get_library),
    ) -> ComponentListResponse:
        return ComponentListResponse(components=await _run(library.list_components))

    @app.get("/components/{name}/source", response_model=SourceResponse)
    async def component_source(
        name: str, library: ComponentLibrary = Depends(get_library)
    ) -> SourceResponse:
        source = await _run(lambda: library.get_component_source(name))
        return SourceResponse(name=name, source=source)

    @app.get("/components/{name}/metadata")
    async def component_metadata(
        name: str,
        format: str = Query("json", pattern="^(json|markdown)$"),
        library: ComponentLibrary = Depends(get_library),
    ) -> Response:
        return _respond(await _run(lambda: library.get_component_metadata(name)), format)

    @app.get("/components/{name}/stories")
    async def component_stories(
        name: str,
        format: str = Query("json", pattern="^(json|markdown)$"),
        library: ComponentLibrary = Depends(get_library),
    ) -> Response:
        return _respond(await _run(lambda: library.get_stories(name)), format)

    @app.get("/components/{name}/docs")
    async def component_docs(
        name: str,
        format: str = Query("json", pattern="^(json|markdown)$"),
        library: ComponentLibrary = Depends(get_library),
    ) -> Response:
        return _respond(await _run(lambda: library.get_documentation(name)), format)

    @app.get("/components/{name}/docs/summary")
    async def component_docs_summary(
        name: str,
        format: str = Query("json", pattern="^(json|markdown)$"),
        library: ComponentLibrary = Depends(get_library),
    ) -> Response:
        return _respond(await _run(lambda: library.get_documentation_summary(name)), format)

    @app.get("/components/{name}/tests", response_model=SourceResponse)
    async def component_tests(
        name: str, library: ComponentLibrary = Depends(get_library)
    ) -> SourceResponse:
        return SourceResponse(name=name, source=await _run(lambda: library.get_tests(name)))

    @app.get("/components/{name}/dependencies")
    async def component_dependencies(
        name: str,
        deep: bool = False,
        format: str = Query("json", pattern="^(json|markdown)$"),
        library: ComponentLibrary = Depends(get_library),
    ) -> Response:
        return _respond(await _run(lambda: library.get_dependencies(name, deep=deep)), format)

    @app.get("/theme/tokens")
    async def theme_tokens(
        category: Optional[str] = None,
        library: ComponentLibrary = Depends(get_library),
    ) -> Dict[str, Any]:
        return to_payload(await _run(lambda: library.get_theme_tokens(category)))

    @app.get("/theme/metadata")
    async def theme_metadata(
        format: str = Query("json", pattern="^(json|markdown)$"),
        library: ComponentLibrary = Depends(get_library),
    ) -> Response:
        return _respond(await _run(library.get_theme_metadata), format)

    @app.get("/search")
    async def search(
        q: str,
        include_description: bool = False,
        library: ComponentLibrary = Depends(get_library),
    ) -> Dict[str, Any]:
        results = await _run(lambda: library.search(q, include_description=include_description))
        return {"query": q, "results": to_payload(results)}

    @app.post("/extract/{kind}")
    async def extract(kind: str, payload: ExtractRequest) -> Dict[str, Any]:
        if kind not in EXTRACTORS:
            known = ", ".join(sorted(EXTRACTORS))
            raise HTTPException(status_code=400, detail=f"Unknown extractor '{kind}' (expected one of: {known})")
        return to_payload(await _run(lambda: run_extractor(kind, payload.name, payload.text)))

    @app.exception_handler(SourceNotFoundError)
    async def not_found_handler(_: Any, exc: SourceNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(SourceError)
    async def source_error_handler(_: Any, exc: SourceError) -> JSONResponse:
        _LOGGER.warning("Upstream source failure: %s", exc)
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1",
    port: int = 8000,
    library_factory: Callable[[], ComponentLibrary] = _default_library,
    *,
    presenter: Optional[Presenter] = None,
) -> None:  # pragma: no cover - integration path
    _LOGGER.info("Serving uidocs on http://%s:%s", host, port)
    uvicorn.run(create_app(library_factory, presenter=presenter), host=host, port=port)


__all__ = ["create_app", "run_service"]
