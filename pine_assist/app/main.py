from __future__ import annotations

"""FastAPI application exposing Pine Script retrieval and validation."""

import logging
import uuid

from fastapi import Depends, FastAPI, HTTPException, Request

from pine_assist.app.dependencies import build_search_options, get_search_engine
from pine_assist.app.metrics import metrics_middleware, metrics_response, record_search, record_validation
from pine_assist.app.schemas import (
    IndexStatsResponse,
    RagResultModel,
    SearchRequest,
    SearchResponse,
    ValidateRequest,
    ValidateResponse,
    ValidationResultModel,
)
from pine_assist.app.settings import settings
from pine_assist.rag.search import RagSearchEngine, search_rag
from pine_assist.validator.engine import validate_pine_script
from pine_assist.validator.types import summarize_results

logger = logging.getLogger(__name__)

app = FastAPI(title="Pine Script Assistant", version="0.1.0")


def _configure_logging() -> None:
    """Configure root logging using environment settings."""
    level_name = settings.log_level.strip().upper()
    level = getattr(logging, level_name, logging.INFO)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
    logger.setLevel(level)


_configure_logging()


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Attach or create a request ID for traceability."""
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.middleware("http")
async def record_metrics(request: Request, call_next):
    """Capture request metrics before returning the response."""
    return await metrics_middleware(request, call_next)


@app.get("/metrics")
async def metrics():
    """Expose Prometheus-style metrics."""
    return metrics_response()


@app.get("/health")
async def health() -> dict[str, str]:
    """Simple health probe for uptime checks."""
    return {"status": "ok"}


@app.get("/stats", response_model=IndexStatsResponse)
async def stats(engine: RagSearchEngine = Depends(get_search_engine)) -> IndexStatsResponse:
    """Return statistics for the loaded retrieval index."""
    return IndexStatsResponse(**engine.stats())


@app.post("/index/reload", response_model=IndexStatsResponse)
async def reload_index(engine: RagSearchEngine = Depends(get_search_engine)) -> IndexStatsResponse:
    """Re-read the artifacts after an offline rebuild."""
    engine.reload()
    logger.info("rag_index_reloaded", extra={"data_dir": str(engine.data_dir)})
    return IndexStatsResponse(**engine.stats())


@app.post("/search", response_model=SearchResponse)
async def search(
    payload: SearchRequest,
    request: Request,
    engine: RagSearchEngine = Depends(get_search_engine),
) -> SearchResponse:
    """Retrieve documentation, references and examples for a query."""
    options = build_search_options(payload.max_docs, payload.max_refs, payload.max_examples)
    results = search_rag(payload.query, options=options, engine=engine)
    record_search(results)
    logger.info(
        "search_request",
        extra={"request_id": request.state.request_id, "result_count": len(results)},
    )
    return SearchResponse(results=[RagResultModel(**result.to_dict()) for result in results])


@app.post("/validate", response_model=ValidateResponse)
async def validate(payload: ValidateRequest, request: Request) -> ValidateResponse:
    """Run the static validator over generated code."""
    if not payload.code:
        raise HTTPException(status_code=400, detail="Missing code")
    version = payload.version or settings.default_pine_version
    results = validate_pine_script(payload.code, version)
    record_validation(results)
    summary = summarize_results(results)
    logger.info(
        "validate_request",
        extra={"request_id": request.state.request_id, "version": version, **summary},
    )
    return ValidateResponse(
        results=[ValidationResultModel(**result.to_dict()) for result in results],
        **summary,
    )
