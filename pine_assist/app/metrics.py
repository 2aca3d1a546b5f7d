from __future__ import annotations

import time

from fastapi import Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.responses import Response

from pine_assist.app.settings import settings
from pine_assist.rag.types import RagResult
from pine_assist.validator.types import ValidationResult

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)
RAG_SEARCH_COUNT = Counter(
    "rag_search_total",
    "Total RAG searches",
)
RAG_SEARCH_RESULTS = Histogram(
    "rag_search_results",
    "Number of results returned per RAG search",
    buckets=(0, 1, 2, 5, 10, 20, 50),
)
VALIDATION_FINDINGS = Counter(
    "validation_findings_total",
    "Validation findings by status",
    ["status"],
)


async def metrics_middleware(request: Request, call_next):
    if not settings.metrics_enabled:
        return await call_next(request)
    path = request.url.path
    if path == "/metrics":
        return await call_next(request)
    start = time.monotonic()
    status = 500
    try:
        response = await call_next(request)
        status = response.status_code
        return response
    finally:
        duration = time.monotonic() - start
        REQUEST_COUNT.labels(request.method, path, str(status)).inc()
        REQUEST_LATENCY.labels(request.method, path).observe(duration)


def record_search(results: list[RagResult]) -> None:
    if not settings.metrics_enabled:
        return
    RAG_SEARCH_COUNT.inc()
    RAG_SEARCH_RESULTS.observe(len(results))


def record_validation(results: list[ValidationResult]) -> None:
    if not settings.metrics_enabled:
        return
    for result in results:
        VALIDATION_FINDINGS.labels(result.status).inc()


def metrics_response() -> Response:
    if not settings.metrics_enabled:
        return Response(status_code=404)
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
