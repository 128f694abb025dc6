"""FastAPI server for print-finder.

Endpoints:
    GET /api/search?q=<term> - Aggregated model search across all sources
    OPTIONS /api/search - CORS pre-flight
    GET /health - Health check
"""

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from print_finder.aggregator import aggregate
from print_finder.consts import (
    API_VERSION,
    CORS_HEADERS,
    INTERNAL_ERROR_MESSAGE,
    MISSING_TERM_MESSAGE,
)
from print_finder.types.api import ErrorResponse, HealthResponse
from print_finder.types.search import SearchResult
from print_finder.utils.logging import setup_logger

logger = setup_logger(__name__)

# =============================================================================
# FastAPI App
# =============================================================================
app = FastAPI(
    title="print-finder API",
    description="Search Printables, Thingiverse and Makerworld with one request.",
    version=API_VERSION,
)


@app.middleware("http")
async def add_cors_headers(request: Request, call_next) -> Response:
    """Attach the permissive CORS headers to every response, errors included."""
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error for {request.method} {request.url.path}")
        response = _error_response(500, INTERNAL_ERROR_MESSAGE)
    response.headers.update(CORS_HEADERS)
    return response


# =============================================================================
# Error handlers
# =============================================================================


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{"error": ...}`` instead of FastAPI's ``{"detail": ...}``."""
    return _error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error_response(400, "Invalid request parameters.")


# =============================================================================
# Endpoints
# =============================================================================


@app.options("/api/search", status_code=200)
async def search_preflight() -> Response:
    """CORS pre-flight: answer OK without touching any source."""
    return Response(status_code=200)


@app.get(
    "/api/search",
    response_model=list[SearchResult],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def search(q: str | None = None) -> list[SearchResult]:
    """Search all sources for ``q`` and return the merged, shuffled results.

    Sources that fail are left out; an empty list is a valid answer.
    """
    if q is None or not q.strip():
        raise HTTPException(status_code=400, detail=MISSING_TERM_MESSAGE)

    try:
        return await aggregate(q.strip())
    except Exception as e:
        logger.exception(f"Error processing search request: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE) from e


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok", version=API_VERSION)
