"""FastAPI application entry point."""

import logging
import warnings
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from api.models.responses import ErrorCodes, ErrorResponse
from api.routes import contacts_router, health_router, templates_router
from core.config import API_DEBUG, API_VERSION, CORS_HEADERS, HUBSPOT_ACCESS_TOKEN
from core.database import create_tables, get_connection
from core.errors import (
    DirectoryError,
    UpstreamAuthError,
    UpstreamRequestError,
    ValidationError,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup: make sure the template store exists
    conn = get_connection()
    try:
        create_tables(conn)
    finally:
        conn.close()

    if not HUBSPOT_ACCESS_TOKEN:
        warnings.warn("HUBSPOT_ACCESS_TOKEN is not set; contact endpoints will fail")

    yield


app = FastAPI(
    title="Event Invite Composer API",
    description="Contact directory gateway and saved event templates for the invite composer",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)


# Permissive CORS on every response; preflight answered here with an empty body
@app.middleware("http")
async def cors_middleware(request: Request, call_next):
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(DirectoryError)
async def directory_exception_handler(request: Request, exc: DirectoryError):
    """Map directory errors to the standard error format."""
    if isinstance(exc, ValidationError):
        status_code, code = 400, ErrorCodes.INVALID_REQUEST
    elif isinstance(exc, UpstreamAuthError):
        status_code, code = 500, ErrorCodes.UPSTREAM_AUTH_ERROR
    elif isinstance(exc, UpstreamRequestError):
        status_code, code = 500, ErrorCodes.UPSTREAM_ERROR
    else:
        status_code, code = 500, ErrorCodes.INTERNAL_ERROR

    if status_code >= 500:
        logger.error("Directory request failed: %s", exc)

    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=str(exc), code=code, details=[]).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies get the standard error format with a 400."""
    details = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error="Invalid request body",
            code=ErrorCodes.VALIDATION_ERROR,
            details=details,
        ).model_dump(),
    )


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with standard error format."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        headers=CORS_HEADERS,
        content=ErrorResponse(
            error="Internal server error",
            code=ErrorCodes.INTERNAL_ERROR,
            details=[],
        ).model_dump(),
    )


# Include routers
app.include_router(health_router)
app.include_router(contacts_router)
app.include_router(templates_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    logging.basicConfig(level=logging.DEBUG if API_DEBUG else logging.INFO)
    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
