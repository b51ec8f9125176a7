"""API Pydantic models."""

from .responses import (
    ContactListResponse,
    ErrorCodes,
    ErrorResponse,
    HealthResponse,
    PreviewResponse,
    SearchRequest,
    SearchResponse,
)

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "SearchRequest",
    "SearchResponse",
    "ContactListResponse",
    "PreviewResponse",
]
