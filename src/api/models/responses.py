"""Pydantic request/response models for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from models.contacts import DirectoryEntry, SearchResult


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    crm_configured: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    UPSTREAM_AUTH_ERROR = "UPSTREAM_AUTH_ERROR"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class SearchRequest(BaseModel):
    """Contact search body."""

    model_config = ConfigDict(populate_by_name=True)

    # Null or missing values fall through to the search validator
    query: str | None = None
    search_type: str | None = Field(None, alias="searchType")


class SearchResponse(BaseModel):
    results: list[SearchResult]
    total: int


class ContactListResponse(BaseModel):
    contacts: list[DirectoryEntry]


class PreviewResponse(BaseModel):
    text: str
    warnings: list[str] = []
