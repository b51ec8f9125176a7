"""Exceptions for directory lookups and upstream CRM calls."""


class DirectoryError(Exception):
    """Base exception for directory gateway errors."""
    pass


class ValidationError(DirectoryError):
    """Raised when a search request is rejected before reaching the CRM."""
    pass


class UpstreamAuthError(DirectoryError):
    """Raised when the CRM access token is missing or rejected."""
    pass


class UpstreamRequestError(DirectoryError):
    """Raised when the primary CRM search or list call does not succeed."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"HubSpot API error: {status_code} - {body}")


class EnrichmentDegradation(DirectoryError):
    """Raised when the company batch lookup fails; callers recover from it."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"HubSpot company API error: {status_code}")
