"""
Client for the directory gateway HTTP endpoints.

Failures never propagate to the caller: network errors, error statuses and
malformed bodies are logged and reported as an empty contact list.
"""

import logging

import httpx

from core.config import GATEWAY_BASE_URL
from models.contacts import Contact
from services.contacts import normalize_contacts

logger = logging.getLogger(__name__)


class DirectoryGatewayClient:
    """Fetches and normalizes contacts from the gateway."""

    def __init__(
        self,
        base_url: str = GATEWAY_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, transport=self.transport)

    async def search_contacts(self, query: str, search_type: str = "name") -> list[Contact]:
        """Remote search; returns [] on any failure."""
        try:
            async with self._client() as client:
                response = await client.post(
                    "/contacts/search",
                    json={"query": query, "searchType": search_type},
                )
            response.raise_for_status()
            return normalize_contacts(response.json().get("results") or [])
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.error("Error searching contacts for %r: %s", query, e)
            return []

    async def list_contacts(self) -> list[Contact]:
        """Bulk listing; returns [] on any failure."""
        try:
            async with self._client() as client:
                response = await client.get("/contacts")
            response.raise_for_status()
            return normalize_contacts(response.json().get("contacts") or [])
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.error("Error fetching contacts: %s", e)
            return []
