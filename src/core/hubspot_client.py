"""
HubSpot CRM client setup with lazy initialization.
"""

import httpx

from core.config import HUBSPOT_ACCESS_TOKEN, HUBSPOT_BASE_URL
from core.errors import EnrichmentDegradation, UpstreamAuthError, UpstreamRequestError


class HubSpotClient:
    """Thin async wrapper over the HubSpot CRM v3 object endpoints."""

    def __init__(
        self,
        access_token: str,
        base_url: str = HUBSPOT_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not access_token:
            raise UpstreamAuthError("HubSpot access token not configured")
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._headers(),
            transport=self.transport,
        )

    async def search_contacts(
        self, filter_groups: list[dict], properties: list[str], limit: int
    ) -> list[dict]:
        """Run a filtered contact search (OR of filter groups, AND within a group)."""
        body = {
            "filterGroups": filter_groups,
            "properties": properties,
            "limit": limit,
        }
        async with self._client() as client:
            response = await client.post("/crm/v3/objects/contacts/search", json=body)

        if response.status_code == 401:
            raise UpstreamAuthError(f"HubSpot rejected the access token: {response.text}")
        if not response.is_success:
            raise UpstreamRequestError(response.status_code, response.text)

        return response.json().get("results") or []

    async def list_contacts(self, properties: list[str], limit: int) -> list[dict]:
        """Fetch one unfiltered page of contacts with company associations."""
        params = {
            "limit": limit,
            "properties": ",".join(properties),
            "associations": "companies",
        }
        async with self._client() as client:
            response = await client.get("/crm/v3/objects/contacts", params=params)

        if response.status_code == 401:
            raise UpstreamAuthError(f"HubSpot rejected the access token: {response.text}")
        if not response.is_success:
            raise UpstreamRequestError(response.status_code, response.text)

        return response.json().get("results") or []

    async def read_company_associations(self, contact_ids: list[str]) -> dict[str, list[str]]:
        """
        Look up associated company ids for several contacts in one call.

        Returns:
            Dict of contact id -> company ids, in HubSpot's order

        Raises:
            EnrichmentDegradation: on a non-success status or transport failure
        """
        body = {"inputs": [{"id": contact_id} for contact_id in contact_ids]}
        try:
            async with self._client() as client:
                response = await client.post(
                    "/crm/v4/associations/contacts/companies/batch/read", json=body
                )
        except httpx.TransportError as e:
            raise EnrichmentDegradation(0, str(e)) from e

        if not response.is_success:
            raise EnrichmentDegradation(response.status_code, response.text)

        associations = {}
        for result in response.json().get("results") or []:
            contact_id = str((result.get("from") or {}).get("id", ""))
            associations[contact_id] = [
                str(target["toObjectId"])
                for target in result.get("to") or []
                if target.get("toObjectId") is not None
            ]
        return associations

    async def batch_read_companies(
        self, company_ids: list[str], properties: list[str]
    ) -> list[dict]:
        """
        Read several companies in one call.

        Raises:
            EnrichmentDegradation: on a non-success status or transport failure
        """
        body = {
            "properties": properties,
            "inputs": [{"id": company_id} for company_id in company_ids],
        }
        try:
            async with self._client() as client:
                response = await client.post(
                    "/crm/v3/objects/companies/batch/read", json=body
                )
        except httpx.TransportError as e:
            raise EnrichmentDegradation(0, str(e)) from e

        if not response.is_success:
            raise EnrichmentDegradation(response.status_code, response.text)

        return response.json().get("results") or []


_hubspot_client: HubSpotClient | None = None


def get_hubspot_client() -> HubSpotClient:
    """Get or create the HubSpot client (lazy initialization)."""
    global _hubspot_client
    if _hubspot_client is None:
        _hubspot_client = HubSpotClient(access_token=HUBSPOT_ACCESS_TOKEN)
    return _hubspot_client
