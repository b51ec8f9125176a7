"""
Pytest configuration and shared fixtures.
"""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.database import create_tables, get_connection  # noqa: E402
from core.hubspot_client import HubSpotClient  # noqa: E402


def hubspot_contact(contact_id: str, company_ids: list[str] | None = None, **properties) -> dict:
    """Build a contact as returned by the HubSpot v3 API."""
    contact = {"id": contact_id, "properties": properties}
    if company_ids:
        contact["associations"] = {
            "companies": {
                "results": [
                    {"id": company_id, "type": "contact_to_company"}
                    for company_id in company_ids
                ]
            }
        }
    return contact


class FakeHubSpot:
    """In-memory stand-in for the HubSpot CRM endpoints."""

    def __init__(
        self,
        contacts=None,
        companies=None,
        search_status=200,
        list_status=200,
        company_status=200,
        association_status=200,
    ):
        self.contacts = contacts or []
        self.companies = companies or {}
        self.search_status = search_status
        self.list_status = list_status
        self.company_status = company_status
        self.association_status = association_status
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/crm/v3/objects/contacts/search":
            if self.search_status != 200:
                return httpx.Response(self.search_status, text="search exploded")
            # Search hits come back without associations
            hits = [
                {key: value for key, value in contact.items() if key != "associations"}
                for contact in self.contacts
            ]
            return httpx.Response(200, json={"results": hits})

        if path == "/crm/v4/associations/contacts/companies/batch/read":
            if self.association_status != 200:
                return httpx.Response(self.association_status, text="associations exploded")
            ids = [item["id"] for item in json.loads(request.content)["inputs"]]
            return httpx.Response(200, json={"results": self._associations(ids)})

        if path == "/crm/v3/objects/contacts":
            if self.list_status != 200:
                return httpx.Response(self.list_status, text="list exploded")
            return httpx.Response(200, json={"results": self.contacts})

        if path == "/crm/v3/objects/companies/batch/read":
            if self.company_status != 200:
                return httpx.Response(self.company_status, text="companies exploded")
            ids = [item["id"] for item in json.loads(request.content)["inputs"]]
            return httpx.Response(
                200,
                json={
                    "results": [
                        {"id": company_id, "properties": self.companies[company_id]}
                        for company_id in ids
                        if company_id in self.companies
                    ]
                },
            )

        return httpx.Response(404, text="not found")

    def _associations(self, contact_ids: list[str]) -> list[dict]:
        """v4 association rows for the requested contacts that have companies."""
        rows = []
        for contact in self.contacts:
            companies = (contact.get("associations") or {}).get("companies") or {}
            if contact["id"] not in contact_ids or not companies.get("results"):
                continue
            rows.append({
                "from": {"id": contact["id"]},
                "to": [
                    {"toObjectId": int(result["id"]), "associationTypes": []}
                    for result in companies["results"]
                ],
            })
        return rows

    def client(self) -> HubSpotClient:
        return HubSpotClient(
            access_token="test-token",
            base_url="https://hubspot.test",
            transport=httpx.MockTransport(self.handler),
        )

    def body(self, index: int) -> dict:
        return json.loads(self.requests[index].content)

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]


@pytest.fixture
def john_smith():
    return hubspot_contact(
        "101",
        company_ids=["55"],
        firstname="John",
        lastname="Smith",
        email="john@acme.test",
        phone="5551234567",
        address="1 Main St",
        city="Springfield",
        state="IL",
        zip="62701",
        company="Acme (typed)",
    )


@pytest.fixture
def acme():
    return {"name": "Acme Co", "address": "500 Industrial Way", "city": "Springfield", "state": "IL", "zip": "62702", "country": "US"}


@pytest.fixture
def fake_hubspot(john_smith, acme):
    return FakeHubSpot(contacts=[john_smith], companies={"55": acme})


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Fresh SQLite database with all tables, also used for request logs."""
    path = tmp_path / "test.db"
    conn = get_connection(path)
    create_tables(conn)
    conn.close()
    monkeypatch.setattr("api.logging.DB_PATH", path)
    return path


@pytest.fixture
def db(db_path):
    conn = get_connection(db_path)
    yield conn
    conn.close()


@pytest.fixture
def sample_template():
    """Sample template dictionary for testing."""
    return {
        "title": "Team Sync",
        "date": "2025-11-07",
        "time": "14:30",
        "location": "Conference Room A",
        "goal": "Align on Q1 objectives",
        "agenda": "1. Review progress\n2. Plan next steps",
        "rsvp": "a@x.com, b@y.com",
        "recurring": None,
    }
