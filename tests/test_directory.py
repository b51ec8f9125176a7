"""Tests for the directory gateway search and bulk list."""

import asyncio

import pytest

from conftest import FakeHubSpot, hubspot_contact
from core.errors import UpstreamAuthError, UpstreamRequestError, ValidationError
from core.hubspot_client import HubSpotClient
from services.directory import (
    build_filter_groups,
    first_company_id,
    list_contacts,
    search_contacts,
)


def _filters(group: dict) -> list[tuple[str, str]]:
    return [(f["propertyName"], f["value"]) for f in group["filters"]]


class TestBuildFilterGroups:
    def test_single_name_token_matches_either_name_field(self):
        groups = build_filter_groups("Smith", "name")

        assert [_filters(g) for g in groups] == [
            [("firstname", "Smith")],
            [("lastname", "Smith")],
        ]

    def test_two_tokens_try_both_orders(self):
        groups = build_filter_groups("John Smith", "name")

        assert [_filters(g) for g in groups] == [
            [("firstname", "John"), ("lastname", "Smith")],
            [("firstname", "Smith"), ("lastname", "John")],
        ]

    def test_extra_tokens_join_into_family_name(self):
        groups = build_filter_groups("Mary  van   der Berg", "name")

        assert [_filters(g) for g in groups] == [
            [("firstname", "Mary"), ("lastname", "van der Berg")],
            [("firstname", "van der Berg"), ("lastname", "Mary")],
        ]

    def test_all_filters_use_contains_token(self):
        groups = build_filter_groups("John Smith", "name")

        operators = {f["operator"] for g in groups for f in g["filters"]}
        assert operators == {"CONTAINS_TOKEN"}

    def test_email(self):
        assert [_filters(g) for g in build_filter_groups("jo@acme", "email")] == [
            [("email", "jo@acme")]
        ]

    def test_phone_strips_non_digits_from_query(self):
        groups = build_filter_groups("(555) 123-4567", "phone")

        assert [_filters(g) for g in groups] == [[("phone", "5551234567")]]

    def test_phone_with_letters_keeps_only_digits(self):
        groups = build_filter_groups("555-1234x", "phone")

        assert _filters(groups[0]) == [("phone", "5551234")]

    def test_company(self):
        assert [_filters(g) for g in build_filter_groups("Acme", "company")] == [
            [("company", "Acme")]
        ]


class TestFirstCompanyId:
    def test_only_first_association_is_used(self):
        contact = hubspot_contact("1", company_ids=["7", "8"])
        assert first_company_id(contact) == "7"

    def test_no_associations(self):
        assert first_company_id(hubspot_contact("1")) is None


class TestSearchContacts:
    def test_end_to_end_name_search(self, fake_hubspot):
        result = asyncio.run(search_contacts(fake_hubspot.client(), "John Smith", "name"))

        search_body = fake_hubspot.body(0)
        assert [_filters(g) for g in search_body["filterGroups"]] == [
            [("firstname", "John"), ("lastname", "Smith")],
            [("firstname", "Smith"), ("lastname", "John")],
        ]
        assert search_body["limit"] == 50

        assert fake_hubspot.body(1) == {"inputs": [{"id": "101"}]}

        batch_body = fake_hubspot.body(2)
        assert batch_body["inputs"] == [{"id": "55"}]
        assert batch_body["properties"] == ["name", "address", "city", "state", "zip", "country"]

        assert len(result.contacts) == 1
        hit = result.contacts[0]
        assert hit.company_name == "Acme Co"
        assert "Springfield" in hit.company_address
        assert hit.company_address == "500 Industrial Way, Springfield, IL, 62702"
        assert hit.contact_address == "1 Main St, Springfield, IL, 62701"
        assert result.enrichment_degraded is False

    def test_query_is_trimmed(self, fake_hubspot):
        asyncio.run(search_contacts(fake_hubspot.client(), "  jo@acme  ", "email"))

        assert fake_hubspot.body(0)["filterGroups"][0]["filters"][0]["value"] == "jo@acme"

    def test_empty_query_rejected_without_upstream_call(self, fake_hubspot):
        with pytest.raises(ValidationError):
            asyncio.run(search_contacts(fake_hubspot.client(), "   ", "name"))

        assert fake_hubspot.requests == []

    def test_unknown_search_type_rejected(self, fake_hubspot):
        with pytest.raises(ValidationError):
            asyncio.run(search_contacts(fake_hubspot.client(), "x", "address"))

    def test_search_failure_is_fatal_and_carries_status(self, john_smith):
        hubspot = FakeHubSpot(contacts=[john_smith], search_status=502)

        with pytest.raises(UpstreamRequestError) as exc_info:
            asyncio.run(search_contacts(hubspot.client(), "John", "name"))

        assert exc_info.value.status_code == 502
        assert "502" in str(exc_info.value)
        assert "search exploded" in str(exc_info.value)

    def test_rejected_token_is_auth_error(self, john_smith):
        hubspot = FakeHubSpot(contacts=[john_smith], search_status=401)

        with pytest.raises(UpstreamAuthError):
            asyncio.run(search_contacts(hubspot.client(), "John", "name"))

    def test_company_lookup_failure_degrades(self, john_smith, acme):
        hubspot = FakeHubSpot(contacts=[john_smith], companies={"55": acme}, company_status=500)

        result = asyncio.run(search_contacts(hubspot.client(), "John", "name"))

        assert result.enrichment_degraded is True
        hit = result.contacts[0]
        assert hit.first_name == "John"
        assert hit.email == "john@acme.test"
        assert hit.contact_city == "Springfield"
        assert hit.company_address == ""
        assert hit.company_city == ""
        # Falls back to the company text typed on the contact itself
        assert hit.company_name == "Acme (typed)"

    def test_companies_resolved_through_association_read(self, fake_hubspot):
        asyncio.run(search_contacts(fake_hubspot.client(), "John", "name"))

        assert fake_hubspot.paths() == [
            "/crm/v3/objects/contacts/search",
            "/crm/v4/associations/contacts/companies/batch/read",
            "/crm/v3/objects/companies/batch/read",
        ]

    def test_association_lookup_failure_degrades(self, john_smith, acme):
        hubspot = FakeHubSpot(contacts=[john_smith], companies={"55": acme}, association_status=500)

        result = asyncio.run(search_contacts(hubspot.client(), "John", "name"))

        assert result.enrichment_degraded is True
        assert "/crm/v3/objects/companies/batch/read" not in hubspot.paths()
        hit = result.contacts[0]
        assert hit.email == "john@acme.test"
        assert hit.contact_city == "Springfield"
        assert hit.company_address == ""
        assert hit.company_name == "Acme (typed)"

    def test_first_associated_company_is_kept(self, acme):
        contact = hubspot_contact("1", company_ids=["55", "56"], firstname="Ann")
        hubspot = FakeHubSpot(contacts=[contact], companies={"55": acme, "56": {"name": "Other"}})

        result = asyncio.run(search_contacts(hubspot.client(), "Ann", "name"))

        assert hubspot.body(2)["inputs"] == [{"id": "55"}]
        assert result.contacts[0].company_name == "Acme Co"

    def test_unknown_company_id_leaves_company_empty(self):
        contact = hubspot_contact("1", company_ids=["999"], firstname="Ann")
        hubspot = FakeHubSpot(contacts=[contact], companies={})

        result = asyncio.run(search_contacts(hubspot.client(), "Ann", "name"))

        hit = result.contacts[0]
        assert hit.company_name == ""
        assert hit.company_address == ""
        assert result.enrichment_degraded is False

    def test_no_batch_call_without_companies(self):
        hubspot = FakeHubSpot(contacts=[hubspot_contact("1", firstname="Ann")])

        asyncio.run(search_contacts(hubspot.client(), "Ann", "name"))

        assert hubspot.paths() == [
            "/crm/v3/objects/contacts/search",
            "/crm/v4/associations/contacts/companies/batch/read",
        ]

    def test_company_ids_are_deduplicated(self):
        contacts = [
            hubspot_contact("1", company_ids=["55"], firstname="Ann"),
            hubspot_contact("2", company_ids=["55", "56"], firstname="Ann"),
            hubspot_contact("3", company_ids=["57"], firstname="Ann"),
        ]
        hubspot = FakeHubSpot(contacts=contacts)

        asyncio.run(search_contacts(hubspot.client(), "Ann", "name"))

        assert hubspot.body(2)["inputs"] == [{"id": "55"}, {"id": "57"}]

    def test_result_order_is_provider_order(self):
        contacts = [hubspot_contact(str(i), firstname="Ann") for i in (3, 1, 2)]
        hubspot = FakeHubSpot(contacts=contacts)

        result = asyncio.run(search_contacts(hubspot.client(), "Ann", "name"))

        assert [hit.id for hit in result.contacts] == ["3", "1", "2"]

    def test_result_cap(self):
        contacts = [hubspot_contact(str(i), firstname="Ann") for i in range(60)]
        hubspot = FakeHubSpot(contacts=contacts)

        result = asyncio.run(search_contacts(hubspot.client(), "Ann", "name"))

        assert len(result.contacts) == 50

    def test_bearer_token_sent(self, fake_hubspot):
        asyncio.run(search_contacts(fake_hubspot.client(), "John", "name"))

        assert fake_hubspot.requests[0].headers["Authorization"] == "Bearer test-token"


class TestListContacts:
    def test_merges_company_block(self, fake_hubspot):
        result = asyncio.run(list_contacts(fake_hubspot.client()))

        request = fake_hubspot.requests[0]
        assert request.method == "GET"
        assert request.url.params["limit"] == "100"
        assert request.url.params["associations"] == "companies"

        entry = result.contacts[0]
        assert entry.firstname == "John"
        assert entry.company.id == "55"
        assert entry.company.name == "Acme Co"
        assert entry.company.country == "US"
        assert entry.company_location == "500 Industrial Way, Springfield, IL, 62702"

    def test_list_uses_inline_associations(self, fake_hubspot):
        asyncio.run(list_contacts(fake_hubspot.client()))

        assert fake_hubspot.paths() == [
            "/crm/v3/objects/contacts",
            "/crm/v3/objects/companies/batch/read",
        ]

    def test_company_failure_is_not_fatal(self, john_smith, acme):
        hubspot = FakeHubSpot(contacts=[john_smith], companies={"55": acme}, company_status=503)

        result = asyncio.run(list_contacts(hubspot.client()))

        assert result.enrichment_degraded is True
        entry = result.contacts[0]
        assert entry.email == "john@acme.test"
        assert entry.company is None
        assert entry.company_location == ""

    def test_list_failure_is_fatal(self):
        hubspot = FakeHubSpot(list_status=500)

        with pytest.raises(UpstreamRequestError):
            asyncio.run(list_contacts(hubspot.client()))


def test_missing_token_is_auth_error():
    with pytest.raises(UpstreamAuthError):
        HubSpotClient(access_token="")
