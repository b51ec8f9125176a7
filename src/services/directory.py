"""
Directory gateway: contact search and bulk listing against HubSpot.

Both flows fetch contacts, then resolve each contact's first associated
company through a single batch read and merge the company details in.
Search hits come back without associations, so those are read first.
"""

import logging
from dataclasses import dataclass, field

from core.config import (
    COMPANY_PROPERTIES,
    CONTACT_PROPERTIES,
    LIST_PAGE_LIMIT,
    SEARCH_RESULT_LIMIT,
)
from core.errors import EnrichmentDegradation
from core.hubspot_client import HubSpotClient
from core.validation import digits_only, validate_search_request
from models.contacts import CompanyRecord, DirectoryEntry, SearchResult, join_location

logger = logging.getLogger(__name__)

CONTAINS = "CONTAINS_TOKEN"


@dataclass
class DirectoryResult:
    """Outcome of a gateway call, with enrichment status for request logging."""

    contacts: list = field(default_factory=list)
    enrichment_degraded: bool = False


# =============================================================================
# FILTER CONSTRUCTION
# =============================================================================


def _group(*filters: tuple[str, str]) -> dict:
    return {
        "filters": [
            {"propertyName": prop, "operator": CONTAINS, "value": value}
            for prop, value in filters
        ]
    }


def build_filter_groups(query: str, search_type: str) -> list[dict]:
    """
    Build HubSpot filter groups for a trimmed query.

    Groups are OR-ed by HubSpot, filters within a group are AND-ed.
    A multi-word name is tried in both orders since the directory does not
    reliably know which word is the given name.
    """
    if search_type == "name":
        parts = query.split()
        if len(parts) >= 2:
            first = parts[0]
            rest = " ".join(parts[1:])
            return [
                _group(("firstname", first), ("lastname", rest)),
                _group(("firstname", rest), ("lastname", first)),
            ]
        return [
            _group(("firstname", query)),
            _group(("lastname", query)),
        ]

    if search_type == "email":
        return [_group(("email", query))]

    if search_type == "phone":
        return [_group(("phone", digits_only(query)))]

    if search_type == "company":
        return [_group(("company", query))]

    raise ValueError(f"Unsupported search type: {search_type}")


# =============================================================================
# COMPANY ENRICHMENT
# =============================================================================


def first_company_id(contact: dict) -> str | None:
    """Id of the first associated company, ignoring any others."""
    associations = (contact.get("associations") or {}).get("companies") or {}
    results = associations.get("results") or []
    if results and results[0].get("id"):
        return str(results[0]["id"])
    return None


async def attach_company_associations(client: HubSpotClient, contacts: list[dict]) -> bool:
    """
    Fill in company associations for contacts that came back without them.

    Search hits carry no associations, so they are read in one batch and
    stored on each contact in the same shape the list endpoint uses.

    Returns:
        Whether the association lookup failed
    """
    missing = [str(contact["id"]) for contact in contacts if "associations" not in contact]
    if not missing:
        return False

    try:
        associations = await client.read_company_associations(missing)
    except EnrichmentDegradation as e:
        logger.warning(
            "Association lookup failed for %d contacts, skipping enrichment: %s",
            len(missing),
            e,
        )
        return True

    for contact in contacts:
        company_ids = associations.get(str(contact["id"]))
        if "associations" not in contact and company_ids:
            contact["associations"] = {
                "companies": {"results": [{"id": company_id} for company_id in company_ids]}
            }
    return False


async def fetch_company_map(
    client: HubSpotClient, contacts: list[dict]
) -> tuple[dict[str, dict], bool]:
    """
    Batch-read the first associated company of every contact.

    Returns:
        Tuple of (company id -> properties, whether enrichment degraded)
    """
    company_ids = []
    for contact in contacts:
        company_id = first_company_id(contact)
        if company_id and company_id not in company_ids:
            company_ids.append(company_id)

    if not company_ids:
        return {}, False

    try:
        companies = await client.batch_read_companies(company_ids, COMPANY_PROPERTIES)
    except EnrichmentDegradation as e:
        logger.warning(
            "Company lookup failed for %d companies, skipping enrichment: %s",
            len(company_ids),
            e,
        )
        return {}, True

    company_map = {
        str(company["id"]): company.get("properties") or {}
        for company in companies
        if company.get("id")
    }
    return company_map, False


# =============================================================================
# SEARCH
# =============================================================================


def format_search_result(contact: dict, company_map: dict[str, dict]) -> SearchResult:
    """Flatten a HubSpot contact and its company into a search hit."""
    props = contact.get("properties") or {}
    company_id = first_company_id(contact)
    company = company_map.get(company_id) if company_id else None
    company = company or {}

    return SearchResult(
        id=str(contact["id"]),
        first_name=props.get("firstname") or "",
        last_name=props.get("lastname") or "",
        email=props.get("email") or "",
        phone=props.get("phone") or "",
        contact_address=join_location(
            props.get("address"), props.get("city"), props.get("state"), props.get("zip")
        ),
        contact_address1=props.get("address") or "",
        contact_city=props.get("city") or "",
        contact_state=props.get("state") or "",
        contact_zip=props.get("zip") or "",
        company_name=company.get("name") or props.get("company") or "",
        company_address=join_location(
            company.get("address"), company.get("city"), company.get("state"), company.get("zip")
        ),
        company_address1=company.get("address") or "",
        company_city=company.get("city") or "",
        company_state=company.get("state") or "",
        company_zip=company.get("zip") or "",
    )


async def search_contacts(
    client: HubSpotClient, query: str | None, search_type: str | None = "name"
) -> DirectoryResult:
    """
    Search contacts by name, email, phone or company.

    Raises:
        ValidationError: empty query or unknown search type
        UpstreamAuthError: token rejected
        UpstreamRequestError: search call failed
    """
    query, search_type = validate_search_request(query, search_type)
    filter_groups = build_filter_groups(query, search_type)

    contacts = await client.search_contacts(
        filter_groups, CONTACT_PROPERTIES, SEARCH_RESULT_LIMIT
    )
    contacts = contacts[:SEARCH_RESULT_LIMIT]
    associations_degraded = await attach_company_associations(client, contacts)
    company_map, degraded = await fetch_company_map(client, contacts)

    return DirectoryResult(
        contacts=[format_search_result(contact, company_map) for contact in contacts],
        enrichment_degraded=associations_degraded or degraded,
    )


# =============================================================================
# BULK LIST
# =============================================================================


def format_directory_entry(contact: dict, company_map: dict[str, dict]) -> DirectoryEntry:
    """Convert a HubSpot contact and its company into a bulk-list entry."""
    props = contact.get("properties") or {}
    company_id = first_company_id(contact)
    company_props = company_map.get(company_id) if company_id else None

    company = None
    company_location = ""
    if company_props is not None:
        company = CompanyRecord(
            id=company_id,
            name=company_props.get("name") or "",
            address=company_props.get("address") or "",
            city=company_props.get("city") or "",
            state=company_props.get("state") or "",
            zip=company_props.get("zip") or "",
            country=company_props.get("country") or "",
        )
        company_location = join_location(
            company.address, company.city, company.state, company.zip
        )

    return DirectoryEntry(
        id=str(contact["id"]),
        firstname=props.get("firstname") or "",
        lastname=props.get("lastname") or "",
        email=props.get("email") or "",
        phone=props.get("phone") or "",
        address=props.get("address") or "",
        city=props.get("city") or "",
        state=props.get("state") or "",
        zip=props.get("zip") or "",
        company=company,
        company_location=company_location,
    )


async def list_contacts(client: HubSpotClient) -> DirectoryResult:
    """
    Fetch one page of contacts with their companies merged in.

    Raises:
        UpstreamAuthError: token rejected
        UpstreamRequestError: list call failed
    """
    contacts = await client.list_contacts(CONTACT_PROPERTIES, LIST_PAGE_LIMIT)
    company_map, degraded = await fetch_company_map(client, contacts)

    return DirectoryResult(
        contacts=[format_directory_entry(contact, company_map) for contact in contacts],
        enrichment_degraded=degraded,
    )
