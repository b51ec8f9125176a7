"""
Client-side contact helpers: normalization, location list, local filtering.
"""

from models.contacts import Contact, Organization

COMPANY_FIELDS = ("address", "city", "state", "zip", "country")


def _pick(payload: dict, *keys: str) -> str:
    """First non-empty value among keys (legacy key listed first)."""
    for key in keys:
        value = payload.get(key)
        if value:
            return str(value)
    return ""


def _organization(payload: dict) -> Organization | None:
    company = payload.get("company")
    if isinstance(company, dict):
        return Organization(
            id=str(company.get("id") or ""),
            name=company.get("name") or payload.get("companyName") or "",
            **{key: company.get(key) or "" for key in COMPANY_FIELDS},
        )

    # Search results carry the company flattened onto the contact
    org = Organization(
        name=_pick(payload, "companyName", "company"),
        address=_pick(payload, "companyAddress1"),
        city=_pick(payload, "companyCity"),
        state=_pick(payload, "companyState"),
        zip=_pick(payload, "companyZip"),
    )
    if any([org.name, org.address, org.city, org.state, org.zip]):
        return org
    return None


def normalize_contact(payload: dict) -> Contact:
    """
    Convert a gateway payload in either field-naming convention to a Contact.

    Bulk-list entries use firstname/lastname/address/city/state/zip and a
    nested company; search hits use firstName/lastName/contactCity/... with
    company fields flattened. Either may be partially populated.
    """
    return Contact(
        id=str(payload.get("id") or ""),
        first_name=_pick(payload, "firstname", "firstName"),
        last_name=_pick(payload, "lastname", "lastName"),
        email=_pick(payload, "email"),
        phone=_pick(payload, "phone"),
        address=_pick(payload, "address", "contactAddress1"),
        city=_pick(payload, "city", "contactCity"),
        state=_pick(payload, "state", "contactState"),
        zip=_pick(payload, "zip", "contactZip"),
        organization=_organization(payload),
        organization_location=_pick(payload, "companyLocation", "companyAddress"),
    )


def normalize_contacts(payloads: list[dict]) -> list[Contact]:
    return [normalize_contact(payload) for payload in payloads]


def unique_locations(contacts: list[Contact]) -> list[str]:
    """Distinct non-empty contact and company locations, sorted."""
    locations = set()
    for contact in contacts:
        locations.add(contact.location)
        locations.add(contact.organization_location)
        if contact.organization:
            locations.add(contact.organization.location)
    locations.discard("")
    return sorted(locations)


def filter_contacts_locally(contacts: list[Contact], query: str) -> list[Contact]:
    """Plain case-insensitive substring match on full name, email or company."""
    needle = query.strip().lower()
    if not needle:
        return list(contacts)
    return [
        contact
        for contact in contacts
        if needle in f"{contact.first_name} {contact.last_name}".lower()
        or needle in contact.email.lower()
        or needle in contact.organization_name.lower()
    ]
