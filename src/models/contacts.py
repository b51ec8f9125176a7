"""
Contact and organization models.

`Contact` and `Organization` are the canonical shapes used on the client
side. `SearchResult` and `DirectoryEntry` are the two wire shapes the
directory gateway emits for search and bulk listing respectively.
"""

from pydantic import BaseModel, ConfigDict, Field


def join_location(*parts: str | None) -> str:
    """Join address fragments with ', ', skipping empty ones."""
    return ", ".join(part for part in parts if part)


class Organization(BaseModel):
    """Company a contact is associated with."""

    id: str = ""
    name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""

    @property
    def location(self) -> str:
        return join_location(self.address, self.city, self.state, self.zip)


class Contact(BaseModel):
    """Directory contact, normalized from either wire shape."""

    id: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    organization: Organization | None = None
    organization_location: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def location(self) -> str:
        return join_location(self.address, self.city, self.state, self.zip)

    @property
    def organization_name(self) -> str:
        return self.organization.name if self.organization else ""

    @property
    def preferred_location(self) -> str:
        """Location used to prefill the invite: own address, then company's."""
        if self.location:
            return self.location
        if self.organization_location:
            return self.organization_location
        return self.organization.location if self.organization else ""


# =============================================================================
# WIRE SHAPES
# =============================================================================


class CompanyRecord(BaseModel):
    """Company block embedded in a bulk-list entry."""

    id: str
    name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""


class DirectoryEntry(BaseModel):
    """Bulk-list contact (legacy lower-case field names)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    firstname: str = ""
    lastname: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    company: CompanyRecord | None = None
    company_location: str = Field("", alias="companyLocation")


class SearchResult(BaseModel):
    """Flattened search hit with contact and company fields pre-joined."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    email: str = ""
    phone: str = ""
    contact_address: str = Field("", alias="contactAddress")
    contact_address1: str = Field("", alias="contactAddress1")
    contact_city: str = Field("", alias="contactCity")
    contact_state: str = Field("", alias="contactState")
    contact_zip: str = Field("", alias="contactZip")
    company_name: str = Field("", alias="companyName")
    company_address: str = Field("", alias="companyAddress")
    company_address1: str = Field("", alias="companyAddress1")
    company_city: str = Field("", alias="companyCity")
    company_state: str = Field("", alias="companyState")
    company_zip: str = Field("", alias="companyZip")
