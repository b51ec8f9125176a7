"""
Invite composer state and contact resolver.

All form and selection changes go through `ContactResolver` methods so the
derived fields (attendee string, prefilled location) stay consistent.
"""

import logging

from pydantic import BaseModel, Field

from core.config import EXTRA_PARTICIPANT_EMAIL, MIN_QUERY_LENGTH, SEARCH_DEBOUNCE_SECONDS
from models.contacts import Contact
from models.templates import EventTemplate, RecurringPattern
from services.contacts import filter_contacts_locally, unique_locations
from services.debounce import Debouncer
from services.formatting import format_event_text
from services.gateway_client import DirectoryGatewayClient

logger = logging.getLogger(__name__)

FORM_FIELDS = {"title", "date", "time", "location", "goal", "agenda", "rsvp"}


class InviteFormState(BaseModel):
    """Serializable snapshot of the composer."""

    form: EventTemplate = Field(default_factory=EventTemplate)
    selected: list[Contact] = Field(default_factory=list)
    include_extra: bool = False
    query: str = ""
    search_type: str = "name"
    remote_results: list[Contact] = Field(default_factory=list)
    remote_query: str = ""
    directory: list[Contact] = Field(default_factory=list)


class ContactResolver:
    """Owns an InviteFormState and applies named transitions to it."""

    def __init__(
        self,
        gateway: DirectoryGatewayClient,
        extra_participant_email: str = EXTRA_PARTICIPANT_EMAIL,
        debounce_seconds: float = SEARCH_DEBOUNCE_SECONDS,
        state: InviteFormState | None = None,
    ):
        self.gateway = gateway
        self.extra_participant_email = extra_participant_email
        self.state = state or InviteFormState()
        self.debouncer = Debouncer(debounce_seconds)
        self._dispatched = 0

    # -------------------------------------------------------------------------
    # Directory and search
    # -------------------------------------------------------------------------

    async def load_directory(self) -> list[Contact]:
        """Fetch the bulk contact list used for local fallback filtering."""
        self.state.directory = await self.gateway.list_contacts()
        return self.state.directory

    def set_query(self, query: str, search_type: str | None = None) -> None:
        """
        Record new search text and arm a debounced remote search.

        Short queries cancel any pending search and clear remote results.
        Must be called with an event loop running.
        """
        self.state.query = query
        if search_type:
            self.state.search_type = search_type

        trimmed = query.strip()
        if len(trimmed) < MIN_QUERY_LENGTH:
            self.debouncer.cancel()
            # Invalidate any response still in flight
            self._dispatched += 1
            self.state.remote_results = []
            self.state.remote_query = ""
            return

        self.debouncer.schedule(self._run_search, trimmed, self.state.search_type)

    async def _run_search(self, query: str, search_type: str) -> None:
        self._dispatched += 1
        sequence = self._dispatched
        results = await self.gateway.search_contacts(query, search_type)

        if sequence != self._dispatched:
            logger.debug("Dropping stale results for %r (request %d)", query, sequence)
            return
        self.state.remote_results = results
        self.state.remote_query = query

    async def wait_for_search(self) -> None:
        """Wait for any pending or in-flight search to settle."""
        await self.debouncer.drain()

    @property
    def visible_contacts(self) -> list[Contact]:
        """Remote results for the current query, else the bulk list filtered locally."""
        if self.state.remote_results and self.state.remote_query == self.state.query.strip():
            return self.state.remote_results
        return filter_contacts_locally(self.state.directory, self.state.query)

    @property
    def locations(self) -> list[str]:
        """Location autocomplete source across every known contact."""
        known = self.state.directory + self.state.remote_results + self.state.selected
        return unique_locations(known)

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def add_attendee(self, contact: Contact) -> bool:
        """Select a contact; returns False if it was already selected."""
        if any(selected.id == contact.id for selected in self.state.selected):
            return False

        self.state.selected.append(contact)
        if not self.state.form.location and contact.preferred_location:
            self.state.form.location = contact.preferred_location
        self._recompute_attendees()
        return True

    def remove_attendee(self, contact_id: str) -> bool:
        """Deselect a contact by id; returns False if it was not selected."""
        remaining = [c for c in self.state.selected if c.id != contact_id]
        if len(remaining) == len(self.state.selected):
            return False
        self.state.selected = remaining
        self._recompute_attendees()
        return True

    def set_include_extra(self, include: bool) -> None:
        self.state.include_extra = include
        self._recompute_attendees()

    def attendee_string(self) -> str:
        emails = [contact.email for contact in self.state.selected if contact.email]
        if self.state.include_extra and self.extra_participant_email:
            emails.append(self.extra_participant_email)
        return ", ".join(emails)

    def _recompute_attendees(self) -> None:
        self.state.form.rsvp = self.attendee_string()

    # -------------------------------------------------------------------------
    # Form fields
    # -------------------------------------------------------------------------

    def set_field(self, name: str, value: str) -> None:
        if name not in FORM_FIELDS:
            raise ValueError(f"Unknown form field: {name}")
        setattr(self.state.form, name, value)

    def select_location(self, location: str) -> None:
        """Explicit location choice (e.g. from autocomplete) always applies."""
        self.state.form.location = location

    def set_recurrence(self, **changes) -> RecurringPattern:
        """Update recurrence settings, e.g. set_recurrence(enabled=True, frequency="weekly")."""
        current = self.state.form.recurring or RecurringPattern()
        updated = current.model_copy(update=changes)
        # Re-validate so bad enum values are rejected
        self.state.form.recurring = RecurringPattern.model_validate(updated.model_dump())
        return self.state.form.recurring

    def toggle_day(self, day: str) -> list[str]:
        """Add or remove a weekday from a weekly recurrence."""
        recurring = self.state.form.recurring or RecurringPattern()
        if day in recurring.days_of_week:
            days = [d for d in recurring.days_of_week if d != day]
        else:
            days = [*recurring.days_of_week, day]
        return self.set_recurrence(days_of_week=days).days_of_week

    def load_template(self, template: EventTemplate) -> None:
        """Replace the form with a saved template's fields."""
        self.state.form = EventTemplate.model_validate(
            template.model_dump(include=FORM_FIELDS | {"recurring"})
        )

    def to_template(self) -> EventTemplate:
        return self.state.form.model_copy(deep=True)

    def preview(self) -> str:
        return format_event_text(self.state.form)
