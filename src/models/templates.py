"""
Data models for event templates.

The same shape is used for the in-memory invite form, the request body of
the template endpoints and the stored snapshot (which adds id and timestamps).
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RecurringPattern(BaseModel):
    """Recurrence settings for an event."""

    model_config = ConfigDict(populate_by_name=True)

    enabled: bool = False
    frequency: Literal["daily", "weekly", "monthly", ""] = ""
    days_of_week: list[str] = Field(default_factory=list, alias="daysOfWeek")
    end_date: str = Field("", alias="endDate")
    occurrences: int | None = None


class EventTemplate(BaseModel):
    """User-authored event details."""

    title: str = ""
    date: str = ""  # YYYY-MM-DD
    time: str = ""  # HH:MM, 24-hour
    location: str = ""
    goal: str = ""
    agenda: str = ""
    rsvp: str = ""
    recurring: RecurringPattern | None = None


class StoredTemplate(EventTemplate):
    """Template snapshot as persisted, with server-assigned fields."""

    id: int
    created_at: str
    updated_at: str
