"""
Plain-text rendering of event invitations.
"""

from datetime import date, datetime

from core.config import INVITE_TIMEZONE_LABEL
from models.templates import EventTemplate, RecurringPattern

DIVIDER = "━" * 26


def format_date_long(d: date) -> str:
    """Format date as 'Weekday, Month D, YYYY' (platform-safe, no zero-padding)."""
    return f"{d.strftime('%A, %B')} {d.day}, {d.year}"


def format_date_month_day(d: date) -> str:
    """Format date as 'Month D, YYYY'."""
    return f"{d.strftime('%B')} {d.day}, {d.year}"


def format_time_12h(hour: int, minute: int) -> str:
    """Format a 24-hour time as 'H:MM AM/PM'."""
    suffix = "AM" if hour < 12 else "PM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minute:02d} {suffix}"


def format_recurrence(recurring: RecurringPattern) -> str:
    """
    Describe a recurrence, e.g. 'Weekly on Mon, Wed until March 1, 2026'.

    When both an end date and an occurrence count are set, the end date wins.
    """
    if recurring.frequency == "daily":
        text = "Daily"
    elif recurring.frequency == "weekly":
        text = "Weekly"
        if recurring.days_of_week:
            text += f" on {', '.join(recurring.days_of_week)}"
    else:
        text = "Monthly"

    end_date = None
    if recurring.end_date:
        try:
            end_date = datetime.strptime(recurring.end_date, "%Y-%m-%d").date()
        except ValueError:
            end_date = None

    if end_date:
        text += f" until {format_date_month_day(end_date)}"
    elif recurring.occurrences:
        text += f" for {recurring.occurrences} occurrences"
    return text


def format_event_text(event: EventTemplate) -> str:
    """
    Render the shareable invitation text.

    Returns an empty string when title, date or time is missing or unparseable.
    """
    if not event.title or not event.date or not event.time:
        return ""

    try:
        event_date = datetime.strptime(event.date, "%Y-%m-%d").date()
        event_time = datetime.strptime(event.time, "%H:%M")
    except ValueError:
        return ""

    lines = [
        "📅 **EVENT INVITATION**",
        "",
        DIVIDER,
        "",
        f"🎯 **Event:** {event.title}",
        "",
        f"📆 **Date:** {format_date_long(event_date)}",
        f"🕐 **Time:** {format_time_12h(event_time.hour, event_time.minute)} "
        f"{INVITE_TIMEZONE_LABEL}",
        "",
        f"📍 **Location:** {event.location}",
    ]

    if event.goal:
        lines += ["", f"🎯 **Goal:** {event.goal}"]

    if event.agenda:
        lines += ["", "📋 **Agenda:**", event.agenda]

    if event.rsvp:
        lines += ["", f"👥 **RSVP:** {event.rsvp}"]

    recurring = event.recurring
    if recurring and recurring.enabled and recurring.frequency:
        lines += ["", f"🔄 **Recurring:** {format_recurrence(recurring)}"]

    lines += [
        "",
        DIVIDER,
        "",
        "Please confirm your attendance. Looking forward to seeing you there!",
    ]
    return "\n".join(lines)
