"""
Search request and event template validation.
"""

import re
from datetime import datetime

from core.config import RECURRENCE_FREQUENCIES, SEARCH_TYPES, WEEKDAYS
from core.errors import ValidationError
from models.templates import EventTemplate


def digits_only(value: str) -> str:
    """Strip everything except 0-9."""
    return re.sub(r"[^0-9]", "", value)


def validate_search_request(query: str | None, search_type: str | None) -> tuple[str, str]:
    """
    Normalize and check a directory search request.

    Returns:
        Tuple of (trimmed query, search type)

    Raises:
        ValidationError: if the query is empty after trimming or the type is unknown
    """
    query = (query or "").strip()
    search_type = search_type or "name"

    if not query:
        raise ValidationError("Search query is required")
    if search_type not in SEARCH_TYPES:
        raise ValidationError(
            f"Unknown search type '{search_type}', expected one of: "
            + ", ".join(sorted(SEARCH_TYPES))
        )
    return query, search_type


def validate_template(template: EventTemplate) -> list[str]:
    """
    Check a template and return a list of human-readable problems.

    Checks:
    1. Title, date and time are present (the invite text is blank without them)
    2. Date and time parse as YYYY-MM-DD and HH:MM
    3. Recurrence is coherent: frequency set, weekdays only for weekly,
       positive occurrence count, and a note when both end conditions are set
    """
    errors = []

    # Check 1: Required fields
    if not template.title:
        errors.append("Missing title")
    if not template.date:
        errors.append("Missing date")
    if not template.time:
        errors.append("Missing time")

    # Check 2: Formats
    if template.date:
        try:
            datetime.strptime(template.date, "%Y-%m-%d")
        except ValueError:
            errors.append(f"Invalid date '{template.date}', expected YYYY-MM-DD")
    if template.time:
        try:
            datetime.strptime(template.time, "%H:%M")
        except ValueError:
            errors.append(f"Invalid time '{template.time}', expected HH:MM")

    # Check 3: Recurrence
    recurring = template.recurring
    if recurring and recurring.enabled:
        if recurring.frequency not in RECURRENCE_FREQUENCIES:
            errors.append("Recurring event has no frequency")
        if recurring.frequency == "weekly":
            unknown = [day for day in recurring.days_of_week if day not in WEEKDAYS]
            if unknown:
                errors.append(f"Unknown weekday(s): {', '.join(unknown)}")
        elif recurring.days_of_week:
            errors.append("Days of week only apply to weekly recurrence")
        if recurring.end_date:
            try:
                datetime.strptime(recurring.end_date, "%Y-%m-%d")
            except ValueError:
                errors.append(
                    f"Invalid end date '{recurring.end_date}', expected YYYY-MM-DD"
                )
        if recurring.occurrences is not None and recurring.occurrences < 1:
            errors.append("Occurrences must be at least 1")
        if recurring.end_date and recurring.occurrences:
            errors.append("Both end date and occurrences set; end date takes precedence")

    return errors
