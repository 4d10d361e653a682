# src/taskbook/tasks/dates.py

from __future__ import annotations

from datetime import date, datetime
from typing import Final

from .task_models import InvalidDateFormatError

# Order matters: ambiguous input such as "01-02-2003" resolves to the first match.
DUE_DATE_FORMATS: Final[tuple[str, ...]] = (
    "%d.%m.%Y",  # DD.MM.YYYY
    "%Y-%m-%d",  # YYYY-MM-DD
    "%m/%d/%Y",  # MM/DD/YYYY
    "%m-%d-%Y",  # MM-DD-YYYY
)

DISPLAY_FORMAT: Final[str] = "%d.%m.%Y"


def parse_due_date(value: str) -> date:
    """Parse a user-supplied due date; first accepted format wins."""
    raw = value.strip()
    for fmt in DUE_DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
    raise InvalidDateFormatError(value)


def format_due_date(d: date) -> str:
    return d.strftime(DISPLAY_FORMAT)
