# tests/test_dates.py

from __future__ import annotations

from datetime import date

import pytest

from taskbook.tasks.dates import format_due_date, parse_due_date
from taskbook.tasks.task_models import InvalidDateFormatError


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("25.12.2024", date(2024, 12, 25)),
        ("2024-12-25", date(2024, 12, 25)),
        ("12/25/2024", date(2024, 12, 25)),
        ("12-25-2024", date(2024, 12, 25)),
        ("  01.06.2024 ", date(2024, 6, 1)),
    ],
)
def test_parse_due_date_accepted_formats(raw: str, expected: date) -> None:
    assert parse_due_date(raw) == expected


def test_ambiguous_input_resolved_by_format_order() -> None:
    # DD.MM.YYYY is tried before MM/DD/YYYY and MM-DD-YYYY
    assert parse_due_date("01.02.2003") == date(2003, 2, 1)
    assert parse_due_date("01/02/2003") == date(2003, 1, 2)
    assert parse_due_date("01-02-2003") == date(2003, 1, 2)


@pytest.mark.parametrize("raw", ["13.13.2024", "2024/12/25", "31.02.2024", "", "tomorrow"])
def test_parse_due_date_rejects(raw: str) -> None:
    with pytest.raises(InvalidDateFormatError) as exc:
        parse_due_date(raw)
    assert exc.value.value == raw


def test_format_due_date_is_day_first() -> None:
    assert format_due_date(date(2024, 5, 3)) == "03.05.2024"


def test_single_digit_day_and_month_are_accepted() -> None:
    # strptime is lenient here, unlike zero-padded layouts; this is the chosen behavior
    assert parse_due_date("1.6.2024") == date(2024, 6, 1)
    assert parse_due_date("6/1/2024") == date(2024, 6, 1)
