"""Mini README: Tests for the month label helpers.

Labels use the default ``"%b %Y"`` pattern; navigation must roll over year
boundaries and malformed labels must raise ``ValueError``.
"""

from __future__ import annotations

from datetime import date, datetime

import pytest

from pocketledger.finance import (
    current_month_label,
    format_month_label,
    month_bounds,
    next_month_label,
    parse_month_label,
    previous_month_label,
)


def test_format_and_parse_month_label() -> None:
    assert format_month_label(datetime(2025, 3, 15, 14, 30)) == "Mar 2025"
    assert parse_month_label("Mar 2025") == date(2025, 3, 1)
    assert parse_month_label("  Mar 2025 ") == date(2025, 3, 1)
    assert format_month_label(date(2025, 3, 1), "%Y-%m") == "2025-03"


def test_month_bounds_are_half_open() -> None:
    """Bounds start at midnight on the 1st and end at the next month's start."""

    assert month_bounds("Dec 2024") == (datetime(2024, 12, 1), datetime(2025, 1, 1))
    assert month_bounds("2025-02", "%Y-%m") == (datetime(2025, 2, 1), datetime(2025, 3, 1))


def test_navigation_rolls_over_years() -> None:
    assert previous_month_label("Jan 2025") == "Dec 2024"
    assert next_month_label("Dec 2024") == "Jan 2025"
    assert next_month_label("Mar 2025") == "Apr 2025"


def test_current_month_label_uses_given_day() -> None:
    assert current_month_label(today=date(2025, 7, 31)) == "Jul 2025"


@pytest.mark.parametrize("label", ["", "   ", "March 2025x", "2025-03", "Foo 2025"])
def test_parse_month_label_rejects_malformed_labels(label: str) -> None:
    with pytest.raises(ValueError):
        parse_month_label(label)
