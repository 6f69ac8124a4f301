"""Mini README: Month label helpers shared by the store and its interfaces.

Structure:
    * format_month_label / parse_month_label - render and read "Mar 2025" labels.
    * month_bounds - half-open ``[start, next_start)`` range for a label.
    * previous_month_label / next_month_label / current_month_label - navigation.

Every helper is a pure function that takes the strftime pattern explicitly,
so no formatter object is shared between callers. Labels are rendered in the
process locale; a label built by one process is only meaningful to another
running with the same locale and pattern.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Tuple

DEFAULT_MONTH_FORMAT = "%b %Y"


def format_month_label(moment: date, fmt: str = DEFAULT_MONTH_FORMAT) -> str:
    """Render the month containing ``moment`` (a date or datetime)."""

    return moment.strftime(fmt)


def parse_month_label(label: str, fmt: str = DEFAULT_MONTH_FORMAT) -> date:
    """Return the first day of the month named by ``label``.

    Raises ``ValueError`` when the label does not match ``fmt``.
    """

    if not label or not label.strip():
        raise ValueError("Month label must not be empty")
    return datetime.strptime(label.strip(), fmt).date().replace(day=1)


def _shift(first_day: date, months: int) -> date:
    index = first_day.month - 1 + months
    return date(first_day.year + index // 12, index % 12 + 1, 1)


def month_bounds(label: str, fmt: str = DEFAULT_MONTH_FORMAT) -> Tuple[datetime, datetime]:
    """Return ``(month_start, next_month_start)`` as midnight datetimes."""

    first_day = parse_month_label(label, fmt)
    following = _shift(first_day, 1)
    return (
        datetime(first_day.year, first_day.month, 1),
        datetime(following.year, following.month, 1),
    )


def previous_month_label(label: str, fmt: str = DEFAULT_MONTH_FORMAT) -> str:
    return format_month_label(_shift(parse_month_label(label, fmt), -1), fmt)


def next_month_label(label: str, fmt: str = DEFAULT_MONTH_FORMAT) -> str:
    return format_month_label(_shift(parse_month_label(label, fmt), 1), fmt)


def current_month_label(fmt: str = DEFAULT_MONTH_FORMAT, today: Optional[date] = None) -> str:
    """Label for the month containing ``today`` (defaults to the local date)."""

    return format_month_label(today or date.today(), fmt)
