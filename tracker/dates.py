"""
Calendar-day helpers.

All dates are ISO strings (YYYY-MM-DD) on a fixed UTC calendar. ISO dates
sort lexically, so plain string comparison orders them chronologically.
"""

import re
from datetime import datetime, date, timedelta


ISO_DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def parse_iso_date(value: str) -> date:
    """Parse a YYYY-MM-DD string, raising ValueError if it is not a real date."""
    if not isinstance(value, str) or not ISO_DATE_RE.match(value):
        raise ValueError(f"Expected an ISO date (YYYY-MM-DD), got {value!r}")
    return datetime.strptime(value, '%Y-%m-%d').date()


def is_iso_date(value) -> bool:
    try:
        parse_iso_date(value)
    except ValueError:
        return False
    return True


def days_between(a: str, b: str) -> int:
    """Absolute number of whole days between two ISO dates."""
    return abs((parse_iso_date(b) - parse_iso_date(a)).days)


def shift_days(value: str, days: int) -> str:
    return (parse_iso_date(value) + timedelta(days=days)).isoformat()


def min_date(dates) -> str:
    return min(dates)


def max_date(dates) -> str:
    return max(dates)


class DateRange:
    """
    Inclusive run of ISO dates from start to end, one day apart.

    Iterating yields dates lazily and can be repeated; an end before the
    start gives an empty range.
    """

    def __init__(self, start: str, end: str):
        self.start = start
        self.end = end
        self._first = parse_iso_date(start)
        self._last = parse_iso_date(end)

    def __iter__(self):
        current = self._first
        while current <= self._last:
            yield current.isoformat()
            current += timedelta(days=1)

    def __len__(self) -> int:
        return max(0, (self._last - self._first).days + 1)

    def __contains__(self, value) -> bool:
        return is_iso_date(value) and self.start <= value <= self.end

    def __repr__(self) -> str:
        return f"DateRange({self.start!r}, {self.end!r})"


def date_range(start: str, end: str) -> DateRange:
    return DateRange(start, end)
