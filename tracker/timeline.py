"""
Timeline construction: one record per calendar day across the observed range.
"""

from dataclasses import replace
from tracker.dates import date_range, min_date, max_date
from tracker.models import DayRecord, SOURCE_DERIVED, FUTURE, MISSED


def timeline_bounds(entries: dict[str, DayRecord], today: str) -> tuple[str, str]:
    """Earliest and latest of the known dates and today."""
    known = [*entries.keys(), today]
    return min_date(known), max_date(known)


def build_timeline(entries: dict[str, DayRecord], today: str) -> list[DayRecord]:
    """
    Emit a record for every date in the observed range, in ascending order.

    Gaps after today become optimistic "future" placeholders; gaps on or
    before today count as missed.
    """
    start, end = timeline_bounds(entries, today)
    days = []

    for day in date_range(start, end):
        entry = entries.get(day)

        if entry is not None:
            days.append(replace(entry, is_future=day > today))
        elif day > today:
            days.append(DayRecord(
                date=day,
                status=FUTURE,
                did_plank=False,
                keeps_streak=True,
                source=SOURCE_DERIVED,
                is_future=True
            ))
        else:
            days.append(DayRecord(
                date=day,
                status=MISSED,
                did_plank=False,
                keeps_streak=False,
                source=SOURCE_DERIVED,
                is_future=False
            ))

    return days
