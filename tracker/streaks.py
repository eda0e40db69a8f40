"""
Streak statistics over the day timeline.

Rest and pending days are transparent: they neither extend nor break a
streak. Days after the run date are ignored.
"""

from tracker.models import DayRecord, Summary, DONE, REST, PENDING


TRANSPARENT_STATUSES = (REST, PENDING)


def longest_streak(days: list[DayRecord], today: str) -> int:
    longest = 0
    counter = 0

    for day in days:
        if day.date > today:
            continue

        if day.status == DONE:
            counter += 1
            longest = max(longest, counter)
        elif day.status not in TRANSPARENT_STATUSES:
            counter = 0

    return longest


def current_streak(days: list[DayRecord], today: str) -> int:
    count = 0

    for day in reversed(days):
        if day.date > today or day.status in TRANSPARENT_STATUSES:
            continue

        if day.status != DONE:
            break

        count += 1

    return count


def compute_summary(days: list[DayRecord], today: str) -> Summary:
    """
    Compute streaks and totals for an ascending timeline.
    """
    return Summary(
        current_streak=current_streak(days, today),
        longest_streak=longest_streak(days, today),
        total_planks=sum(1 for day in days if day.status == DONE),
        tracked_days=sum(1 for day in days if day.date <= today)
    )
