"""
Decay and urgency scoring module.

This module handles:
- SRS retention on an exponential forgetting curve
- Health checkup urgency on a logistic overdue curve
- Trailing-window sleep and play scores
- Plank strength as a sum of decaying contributions

Each scorer is independent and keys off the run date it is given.
"""

import math
from tracker.config import Settings
from tracker.dates import days_between, is_iso_date, parse_iso_date, shift_days
from tracker.models import DayRecord


def round_half_up(value: float, digits: int = 0):
    """
    Round halves up (2.5 -> 3), unlike the built-in round().
    Returns an int when digits is 0.
    """
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if digits == 0 else rounded


def retention(item: dict, today: str) -> float:
    """Forgetting-curve retention for one item; 0 if never reviewed."""
    last_review = item.get('lastReview')
    if not is_iso_date(last_review):
        return 0.0
    elapsed = days_between(last_review, today)
    return math.exp(-elapsed / item['stability'])


def compute_srs_retention(items: list[dict], today: str, settings: Settings) -> dict:
    """
    Annotate each SRS item with its retention and average them.
    """
    if not items:
        return {'items': [], 'aggregateRetention': 0}

    computed = [
        {**item, 'retention': round_half_up(retention(item, today), 3)}
        for item in items
    ]
    total = sum(item['retention'] for item in computed)

    return {
        'items': computed,
        'aggregateRetention': round_half_up(total / len(computed) * 100)
    }


def urgency(checkup: dict, today: str, default_steepness: float) -> float:
    """Logistic urgency for one checkup; 1.0 if never completed."""
    last_completed = checkup.get('lastCompleted')
    if not is_iso_date(last_completed):
        return 1.0
    elapsed = days_between(last_completed, today)
    k = checkup.get('steepness') or default_steepness
    return 1 / (1 + math.exp(-k * (elapsed / checkup['intervalDays'] - 1)))


def compute_health_urgency(checkups: list[dict], today: str, settings: Settings) -> dict:
    """
    Annotate each checkup with its urgency; the aggregate score is higher
    when checkups are less overdue.
    """
    if not checkups:
        return {'checkups': [], 'aggregateScore': 0}

    computed = [
        {**checkup, 'urgency': round_half_up(urgency(checkup, today, settings.default_steepness), 3)}
        for checkup in checkups
    ]
    avg_urgency = sum(checkup['urgency'] for checkup in computed) / len(computed)

    return {
        'checkups': computed,
        'aggregateScore': round_half_up((1 - avg_urgency) * 100)
    }


def window_entries(entries: list[dict], today: str, window_days: int) -> list[dict]:
    """
    Entries dated within the trailing window ending today, oldest first.
    Entries without a valid date are dropped.
    """
    start = shift_days(today, -(window_days - 1))
    in_window = [
        entry for entry in entries
        if is_iso_date(entry.get('date')) and start <= entry['date'] <= today
    ]
    return sorted(in_window, key=lambda entry: entry['date'])


def sleep_day_score(hours: float, target_hours: float) -> float:
    return max(0.0, 1 - abs(hours - target_hours) / target_hours)


def compute_sleep_score(entries: list[dict], today: str, settings: Settings) -> dict:
    """
    Score sleep over the trailing window.

    The summed day scores are divided by the full window length, so days
    with nothing logged count as zero.
    """
    recent = window_entries(entries, today, settings.window_days)

    # One value per night; a later entry for the same date replaces the earlier
    hours_by_day = {}
    for entry in recent:
        hours_by_day[entry['date']] = entry['hours']

    if not hours_by_day:
        return {'entries': [], 'aggregateScore': 0, 'avgHours': 0, 'loggedDays': 0}

    total_score = sum(
        sleep_day_score(hours, settings.sleep_target_hours)
        for hours in hours_by_day.values()
    )
    avg_hours = sum(hours_by_day.values()) / len(hours_by_day)

    return {
        'entries': recent,
        'aggregateScore': round_half_up(total_score / settings.window_days * 100),
        'avgHours': round_half_up(avg_hours, 1),
        'loggedDays': len(hours_by_day)
    }


def compute_play_score(entries: list[dict], today: str, settings: Settings) -> dict:
    """
    Score activity minutes over the trailing window against the weekly
    target, capped at 100.
    """
    recent = window_entries(entries, today, settings.window_days)
    total_minutes = sum(entry['minutes'] for entry in recent)
    active_days = {entry['date'] for entry in recent if entry['minutes'] > 0}

    return {
        'entries': recent,
        'aggregateScore': min(100, round_half_up(total_minutes / settings.play_target_minutes * 100)),
        'totalMinutes': total_minutes,
        'activeDays': len(active_days)
    }


def compute_strength(days: list[DayRecord], today: str, settings: Settings) -> dict:
    """
    Plank strength: every plank adds a fixed amount that halves every
    half-life, summed and capped.
    """
    decay = math.log(2) / settings.strength_half_life_days
    today_date = parse_iso_date(today)

    total = 0.0
    days_since_last = None
    for day in days:
        if not day.did_plank:
            continue
        days_since = max(0, (today_date - parse_iso_date(day.date)).days)
        total += settings.strength_base_per_plank * math.exp(-decay * days_since)
        days_since_last = days_since

    return {
        'value': round_half_up(min(settings.strength_max, total)),
        'daysSinceLastPlank': days_since_last
    }
