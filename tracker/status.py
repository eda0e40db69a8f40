"""
Current-status reconciliation module.

This module handles:
- Validating the confirmation-status record
- Inferring a day record from it
- Merging that record into the parsed log with status precedence
"""

from typing import Optional
from tracker.dates import is_iso_date
from tracker.models import (
    DayRecord, StatusSnapshot, SOURCE_STATUS,
    DONE, REST, MISSED, PENDING,
)


class MalformedStatusRecord(ValueError):
    """The status file could not be read as a status record."""


def default_status(today: str) -> dict:
    return {'date': today, 'confirmed': False}


def parse_status_record(data) -> StatusSnapshot:
    """
    Build a StatusSnapshot from the decoded status JSON.

    A date that is not a valid ISO date is kept as None so that the record
    still reaches the snapshot but produces no day record.
    """
    if not isinstance(data, dict):
        raise MalformedStatusRecord(
            f"Status record must be a JSON object, got {type(data).__name__}"
        )

    raw_date = data.get('date')
    time_text = data.get('time')
    return StatusSnapshot(
        date=raw_date if is_iso_date(raw_date) else None,
        confirmed=data.get('confirmed') is True,
        time=str(time_text) if time_text else '',
        raw=data
    )


def infer_entry_from_status(status: StatusSnapshot, today: str) -> Optional[DayRecord]:
    """
    Turn the current status into at most one day record.
    """
    if status.date is None:
        return None

    if status.confirmed:
        is_rest = 'rest day' in status.time.lower()
        return DayRecord(
            date=status.date,
            status=REST if is_rest else DONE,
            did_plank=not is_rest,
            keeps_streak=True,
            source=SOURCE_STATUS
        )

    # Unconfirmed today is still open; unconfirmed on any other day is a miss
    return DayRecord(
        date=status.date,
        status=PENDING if status.date == today else MISSED,
        did_plank=False,
        keeps_streak=False,
        source=SOURCE_STATUS
    )


def merge_entries(existing: Optional[DayRecord], incoming: DayRecord) -> DayRecord:
    """
    Resolve a status-derived record against the log record for the same day.

    A confirmed done/rest always wins; a pending or missed status never
    replaces something already logged.
    """
    if existing is None:
        return incoming

    if incoming.status in (DONE, REST):
        return incoming

    return existing


def reconcile(
    log_entries: dict[str, DayRecord],
    status: StatusSnapshot,
    today: str
) -> dict[str, DayRecord]:
    """
    Return a new date -> DayRecord map with the status record merged in.
    """
    merged = dict(log_entries)
    status_entry = infer_entry_from_status(status, today)
    if status_entry is not None:
        merged[status_entry.date] = merge_entries(merged.get(status_entry.date), status_entry)
    return merged
