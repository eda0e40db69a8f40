"""
Data models for the personal tracker snapshot.

This module defines the data structures used throughout the application:
- DayRecord: Normalized status of a single calendar day
- LogEntry: Raw section parsed from the free-text plank log
- StatusSnapshot: The current confirmation status record
- Summary: Streak statistics over the timeline
- SourceData: Everything loaded from the input directory for one run
- Snapshot: The assembled output document
"""

from dataclasses import dataclass, field
from typing import Optional


# Day statuses
DONE = 'done'
REST = 'rest'
MISSED = 'missed'
PENDING = 'pending'
UNKNOWN = 'unknown'
FUTURE = 'future'

# Record sources
SOURCE_LOG = 'log'
SOURCE_STATUS = 'status'
SOURCE_DERIVED = 'derived'

# status -> (did_plank, keeps_streak)
STATUS_FLAGS = {
    DONE: (True, True),
    REST: (False, True),
    MISSED: (False, False),
    PENDING: (False, False),
    UNKNOWN: (False, False),
    FUTURE: (False, True),
}


@dataclass
class DayRecord:
    """Normalized record for one calendar day."""
    date: str  # ISO date, YYYY-MM-DD
    status: str
    did_plank: bool
    keeps_streak: bool
    source: str
    note: Optional[str] = None
    is_future: bool = False


@dataclass
class LogEntry:
    """One dated section of the plank log."""
    date: str
    status_text: str
    note: Optional[str] = None


@dataclass
class StatusSnapshot:
    """The single "current status" input record."""
    date: Optional[str]  # None when the record's date is not a valid ISO date
    confirmed: bool
    time: str
    raw: dict = field(default_factory=dict)


@dataclass
class Summary:
    """Streak statistics, recomputed on every run."""
    current_streak: int = 0
    longest_streak: int = 0
    total_planks: int = 0
    tracked_days: int = 0


@dataclass
class SourceData:
    """All inputs for one pipeline run."""
    log_text: str
    status: StatusSnapshot
    srs_items: list = field(default_factory=list)
    checkups: list = field(default_factory=list)
    sleep_entries: list = field(default_factory=list)
    play_entries: list = field(default_factory=list)


@dataclass
class Snapshot:
    """The assembled output document."""
    generated_at: str
    current_status: dict
    start: str
    end: str
    summary: Summary
    days: list[DayRecord]
    scores: dict = field(default_factory=dict)
