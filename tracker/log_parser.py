"""
Plank log parsing module.

This module handles:
- Splitting the free-text log into dated sections
- Extracting the status and notes phrases of each section
- Classifying status phrases into day statuses
"""

import re
from typing import Optional
from tracker.dates import is_iso_date
from tracker.models import (
    DayRecord, LogEntry, STATUS_FLAGS, SOURCE_LOG,
    DONE, REST, MISSED, UNKNOWN,
)


SECTION_HEADER_RE = re.compile(r'^##[ \t]+(\d{4}-\d{2}-\d{2})[ \t]*$')
STATUS_LINE_RE = re.compile(r'\*\*Status:\*\*\s*(\S.*)$', re.IGNORECASE)
NOTES_LINE_RE = re.compile(r'\*\*Notes:\*\*\s*(.+)$', re.IGNORECASE)

# Checked in order; the first matching group wins
STATUS_KEYWORDS = (
    (REST, ('rest day',)),
    (DONE, ('done', 'completed', 'yes')),
    (MISSED, ('missed', 'no response')),
)


def normalize_status(raw_status: str) -> str:
    """
    Classify a free-text status phrase.
    """
    value = raw_status.strip().lower()
    if not value:
        return UNKNOWN

    for status, keywords in STATUS_KEYWORDS:
        if any(keyword in value for keyword in keywords):
            return status

    return UNKNOWN


def _first_match(pattern: re.Pattern, lines: list[str]) -> Optional[str]:
    for line in lines:
        match = pattern.search(line)
        if match:
            return match.group(1)
    return None


def _make_entry(date: str, body_lines: list[str]) -> LogEntry:
    status_line = _first_match(STATUS_LINE_RE, body_lines)
    note_line = _first_match(NOTES_LINE_RE, body_lines)

    # Sections without a status line are classified by their whole body
    status_text = status_line if status_line else '\n'.join(body_lines)

    return LogEntry(
        date=date,
        status_text=status_text,
        note=(note_line or '').strip() or None
    )


def parse_log_sections(content: str) -> list[LogEntry]:
    """
    Split the log into dated sections, in file order.

    A "## YYYY-MM-DD" line opens a section that runs until the next header
    or the end of the text. Anything before the first header is ignored.
    """
    sections = []
    current_date = None
    buffer = []

    for line in content.splitlines():
        header = SECTION_HEADER_RE.match(line)
        if header:
            if current_date is not None:
                sections.append(_make_entry(current_date, buffer))
            # Headers naming impossible dates (2024-02-30) drop their section
            current_date = header.group(1) if is_iso_date(header.group(1)) else None
            buffer = []
        elif current_date is not None:
            buffer.append(line)

    if current_date is not None:
        sections.append(_make_entry(current_date, buffer))

    return sections


def entry_to_day(entry: LogEntry) -> DayRecord:
    status = normalize_status(entry.status_text)
    did_plank, keeps_streak = STATUS_FLAGS[status]
    return DayRecord(
        date=entry.date,
        status=status,
        did_plank=did_plank,
        keeps_streak=keeps_streak,
        source=SOURCE_LOG,
        note=entry.note
    )


def parse_log_entries(content: str) -> dict[str, DayRecord]:
    """
    Parse the log into a mapping of ISO date -> DayRecord.

    If a date header appears more than once, the last section wins.
    """
    entries = {}
    for entry in parse_log_sections(content):
        entries[entry.date] = entry_to_day(entry)
    return entries
