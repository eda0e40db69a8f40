"""
Data loading and validation module.

This module handles:
- Locating the input directory
- Loading the plank log and the current status record
- Loading SRS, health checkup, sleep and play records from JSON
- Skipping invalid records with a warning for each
"""

import json
import math
import os
from pathlib import Path
from typing import Optional
from tracker.config import Settings, SOURCE_DIR_ENV, DEFAULT_SOURCE_DIRS, EMPTY_LOG
from tracker.models import SourceData, StatusSnapshot
from tracker.status import MalformedStatusRecord, default_status, parse_status_record


class MissingSourceError(FileNotFoundError):
    """No candidate directory holds the plank log or status file."""


# Required fields for each record kind
SRS_REQUIRED_FIELDS = {'stability'}
HEALTH_REQUIRED_FIELDS = {'intervalDays'}
SLEEP_REQUIRED_FIELDS = {'date', 'hours'}
PLAY_REQUIRED_FIELDS = {'date', 'minutes'}
HEALTH_OPTIONAL_FIELDS = {'steepness'}

# Numeric fields, checked when required or present: field -> (description, check).
# NaN and infinities are always rejected.
NUMERIC_FIELDS = {
    'stability': ('a positive number', lambda v: v > 0),
    'intervalDays': ('a positive number', lambda v: v > 0),
    'steepness': ('a number', lambda v: True),
    'hours': ('between 0 and 24', lambda v: 0 <= v <= 24),
    'minutes': ('between 0 and 1440', lambda v: 0 <= v <= 1440),
}


def candidate_dirs(explicit: Optional[str] = None) -> list[Path]:
    """Input directories to try, in priority order."""
    candidates = [explicit, os.environ.get(SOURCE_DIR_ENV), *DEFAULT_SOURCE_DIRS]
    return [Path(c).expanduser() for c in candidates if c]


def resolve_input_dir(explicit: Optional[str] = None, settings: Settings = Settings()) -> Path:
    """
    Return the first candidate directory holding the log or status file.
    """
    tried = candidate_dirs(explicit)
    for candidate in tried:
        if (candidate / settings.log_filename).is_file() or (candidate / settings.status_filename).is_file():
            return candidate

    raise MissingSourceError(
        "Could not find plank data source directory. "
        f"Set {SOURCE_DIR_ENV} or pass --source with a folder containing "
        f"{settings.log_filename} or {settings.status_filename}. "
        f"Tried: {', '.join(str(p) for p in tried)}"
    )


def load_log(filepath: Path) -> str:
    """Read the plank log, or an empty log if the file is absent."""
    if not filepath.is_file():
        return EMPTY_LOG
    return filepath.read_text(encoding='utf-8')


def read_status_file(filepath: Path) -> StatusSnapshot:
    try:
        data = json.loads(filepath.read_text(encoding='utf-8'))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedStatusRecord(f"Unreadable status file: {e}")
    return parse_status_record(data)


def load_status(filepath: Path, today: str) -> StatusSnapshot:
    """
    Load the current status record.

    A missing or malformed file falls back to an unconfirmed record for today.
    """
    if not filepath.is_file():
        return parse_status_record(default_status(today))

    try:
        return read_status_file(filepath)
    except MalformedStatusRecord as e:
        print(f"  Warning: {e}. Using an unconfirmed status for {today}.")
        return parse_status_record(default_status(today))


def validate_entry(
    entry,
    required_fields: set,
    label: str,
    index: int,
    optional_fields: set = frozenset()
) -> None:
    """
    Check that an entry is an object with the required fields and sane numbers.
    Date fields are not checked here; scorers ignore invalid dates.
    """
    if not isinstance(entry, dict):
        raise TypeError(f"{label} record {index}: Expected an object, got {type(entry).__name__}")

    missing_fields = required_fields - set(entry.keys())
    if missing_fields:
        raise ValueError(
            f"{label} record {index}: Missing required fields: {', '.join(sorted(missing_fields))}. "
            f"Required: {', '.join(sorted(required_fields))}"
        )

    for name, (description, check) in NUMERIC_FIELDS.items():
        value = entry.get(name)
        if name not in required_fields and (name not in optional_fields or value is None):
            continue
        if (isinstance(value, bool) or not isinstance(value, (int, float))
                or not math.isfinite(value) or not check(value)):
            raise ValueError(f"{label} record {index}: '{name}' must be {description}, got {value!r}")


def load_records(
    filepath: Path,
    required_fields: set,
    label: str,
    optional_fields: set = frozenset()
) -> list[dict]:
    """
    Load a JSON array of records, skipping invalid ones.
    A missing file yields no records.
    """
    if not filepath.is_file():
        return []

    try:
        data = json.loads(filepath.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {label.lower()} data file: {e}")

    if not isinstance(data, list):
        raise TypeError(f"{filepath.name} must contain a JSON array, got {type(data).__name__}")

    records = []
    skipped = []
    for idx, entry in enumerate(data):
        try:
            validate_entry(entry, required_fields, label, idx, optional_fields)
            records.append(entry)
        except (ValueError, TypeError) as e:
            skipped.append((idx, str(e)))

    # Print warnings for skipped records
    if skipped:
        print(f"  Warning: Skipped {len(skipped)} invalid {label.lower()} record(s):")
        for idx, error in skipped:
            print(f"    - Record {idx}: {error}")

    return records


def load_sources(input_dir: Path, today: str, settings: Settings = Settings()) -> SourceData:
    """
    Load every input from the directory. Absent files become empty inputs.
    """
    return SourceData(
        log_text=load_log(input_dir / settings.log_filename),
        status=load_status(input_dir / settings.status_filename, today),
        srs_items=load_records(input_dir / settings.srs_filename, SRS_REQUIRED_FIELDS, 'SRS'),
        checkups=load_records(input_dir / settings.health_filename, HEALTH_REQUIRED_FIELDS, 'Health', HEALTH_OPTIONAL_FIELDS),
        sleep_entries=load_records(input_dir / settings.sleep_filename, SLEEP_REQUIRED_FIELDS, 'Sleep'),
        play_entries=load_records(input_dir / settings.play_filename, PLAY_REQUIRED_FIELDS, 'Play')
    )
