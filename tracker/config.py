"""
Run configuration.

Scoring constants and input file names live here as named fields with
defaults so a run (or a test) can override any of them.
"""

from dataclasses import dataclass


SOURCE_DIR_ENV = 'PLANK_SOURCE_DIR'
DEFAULT_OUTPUT = 'public/plank-data.json'

# Searched after --source and $PLANK_SOURCE_DIR, relative to the working directory
DEFAULT_SOURCE_DIRS = ('data', '../openclaw-arya', '../../openclaw-arya')

EMPTY_LOG = '# Plank Log\n'


@dataclass(frozen=True)
class Settings:
    """Input names and scoring constants for one run."""
    log_filename: str = 'plank-log.md'
    status_filename: str = 'plank-status.json'
    srs_filename: str = 'srs-items.json'
    health_filename: str = 'health-checkups.json'
    sleep_filename: str = 'sleep-log.json'
    play_filename: str = 'play-log.json'

    # Trailing window for sleep and play, in days (including today)
    window_days: int = 7
    sleep_target_hours: float = 8.0
    play_target_minutes: float = 150.0

    default_steepness: float = 6.0

    strength_half_life_days: float = 14.0
    strength_base_per_plank: float = 15.0
    strength_max: float = 100.0
