"""
Snapshot assembly.

Runs the derivation steps in order: parse the log, reconcile the current
status, build the timeline, summarize streaks, then run every registered
score block over the input it consumes.
"""

from tracker.config import Settings
from tracker.log_parser import parse_log_entries
from tracker.models import SourceData, Snapshot
from tracker.scoring import (
    compute_srs_retention,
    compute_health_urgency,
    compute_sleep_score,
    compute_play_score,
    compute_strength,
)
from tracker.status import reconcile
from tracker.streaks import compute_summary
from tracker.timeline import build_timeline


# (snapshot key, SourceData attribute, scorer)
SCORE_BLOCKS = (
    ('srs', 'srs_items', compute_srs_retention),
    ('health', 'checkups', compute_health_urgency),
    ('sleep', 'sleep_entries', compute_sleep_score),
    ('play', 'play_entries', compute_play_score),
)


def compute_scores(sources: SourceData, today: str, settings: Settings) -> dict:
    scores = {}
    for key, attribute, scorer in SCORE_BLOCKS:
        scores[key] = scorer(getattr(sources, attribute), today, settings)
    return scores


def build_snapshot(
    sources: SourceData,
    today: str,
    generated_at: str,
    settings: Settings = Settings()
) -> Snapshot:
    """
    Derive the full snapshot from loaded inputs.

    today and generated_at are captured once by the caller; nothing here
    reads the clock.
    """
    entries = reconcile(parse_log_entries(sources.log_text), sources.status, today)
    days = build_timeline(entries, today)

    scores = compute_scores(sources, today, settings)
    scores['strength'] = compute_strength(days, today, settings)

    return Snapshot(
        generated_at=generated_at,
        current_status=sources.status.raw,
        start=days[0].date,
        end=days[-1].date,
        summary=compute_summary(days, today),
        days=days,
        scores=scores
    )
