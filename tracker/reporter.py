"""
Reporting and output functions module.

This module handles all display and output operations:
- Printing the streak summary
- Printing the day timeline
- Printing the score blocks
- Generating the JSON snapshot
- Saving JSON to file atomically
"""

import json
import os
import tempfile
from pathlib import Path
from tracker.models import DayRecord, Snapshot, Summary


STATUS_MARKERS = {
    'done': '[x]',
    'rest': '[~]',
    'pending': '[?]',
    'missed': '[ ]',
    'unknown': '[ ]',
    'future': ' . ',
}


def print_summary(snapshot: Snapshot):
    """Print streak statistics for the run."""
    summary = snapshot.summary
    print("\n" + "=" * 70)
    print("STREAK SUMMARY")
    print("=" * 70)

    print(f"\n  Date range:     {snapshot.start} -> {snapshot.end}")
    print(f"  Current streak: {summary.current_streak} day(s)")
    print(f"  Longest streak: {summary.longest_streak} day(s)")
    print(f"  Total planks:   {summary.total_planks}")
    print(f"  Tracked days:   {summary.tracked_days}")


def print_timeline(days: list[DayRecord]):
    """Print the per-day timeline in a readable format."""
    print("\n" + "=" * 70)
    print("DAY TIMELINE")
    print("=" * 70 + "\n")

    for day in days:
        marker = STATUS_MARKERS.get(day.status, '[ ]')
        note = f"  ({day.note})" if day.note else ""
        print(f"  {day.date} {marker} {day.status:<8} from {day.source}{note}")


def print_scores(scores: dict):
    """Print the score blocks."""
    print("\n" + "=" * 70)
    print("SCORES")
    print("=" * 70 + "\n")

    srs = scores['srs']
    print(f"  SRS retention:  {srs['aggregateRetention']}% over {len(srs['items'])} item(s)")

    health = scores['health']
    print(f"  Health score:   {health['aggregateScore']} over {len(health['checkups'])} checkup(s)")
    for checkup in health['checkups']:
        if checkup['urgency'] >= 0.5:
            name = checkup.get('name') or checkup.get('id') or 'checkup'
            print(f"      - {name}: urgency {checkup['urgency']:.3f}")

    sleep = scores['sleep']
    print(f"  Sleep score:    {sleep['aggregateScore']} "
          f"({sleep['avgHours']} hrs avg, {sleep['loggedDays']} day(s) logged)")

    play = scores['play']
    print(f"  Play score:     {play['aggregateScore']} "
          f"({play['totalMinutes']} min, {play['activeDays']} active day(s))")

    strength = scores['strength']
    last = strength['daysSinceLastPlank']
    last_text = "no planks yet" if last is None else f"last plank {last} day(s) ago"
    print(f"  Strength:       {strength['value']} ({last_text})")


def day_to_json(day: DayRecord) -> dict:
    return {
        "date": day.date,
        "status": day.status,
        "didPlank": day.did_plank,
        "keepsStreak": day.keeps_streak,
        "isFuture": day.is_future,
        "note": day.note,
        "source": day.source
    }


def summary_to_json(summary: Summary) -> dict:
    return {
        "currentStreak": summary.current_streak,
        "longestStreak": summary.longest_streak,
        "totalPlanks": summary.total_planks,
        "trackedDays": summary.tracked_days
    }


def generate_json_output(snapshot: Snapshot) -> dict:
    """
    Generate the dashboard JSON document from an assembled snapshot.
    """
    output = {
        "generatedAt": snapshot.generated_at,
        "currentStatus": snapshot.current_status,
        "dateRange": {
            "start": snapshot.start,
            "end": snapshot.end
        },
        "summary": summary_to_json(snapshot.summary),
        "days": [day_to_json(day) for day in snapshot.days]
    }
    output.update(snapshot.scores)

    return output


def save_json_output(output: dict, filepath: str):
    """
    Save the snapshot to a JSON file.

    The document is written to a temporary file beside the target and then
    renamed over it, so readers never see a partial file.
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=str(path.parent), suffix='.tmp')
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(output, f, indent=2)
            f.write('\n')
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    print(f"JSON output saved to: {filepath}")
