"""
Personal Tracker Snapshot - Main Module
=======================================

Builds the JSON snapshot behind the plank / SRS / health / sleep / play
dashboard from a folder of personal tracking logs.

Key Design Decisions:
1. "Today" is captured once, in UTC, at the start of a run and passed to
   every step, so streaks, windows and urgency agree with each other
2. The plank log and the live status file are merged into one record per
   calendar day before any statistics are computed
3. Missing inputs become empty inputs; only a missing source folder is fatal
4. The output file is replaced atomically, never written in place

This module serves as the CLI entry point and orchestrates the workflow by
importing functions and classes from the tracker package.
"""

import argparse
from dataclasses import replace
from datetime import datetime
from zoneinfo import ZoneInfo

from tracker.config import Settings, DEFAULT_OUTPUT, SOURCE_DIR_ENV
from tracker.data_loader import resolve_input_dir, load_sources
from tracker.dates import is_iso_date
from tracker.pipeline import build_snapshot
from tracker.reporter import (
    print_summary,
    print_timeline,
    print_scores,
    generate_json_output,
    save_json_output
)


# =============================================================================
# CLI INTERFACE
# =============================================================================

def iso_date_arg(value: str) -> str:
    if not is_iso_date(value):
        raise argparse.ArgumentTypeError(f"expected a date as YYYY-MM-DD, got {value!r}")
    return value


def create_parser():
    """Create and return the argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog='Personal Tracker Snapshot',
        description='Builds the dashboard JSON snapshot from plank, SRS, health, sleep and play logs.',
        epilog='Example: python main.py --source ~/openclaw-arya --output public/plank-data.json --show-summary',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--source',
        type=str,
        default=None,
        help=f'Folder holding plank-log.md and plank-status.json (default: ${SOURCE_DIR_ENV}, then ./data, then ../openclaw-arya)'
    )

    parser.add_argument(
        '--output',
        type=str,
        default=DEFAULT_OUTPUT,
        help=f'Output file path for the JSON snapshot (default: {DEFAULT_OUTPUT})'
    )

    parser.add_argument(
        '--today',
        type=iso_date_arg,
        default=None,
        help='Run as if today were this UTC date, YYYY-MM-DD (default: current UTC date)'
    )

    parser.add_argument(
        '--window-days',
        type=int,
        default=Settings.window_days,
        help=f'Trailing window for sleep and play scores (default: {Settings.window_days})'
    )

    parser.add_argument(
        '--sleep-target',
        type=float,
        default=Settings.sleep_target_hours,
        help=f'Target hours of sleep per night (default: {Settings.sleep_target_hours:g})'
    )

    parser.add_argument(
        '--play-target',
        type=float,
        default=Settings.play_target_minutes,
        help=f'Target active minutes per window (default: {Settings.play_target_minutes:g})'
    )

    parser.add_argument(
        '--show-summary',
        action='store_true',
        help='Print streak summary to console (default: False)'
    )

    parser.add_argument(
        '--show-timeline',
        action='store_true',
        help='Print the per-day timeline (default: False)'
    )

    parser.add_argument(
        '--show-scores',
        action='store_true',
        help='Print SRS, health, sleep, play and strength scores (default: False)'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Show all outputs (summary, timeline, scores)'
    )

    return parser


def main(argv=None):
    """Main entry point for the application."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.window_days < 1:
        parser.error('--window-days must be at least 1')
    if args.sleep_target <= 0 or args.play_target <= 0:
        parser.error('--sleep-target and --play-target must be positive')

    settings = replace(
        Settings(),
        window_days=args.window_days,
        sleep_target_hours=args.sleep_target,
        play_target_minutes=args.play_target
    )

    # Captured once; every step of the run uses the same date
    now = datetime.now(ZoneInfo('UTC'))
    today = args.today or now.date().isoformat()
    generated_at = now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')

    print("\nPersonal Tracker Snapshot")
    print("=" * 70)

    try:
        # Load data
        print("\nLoading data...")
        input_dir = resolve_input_dir(args.source, settings)
        print(f"  Source folder: {input_dir}")
        sources = load_sources(input_dir, today, settings)
        print(f"  Loaded {len(sources.srs_items)} SRS items, {len(sources.checkups)} checkups, "
              f"{len(sources.sleep_entries)} sleep and {len(sources.play_entries)} play records")

        # Build snapshot
        print(f"\nBuilding snapshot for {today} (UTC)...")
        snapshot = build_snapshot(sources, today, generated_at, settings)
        print(f"  Created {len(snapshot.days)} day records ({snapshot.start} -> {snapshot.end})")

        if args.verbose or args.show_summary:
            print_summary(snapshot)

        if args.verbose or args.show_timeline:
            print_timeline(snapshot.days)

        if args.verbose or args.show_scores:
            print_scores(snapshot.scores)

        # Generate and save JSON output
        print("\nGenerating JSON output...")
        save_json_output(generate_json_output(snapshot), args.output)

        print("\n" + "=" * 70)
        print("Snapshot complete!")
        print("=" * 70 + "\n")

    except FileNotFoundError as e:
        print(f"\nFile Error: {e}", flush=True)
        print("   Check that the source folder exists and contains the plank log or status file.\n", flush=True)
        return 1
    except (KeyError, TypeError) as e:
        print(f"\nData Structure Error: {e}", flush=True)
        print("   SRS, health, sleep and play files must each contain a JSON array of objects.\n", flush=True)
        return 1
    except ValueError as e:
        print(f"\nData Validation Error: {e}", flush=True)
        print("   Check your input data for invalid JSON or incorrect formats.\n", flush=True)
        return 1
    except Exception as e:
        print(f"\nUnexpected error: {e}\n", flush=True)
        return 1

    return 0


if __name__ == '__main__':
    exit(main())
