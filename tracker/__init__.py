"""Tracker package for the personal tracker snapshot.

This package contains the core modules: models, config, dates, log_parser,
status, timeline, streaks, scoring, pipeline, data_loader, reporter.
"""

__all__ = [
    'models',
    'config',
    'dates',
    'log_parser',
    'status',
    'timeline',
    'streaks',
    'scoring',
    'pipeline',
    'data_loader',
    'reporter'
]
