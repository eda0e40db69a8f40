from tracker.dates import shift_days
from tracker.models import DayRecord
from tracker.timeline import build_timeline, timeline_bounds


def record(date, status, did_plank=False, keeps_streak=False, source='log'):
    return DayRecord(date=date, status=status, did_plank=did_plank, keeps_streak=keeps_streak, source=source)


def test_gaps_are_filled_with_missed_and_future():
    entries = {
        '2024-01-01': record('2024-01-01', 'done', True, True),
        '2024-01-04': record('2024-01-04', 'done', True, True),
    }

    days = build_timeline(entries, '2024-01-02')

    assert [(d.date, d.status, d.source) for d in days] == [
        ('2024-01-01', 'done', 'log'),
        ('2024-01-02', 'missed', 'derived'),
        ('2024-01-03', 'future', 'derived'),
        ('2024-01-04', 'done', 'log'),
    ]
    assert [d.is_future for d in days] == [False, False, True, True]
    assert days[1].keeps_streak is False
    assert days[2].keeps_streak is True
    assert days[2].did_plank is False


def test_no_entries_yields_only_today():
    days = build_timeline({}, '2024-06-01')

    assert len(days) == 1
    assert days[0].date == '2024-06-01'
    assert days[0].status == 'missed'
    assert days[0].source == 'derived'


def test_range_includes_today_when_all_entries_are_later():
    entries = {'2024-06-05': record('2024-06-05', 'done', True, True)}

    assert timeline_bounds(entries, '2024-06-01') == ('2024-06-01', '2024-06-05')
    assert build_timeline(entries, '2024-06-01')[0].date == '2024-06-01'


def test_range_extends_past_today_to_latest_entry():
    entries = {'2024-05-20': record('2024-05-20', 'rest', False, True)}

    days = build_timeline(entries, '2024-06-01')

    assert days[0].date == '2024-05-20'
    assert days[-1].date == '2024-06-01'


def test_timeline_is_contiguous_sorted_and_unique():
    entries = {
        d: record(d, 'done', True, True)
        for d in ['2024-02-27', '2024-03-02', '2024-02-29', '2024-03-10']
    }

    days = build_timeline(entries, '2024-03-05')
    dates = [d.date for d in days]

    assert dates[0] == '2024-02-27'
    assert dates[-1] == '2024-03-10'
    assert len(dates) == len(set(dates))
    for earlier, later in zip(dates, dates[1:]):
        assert shift_days(earlier, 1) == later


def test_input_records_are_not_mutated():
    entry = record('2024-01-05', 'done', True, True)

    days = build_timeline({'2024-01-05': entry}, '2024-01-01')

    assert days[-1].is_future is True
    assert entry.is_future is False
