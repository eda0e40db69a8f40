import json

import pytest

from tracker.config import EMPTY_LOG, Settings, SOURCE_DIR_ENV
from tracker.data_loader import (
    DEFAULT_SOURCE_DIRS,
    HEALTH_OPTIONAL_FIELDS,
    HEALTH_REQUIRED_FIELDS,
    MissingSourceError,
    PLAY_REQUIRED_FIELDS,
    SLEEP_REQUIRED_FIELDS,
    SRS_REQUIRED_FIELDS,
    candidate_dirs,
    load_log,
    load_records,
    load_sources,
    load_status,
    resolve_input_dir,
)


TODAY = '2024-01-03'


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run from an empty working directory with no source env var."""
    workdir = tmp_path / 'work' / 'site'
    workdir.mkdir(parents=True)
    monkeypatch.chdir(workdir)
    monkeypatch.delenv(SOURCE_DIR_ENV, raising=False)
    return tmp_path


def write_json(path, data):
    path.write_text(json.dumps(data), encoding='utf-8')


class TestResolveInputDir:

    def test_explicit_dir_with_log_only(self, isolated):
        source = isolated / 'source'
        source.mkdir()
        (source / 'plank-log.md').write_text('# Plank Log\n')

        assert resolve_input_dir(str(source)) == source

    def test_env_var_is_used(self, isolated, monkeypatch):
        source = isolated / 'from-env'
        source.mkdir()
        write_json(source / 'plank-status.json', {'date': TODAY, 'confirmed': True})
        monkeypatch.setenv(SOURCE_DIR_ENV, str(source))

        assert resolve_input_dir() == source

    def test_explicit_dir_without_inputs_falls_through(self, isolated):
        (isolated / 'empty').mkdir()
        data = isolated / 'work' / 'site' / 'data'
        data.mkdir()
        (data / 'plank-log.md').write_text('# Plank Log\n')

        assert resolve_input_dir(str(isolated / 'empty')).resolve() == data.resolve()

    def test_missing_everywhere_lists_tried_locations(self, isolated):
        with pytest.raises(MissingSourceError) as exc_info:
            resolve_input_dir(str(isolated / 'nowhere'))

        message = str(exc_info.value)
        assert 'Tried:' in message
        assert 'nowhere' in message
        assert 'openclaw-arya' in message
        assert isinstance(exc_info.value, FileNotFoundError)

    def test_defaults_include_grandparent_checkout(self, isolated):
        tried = [str(p) for p in candidate_dirs()]

        assert tried == list(DEFAULT_SOURCE_DIRS)
        assert '../../openclaw-arya' in tried


class TestLoadStatus:

    def test_missing_file_defaults_to_unconfirmed_today(self, tmp_path):
        status = load_status(tmp_path / 'plank-status.json', TODAY)

        assert status.raw == {'date': TODAY, 'confirmed': False}
        assert status.confirmed is False

    def test_malformed_json_falls_back(self, tmp_path, capsys):
        path = tmp_path / 'plank-status.json'
        path.write_text('{"date": "2024-01-03", "confirmed": tru')

        status = load_status(path, TODAY)

        assert status.raw == {'date': TODAY, 'confirmed': False}
        assert 'Warning' in capsys.readouterr().out

    def test_undecodable_bytes_fall_back(self, tmp_path, capsys):
        path = tmp_path / 'plank-status.json'
        path.write_bytes(b'{"date": "2024-01-03", "confirmed": \xff}')

        status = load_status(path, TODAY)

        assert status.raw == {'date': TODAY, 'confirmed': False}
        assert 'Warning' in capsys.readouterr().out

    def test_non_object_falls_back(self, tmp_path):
        path = tmp_path / 'plank-status.json'
        write_json(path, ['2024-01-03'])

        assert load_status(path, TODAY).date == TODAY

    def test_valid_record(self, tmp_path):
        path = tmp_path / 'plank-status.json'
        write_json(path, {'date': '2024-01-02', 'confirmed': True, 'time': 'Rest day'})

        status = load_status(path, TODAY)

        assert status.date == '2024-01-02'
        assert status.confirmed is True


def test_missing_log_is_empty_log(tmp_path):
    assert load_log(tmp_path / 'plank-log.md') == EMPTY_LOG


class TestLoadRecords:

    def test_missing_file_is_empty(self, tmp_path):
        assert load_records(tmp_path / 'sleep-log.json', SLEEP_REQUIRED_FIELDS, 'Sleep') == []

    def test_invalid_records_are_skipped_with_warning(self, tmp_path, capsys):
        path = tmp_path / 'sleep-log.json'
        write_json(path, [
            {'date': '2024-01-01', 'hours': 7.5},
            {'date': '2024-01-02'},
            {'date': '2024-01-03', 'hours': '8'},
            {'date': '2024-01-04', 'hours': 30},
            'eight hours',
            {'date': 'whenever', 'hours': 6},
        ])

        records = load_records(path, SLEEP_REQUIRED_FIELDS, 'Sleep')

        assert [r['hours'] for r in records] == [7.5, 6]
        out = capsys.readouterr().out
        assert 'Skipped 4 invalid sleep record(s)' in out
        assert 'Record 1: Sleep record 1: Missing required fields: hours' in out

    def test_boolean_is_not_a_number(self, tmp_path):
        path = tmp_path / 'play-log.json'
        write_json(path, [{'date': '2024-01-01', 'minutes': True}])

        assert load_records(path, PLAY_REQUIRED_FIELDS, 'Play') == []

    def test_non_finite_numbers_are_skipped(self, tmp_path, capsys):
        path = tmp_path / 'health-checkups.json'
        path.write_text(
            '[{"lastCompleted": "2024-01-01", "intervalDays": 30, "steepness": NaN},'
            ' {"intervalDays": Infinity},'
            ' {"name": "eyes", "intervalDays": 365, "steepness": 4}]'
        )

        records = load_records(path, HEALTH_REQUIRED_FIELDS, 'Health', HEALTH_OPTIONAL_FIELDS)

        assert [r['name'] for r in records] == ['eyes']
        assert 'Skipped 2 invalid health record(s)' in capsys.readouterr().out

    def test_infinite_stability_is_skipped(self, tmp_path):
        path = tmp_path / 'srs-items.json'
        path.write_text('[{"lastReview": "2024-01-01", "stability": Infinity}]')

        assert load_records(path, SRS_REQUIRED_FIELDS, 'SRS') == []

    def test_invalid_json_raises_value_error(self, tmp_path):
        path = tmp_path / 'play-log.json'
        path.write_text('[{"date": ')

        with pytest.raises(ValueError, match='Invalid JSON'):
            load_records(path, PLAY_REQUIRED_FIELDS, 'Play')

    def test_top_level_object_raises_type_error(self, tmp_path):
        path = tmp_path / 'play-log.json'
        write_json(path, {'entries': []})

        with pytest.raises(TypeError):
            load_records(path, PLAY_REQUIRED_FIELDS, 'Play')


def test_load_sources_validates_each_kind(tmp_path):
    (tmp_path / 'plank-log.md').write_text('## 2024-01-01\n**Status:** Done\n')
    write_json(tmp_path / 'srs-items.json', [{'id': 1, 'stability': 4}, {'id': 2, 'stability': 0}])
    write_json(tmp_path / 'health-checkups.json', [
        {'name': 'eyes', 'intervalDays': 365, 'steepness': None},
        {'name': 'teeth', 'intervalDays': 180, 'steepness': 'steep'},
    ])
    write_json(tmp_path / 'play-log.json', [{'date': '2024-01-01', 'minutes': 30, 'hours': 'n/a'}])

    sources = load_sources(tmp_path, TODAY, Settings())

    assert sources.log_text.startswith('## 2024-01-01')
    assert sources.status.raw == {'date': TODAY, 'confirmed': False}
    assert [item['id'] for item in sources.srs_items] == [1]
    assert [c['name'] for c in sources.checkups] == ['eyes']
    assert sources.sleep_entries == []
    assert len(sources.play_entries) == 1
