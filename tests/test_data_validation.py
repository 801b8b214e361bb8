"""Tests for parsing untyped records into diary entries."""

from datetime import date, datetime

import pandas as pd
import pytest
from pydantic import ValidationError

from diary_metrics.core.models.data_models import DiaryEntry
from diary_metrics.utils.data_validation import (
    DiaryEntryValidationError,
    load_diary_csv,
    parse_diary_entries,
    parse_diary_entry,
    parse_diary_frame,
)


def record(**overrides):
    base = {'id': 'e1', 'date': '2026-01-05', 'se': 88, 'tst': 400, 'quality_rating': 4}
    base.update(overrides)
    return base


class TestParseDiaryEntry:
    def test_valid_record(self):
        entry = parse_diary_entry(record(ttb='2026-01-05T23:00:00Z'))
        assert entry.id == 'e1'
        assert entry.date == date(2026, 1, 5)
        assert entry.se == 88
        assert entry.quality_rating == 4
        assert isinstance(entry.ttb, datetime)

    def test_missing_measures_are_none(self):
        entry = parse_diary_entry({'id': 'e2', 'date': '2026-01-06'})
        assert entry.tst is None
        assert entry.quality_rating is None
        assert entry.tob is None

    def test_numeric_strings_are_coerced(self):
        entry = parse_diary_entry(record(se='91.5', sol=''))
        assert entry.se == 91.5
        assert entry.sol is None

    def test_integer_id_is_stringified(self):
        assert parse_diary_entry(record(id=17)).id == '17'

    def test_non_numeric_measure_rejected(self):
        with pytest.raises(DiaryEntryValidationError, match="'se' must be numeric"):
            parse_diary_entry(record(se='high'), index=3)

    def test_boolean_measure_rejected(self):
        with pytest.raises(DiaryEntryValidationError):
            parse_diary_entry(record(tst=True))

    def test_out_of_range_rejected(self):
        with pytest.raises(DiaryEntryValidationError, match='se') as exc_info:
            parse_diary_entry(record(se=140), index=2)
        assert exc_info.value.index == 2
        assert exc_info.value.errors

    def test_quality_out_of_range_rejected(self):
        with pytest.raises(DiaryEntryValidationError, match='quality_rating'):
            parse_diary_entry(record(quality_rating=7))

    def test_fractional_quality_rejected(self):
        with pytest.raises(DiaryEntryValidationError, match='quality_rating'):
            parse_diary_entry(record(quality_rating=3.5))

    def test_bad_date_rejected(self):
        with pytest.raises(DiaryEntryValidationError, match='date'):
            parse_diary_entry(record(date='yesterday'))

    def test_not_a_mapping(self):
        with pytest.raises(DiaryEntryValidationError):
            parse_diary_entry(['e1', '2026-01-05'])

    @pytest.mark.parametrize('value', ['inf', '-inf', '1e400', 'nan', float('inf')])
    def test_non_finite_measure_rejected(self, value):
        with pytest.raises(DiaryEntryValidationError, match="'tst' must be a finite number"):
            parse_diary_entry(record(tst=value), index=4)

    def test_overflowing_integer_rejected(self):
        with pytest.raises(DiaryEntryValidationError, match='finite'):
            parse_diary_entry(record(waso=10 ** 400))

    def test_model_rejects_infinity(self):
        with pytest.raises(ValidationError):
            DiaryEntry(id='e1', date=date(2026, 1, 5), tib=float('inf'))

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_diary_entry(record(se='n/a'))


class TestParseDiaryEntries:
    def test_raise_mode_stops_on_first_invalid(self):
        with pytest.raises(DiaryEntryValidationError, match='Diary record 1'):
            parse_diary_entries([record(), record(id='e2', se='bad'), record(id='e3')])

    def test_filter_mode_skips_invalid(self, caplog):
        entries = parse_diary_entries(
            [record(), record(id='e2', se='bad'), record(id='e3')],
            error_handling='filter',
        )
        assert [e.id for e in entries] == ['e1', 'e3']
        assert 'Skipping invalid diary record' in caplog.text

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match='error_handling'):
            parse_diary_entries([], error_handling='warn')


class TestParseFrames:
    def test_frame_with_nan_and_float_ratings(self):
        frame = pd.DataFrame({
            'id': ['a', 'b'],
            'date': ['2026-01-05', '2026-01-06'],
            'se': [88.0, float('nan')],
            'quality_rating': [4.0, float('nan')],
        })
        entries = parse_diary_frame(frame)
        assert entries[0].quality_rating == 4
        assert isinstance(entries[0].quality_rating, int)
        assert entries[1].se is None
        assert entries[1].quality_rating is None

    def test_load_csv(self, tmp_path):
        path = tmp_path / 'diary.csv'
        path.write_text(
            'id,date,tst,tib,se,sol,quality_rating,ttb\n'
            '1,2026-01-05,400,450,88.9,15,4,2026-01-05T23:00:00Z\n'
            '2,2026-01-06,,,,,,\n'
        )
        entries = load_diary_csv(path)
        assert len(entries) == 2
        assert entries[0].id == '1'
        assert entries[0].se == 88.9
        assert entries[1].tst is None
        assert entries[1].ttb is None

    def test_load_csv_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_diary_csv(tmp_path / 'missing.csv')
