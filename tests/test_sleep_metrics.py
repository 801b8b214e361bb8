"""Tests for weekly aggregation of diary entries."""

import random
from datetime import date, timedelta

import numpy as np
import pandas as pd
import pytest

from diary_metrics.core.analysis.sleep_metrics import summarize, summarize_frame
from diary_metrics.core.reporting.formatters import completion_rate
from diary_metrics.utils.data_validation import DiaryEntryValidationError

START = date(2026, 1, 5)
AVG_FIELDS = ['avg_tst', 'avg_tib', 'avg_se', 'avg_sol', 'avg_waso', 'avg_ema', 'avg_twt', 'avg_quality']


class TestSummarize:
    def test_empty_window(self):
        summary = summarize([])
        assert summary.days_logged == 0
        assert summary.total_days == 7
        for field in AVG_FIELDS:
            assert getattr(summary, field) is None

    def test_five_of_seven_days(self, entry_factory):
        entries = [
            entry_factory(START + timedelta(days=i), se=se)
            for i, se in enumerate([88, 92, None, 85, 90])
        ]
        summary = summarize(entries, total_days=7)
        assert summary.avg_se == 88.8
        assert summary.days_logged == 5
        assert summary.total_days == 7
        assert completion_rate(summary.days_logged, summary.total_days) == 71
        assert summary.completion_rate == 71

    def test_avg_is_none_only_when_every_value_missing(self, entry_factory):
        entries = [
            entry_factory(START, tst=400, sol=None),
            entry_factory(START + timedelta(days=1), tst=None, sol=None),
        ]
        summary = summarize(entries)
        assert summary.avg_tst == 400.0
        assert summary.avg_sol is None

    def test_days_logged_counts_entries_with_no_measures(self, entry_factory):
        entries = [entry_factory(START + timedelta(days=i)) for i in range(3)]
        summary = summarize(entries)
        assert summary.days_logged == 3
        assert summary.avg_se is None

    def test_order_invariant(self, entry_factory):
        entries = [
            entry_factory(START + timedelta(days=i), se=80 + i * 1.7, tst=300 + i * 13.3, quality_rating=1 + i % 5)
            for i in range(7)
        ]
        shuffled = entries[:]
        random.Random(7).shuffle(shuffled)
        assert summarize(shuffled) == summarize(entries)

    def test_all_measures_averaged(self, entry_factory):
        entries = [
            entry_factory(START, tst=400, tib=480, se=88, sol=20, waso=30, ema=10, twt=60, quality_rating=3),
            entry_factory(START + timedelta(days=1), tst=420, tib=470, se=88.5, sol=10, waso=25, ema=5, twt=40,
                          quality_rating=4),
        ]
        summary = summarize(entries)
        assert summary.avg_tst == 410.0
        assert summary.avg_tib == 475.0
        assert summary.avg_se == 88.3  # 88.25 rounds away from zero
        assert summary.avg_sol == 15.0
        assert summary.avg_waso == 27.5
        assert summary.avg_ema == 7.5
        assert summary.avg_twt == 50.0
        assert summary.avg_quality == 3.5

    def test_total_days_not_checked_against_entries(self, entry_factory):
        entries = [entry_factory(START + timedelta(days=i), se=90) for i in range(9)]
        summary = summarize(entries, total_days=7)
        assert summary.days_logged == 9
        assert summary.total_days == 7

    def test_camel_case_serialization(self, entry_factory):
        summary = summarize([entry_factory(START, se=90)])
        dumped = summary.model_dump(by_alias=True)
        assert dumped['avgSe'] == 90.0
        assert dumped['daysLogged'] == 1
        assert dumped['totalDays'] == 7


class TestSummarizeFrame:
    def test_nan_is_missing(self):
        frame = pd.DataFrame({
            'id': ['a', 'b', 'c', 'd', 'e'],
            'date': ['2026-01-05', '2026-01-06', '2026-01-07', '2026-01-08', '2026-01-09'],
            'se': [88, 92, np.nan, 85, 90],
        })
        summary = summarize_frame(frame)
        assert summary.avg_se == 88.8
        assert summary.days_logged == 5

    def test_missing_columns_are_none(self):
        frame = pd.DataFrame({'id': ['a'], 'date': ['2026-01-05'], 'tst': [400]})
        summary = summarize_frame(frame, total_days=1)
        assert summary.avg_tst == 400.0
        assert summary.avg_se is None
        assert summary.avg_quality is None
        assert summary.total_days == 1

    def test_matches_entry_summary(self, entry_factory):
        entries = [
            entry_factory(START + timedelta(days=i), se=se, sol=sol)
            for i, (se, sol) in enumerate([(88, 30), (92, None), (None, 12), (85, 20)])
        ]
        frame = pd.DataFrame([e.model_dump() for e in entries])
        assert summarize_frame(frame) == summarize(entries)

    def test_numeric_strings_are_coerced(self):
        frame = pd.DataFrame({'id': ['a', 'b'], 'date': ['2026-01-05', '2026-01-06'], 'se': ['90', '85.5']})
        assert summarize_frame(frame).avg_se == 87.8

    def test_out_of_range_cells_rejected(self):
        frame = pd.DataFrame({
            'id': ['a', 'b'],
            'date': ['2026-01-05', '2026-01-06'],
            'se': ['140', 80],
            'quality_rating': [9, 3],
        })
        with pytest.raises(DiaryEntryValidationError, match='Diary record 0'):
            summarize_frame(frame)

    def test_boolean_cells_rejected(self):
        frame = pd.DataFrame({'id': ['a', 'b'], 'date': ['2026-01-05', '2026-01-06'], 'se': [80, True]})
        with pytest.raises(DiaryEntryValidationError, match='boolean'):
            summarize_frame(frame)

    def test_non_numeric_cells_rejected(self):
        frame = pd.DataFrame({'id': ['a'], 'date': ['2026-01-05'], 'se': ['high']})
        with pytest.raises(DiaryEntryValidationError, match="'se' must be numeric"):
            summarize_frame(frame)

    def test_infinite_cells_rejected(self):
        frame = pd.DataFrame({'id': ['a'], 'date': ['2026-01-05'], 'tst': [np.inf]})
        with pytest.raises(DiaryEntryValidationError, match='finite'):
            summarize_frame(frame)

    def test_filter_mode_drops_invalid_rows(self):
        frame = pd.DataFrame({
            'id': ['a', 'b', 'c'],
            'date': ['2026-01-05', '2026-01-06', '2026-01-07'],
            'se': [90, 'high', 80],
        })
        summary = summarize_frame(frame, error_handling='filter')
        assert summary.avg_se == 85.0
        assert summary.days_logged == 2
