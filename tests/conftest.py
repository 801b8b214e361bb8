"""Shared fixtures for the diary metrics tests."""

from datetime import date, timedelta

import pytest

from diary_metrics.core.models.data_models import DiaryEntry

AS_OF = date(2026, 1, 14)


def make_entry(day, **measures):
    return DiaryEntry(id=f"entry-{day.isoformat()}", date=day, **measures)


@pytest.fixture
def entry_factory():
    return make_entry


@pytest.fixture
def two_weeks_of_entries():
    """Baseline week, a previous week and a current week with gaps."""
    baseline_start = AS_OF - timedelta(days=27)
    baseline = [
        make_entry(baseline_start + timedelta(days=i), se=75, tst=360, tib=480, sol=45, quality_rating=2)
        for i in range(7)
    ]
    previous_start = AS_OF - timedelta(days=13)
    previous = [
        make_entry(previous_start + timedelta(days=i), se=80, tst=380, tib=475, sol=30, quality_rating=3)
        for i in range(7)
    ]
    current_start = AS_OF - timedelta(days=6)
    current = [
        make_entry(current_start + timedelta(days=i), se=se, tst=400, tib=450, sol=15, quality_rating=4)
        for i, se in enumerate([88, 92, None, 85, 90])
    ]
    return baseline + previous + current
